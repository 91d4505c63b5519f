import time

import pytest
from fastapi.testclient import TestClient

import main
from agents.agent import build_pipeline
from models.errors import RemoteTransportFailure
from models.schemas import EstimatorConstants
from tools.notifications import CollectingNotifier

from conftest import FakeGeminiClient, gemini_payload

REFERENCE = {"area": "10", "efficiency": "18", "irradiance": "1000", "hours": "5", "tariff": "8"}


@pytest.fixture
def fake_client():
    return FakeGeminiClient()


@pytest.fixture
def client(monkeypatch, fake_client):
    pipeline = build_pipeline(client=fake_client, notifier=CollectingNotifier(), constants=EstimatorConstants())
    monkeypatch.setattr(main, "pipeline", pipeline)
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.mark.integration
def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").status_code == 200


@pytest.mark.integration
def test_estimate_waits_for_insight(client, fake_client):
    fake_client.replies.append(gemini_payload("Clean the panels every two weeks."))

    resp = client.post("/api/estimate", json=REFERENCE)

    assert resp.status_code == 200
    data = resp.json()
    assert data["sequence"] == 1
    assert data["result"]["power_output"] == pytest.approx(1800)
    assert data["result"]["co2_savings"] == pytest.approx(195.075)
    assert data["insight"] == {"text": "Clean the panels every two weeks.", "source": "remote"}
    assert data["state"]["status"] == "resolved"
    assert data["notices"] == []


@pytest.mark.integration
def test_estimate_accepts_json_numbers(client):
    resp = client.post("/api/estimate", json={**REFERENCE, "area": 10, "tariff": 8.0})
    assert resp.status_code == 200
    assert resp.json()["result"]["savings"] == pytest.approx(1836)


@pytest.mark.integration
def test_missing_field_returns_422_without_remote_call(client, fake_client):
    resp = client.post("/api/estimate", json={**REFERENCE, "hours": ""})

    assert resp.status_code == 422
    data = resp.json()
    assert data["error"] == "missing_field"
    assert data["fields"] == ["hours"]
    assert data["notices"][0]["title"] == "Missing Information"
    assert fake_client.prompts == []
    assert client.get("/api/insight").json()["result"] is None


@pytest.mark.integration
def test_non_numeric_returns_422(client):
    resp = client.post("/api/estimate", json={**REFERENCE, "irradiance": "sunny"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "not_a_number"
    assert resp.json()["fields"] == ["irradiance"]


@pytest.mark.integration
def test_service_failure_still_returns_result(client, fake_client):
    fake_client.replies.append(RemoteTransportFailure("unreachable"))

    resp = client.post("/api/estimate", json=REFERENCE)

    assert resp.status_code == 200
    data = resp.json()
    assert data["result"]["monthly_energy"] == pytest.approx(229.5)
    assert data["insight"] == {"text": "Unable to connect to AI service.", "source": "fallback"}
    assert data["state"]["status"] == "failed"
    assert [n["title"] for n in data["notices"]] == ["AI Analysis Error"]


@pytest.mark.integration
def test_background_insight_can_be_polled(client, fake_client):
    fake_client.replies.append(gemini_payload("Use a higher-efficiency inverter."))

    resp = client.post("/api/estimate", params={"wait": "false"}, json=REFERENCE)

    assert resp.status_code == 200
    data = resp.json()
    assert data["insight"] is None
    assert data["state"]["status"] == "in_flight"

    snapshot = None
    for _ in range(20):
        snapshot = client.get("/api/insight").json()
        if snapshot["insight"]["status"] != "in_flight":
            break
        time.sleep(0.01)
    assert snapshot["sequence"] == data["sequence"]
    assert snapshot["insight"] == {"status": "resolved", "text": "Use a higher-efficiency inverter."}


@pytest.mark.integration
def test_background_failure_notice_stays_with_its_request(client, fake_client):
    fake_client.replies.extend([RemoteTransportFailure("unreachable"), gemini_payload("fine")])

    first = client.post("/api/estimate", params={"wait": "false"}, json=REFERENCE).json()
    assert first["notices"] == []

    snapshot = None
    for _ in range(20):
        snapshot = client.get("/api/insight").json()
        if snapshot["insight"]["status"] != "in_flight":
            break
        time.sleep(0.01)
    assert snapshot["sequence"] == first["sequence"]
    assert snapshot["insight"]["status"] == "failed"
    assert [n["title"] for n in snapshot["notices"]] == ["AI Analysis Error"]

    second = client.post("/api/estimate", json=REFERENCE).json()
    assert second["insight"] == {"text": "fine", "source": "remote"}
    assert second["notices"] == []
    assert client.get("/api/insight").json()["notices"] == []
