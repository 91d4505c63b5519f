import asyncio
from typing import List, Optional

import pytest

from agents.agent import build_pipeline
from agents.context import EstimationContext
from models.schemas import EstimatorConstants, PhysicalInputs, RawInputs
from tools.notifications import CollectingNotifier


def gemini_payload(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeGeminiClient:
    """Stands in for GeminiAPIClient; each call pops the next scripted reply.

    A reply is a dict payload, an exception instance to raise, or a
    (asyncio.Event, reply) tuple that holds the call until the event is set.
    """

    def __init__(self, *replies, context: Optional[EstimationContext] = None):
        self.replies = list(replies)
        self.prompts: List[str] = []
        self.context = context
        self.states_seen = []

    async def generate_content(self, prompt: str) -> dict:
        self.prompts.append(prompt)
        if self.context is not None:
            self.states_seen.append(self.context.snapshot.insight.status)
        reply = self.replies.pop(0) if self.replies else gemini_payload("ok")
        if isinstance(reply, tuple):
            gate, reply = reply
            await gate.wait()
        else:
            await asyncio.sleep(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def reference_raw() -> RawInputs:
    return RawInputs(area="10", efficiency="18", irradiance="1000", hours="5", tariff="8")


@pytest.fixture
def reference_inputs() -> PhysicalInputs:
    return PhysicalInputs(area=10, efficiency=18, irradiance=1000, hours=5, tariff=8)


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()


@pytest.fixture
def context() -> EstimationContext:
    return EstimationContext()


@pytest.fixture
def make_pipeline(notifier):
    def _make(*replies):
        client = FakeGeminiClient(*replies)
        pipeline = build_pipeline(client=client, notifier=notifier, constants=EstimatorConstants())
        client.context = pipeline.context
        return pipeline, client
    return _make
