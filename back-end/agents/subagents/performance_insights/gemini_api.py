import asyncio
import logging
from typing import Optional

import requests
from google.genai import types

import config
from models.errors import MalformedRemoteResponse, RemoteTransportFailure

logger = logging.getLogger(__name__)


class GeminiAPIClient:
    """Single-shot client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = config.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or config.GEMINI_MODEL
        base = (base_url or config.GEMINI_API_BASE).rstrip("/")
        self.url = f"{base}/v1beta/models/{self.model}:generateContent"
        self.timeout = config.GEMINI_TIMEOUT_SECONDS if timeout is None else timeout
        self.session = session or requests.Session()

    @staticmethod
    def build_body(prompt: str) -> dict:
        content = types.Content(parts=[types.Part(text=prompt)])
        return {"contents": [content.model_dump(mode="json", exclude_none=True)]}

    def call_api(self, prompt: str) -> dict:
        """POST the prompt and return the decoded JSON object.

        Raises RemoteTransportFailure on network errors or non-2xx status and
        MalformedRemoteResponse when the body is not a JSON object.
        """
        try:
            resp = self.session.post(
                self.url,
                params={"key": self.api_key},
                json=self.build_body(prompt),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteTransportFailure(f"Request to {self.model} failed: {e}") from e

        if not resp.ok:
            raise RemoteTransportFailure(f"{self.model} responded with HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedRemoteResponse(f"{self.model} returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise MalformedRemoteResponse(f"{self.model} returned {type(data).__name__}, expected an object")
        return data

    async def generate_content(self, prompt: str) -> dict:
        return await asyncio.to_thread(self.call_api, prompt)


def extract_text(data: dict) -> Optional[str]:
    """Return candidates[0].content.parts[0].text, or None if any step is missing."""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) and text else None
