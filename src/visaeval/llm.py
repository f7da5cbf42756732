"""HTTP client for the generative model used by the AI-assisted evaluator."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any
from urllib import error, request

import structlog

from .errors import AIServiceUnavailable, MalformedAIResponse

_CHUNK_SIZE = 8192


@dataclass
class GeminiConfig:
    """Connection settings for the Gemini REST API."""

    model: str = "gemini-1.5-flash"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    timeout: float = 10.0
    temperature: float = 0.2


class GeminiClient:
    """Minimal HTTP client for Gemini ``generateContent``; one attempt, no retries."""

    def __init__(self, api_key: str | None = None, *, config: GeminiConfig | None = None):
        self._api_key = api_key
        self._config = config or GeminiConfig()
        self._logger = structlog.get_logger(__name__)

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise AIServiceUnavailable("not_configured", "Gemini API key not configured")

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self._config.temperature,
                "responseMimeType": "application/json",
            },
        }
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json", "x-goog-api-key": self._api_key}
        url = self._config.endpoint.format(model=self._config.model)

        req = request.Request(url, data=data, headers=headers, method="POST")
        deadline = time.monotonic() + self._config.timeout
        try:
            with request.urlopen(req, timeout=self._config.timeout) as resp:
                body = _read_within(resp, deadline).decode("utf-8")
        except TimeoutError as exc:
            self._logger.warning("llm.request_timeout", timeout=self._config.timeout)
            raise AIServiceUnavailable("timeout", "Gemini request timed out") from exc
        except error.URLError as exc:
            reason = "timeout" if isinstance(exc.reason, TimeoutError) else "unavailable"
            self._logger.warning("llm.request_failed", error=str(exc), reason=reason)
            raise AIServiceUnavailable(reason, str(exc)) from exc
        except OSError as exc:
            self._logger.warning("llm.request_failed", error=str(exc), reason="unavailable")
            raise AIServiceUnavailable("unavailable", str(exc)) from exc

        try:
            envelope = json.loads(body) if body else {}
        except json.JSONDecodeError as exc:
            raise MalformedAIResponse(f"Invalid Gemini envelope: {exc}") from exc
        return _candidate_text(envelope)


def _read_within(resp: Any, deadline: float) -> bytes:
    # The socket timeout bounds each read; the deadline bounds the whole body.
    chunks: list[bytes] = []
    while True:
        chunk = resp.read(_CHUNK_SIZE)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)
        if time.monotonic() > deadline:
            raise TimeoutError("Gemini response exceeded the request deadline")


def _candidate_text(envelope: dict[str, Any]) -> str:
    try:
        parts = envelope["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise MalformedAIResponse("Gemini response has no candidate text") from exc


__all__ = ["GeminiClient", "GeminiConfig"]
