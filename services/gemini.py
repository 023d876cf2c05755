# services/gemini.py
from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import types, errors as gerrors

from core.errors import RateLimited, UpstreamError

_LOG = logging.getLogger(__name__)

# ───────────── Model Names ─────────────
CHAT_MODEL = "models/gemini-2.0-flash"

_QUOTA_STATUS = "RESOURCE_EXHAUSTED"


def is_rate_limited(exc: gerrors.APIError) -> bool:
    return exc.code == 429 or getattr(exc, "status", None) == _QUOTA_STATUS


class GeminiClient:
    """
    Async chat completion over the Gemini API.

    The SDK client is built on first use so the app can boot (and be
    tested) without a key; a missing key fails the call, not the import.
    """

    def __init__(self, api_key: str | None, model: str = CHAT_MODEL) -> None:
        self._api_key = api_key
        self._model = model
        self._client: genai.Client | None = None

    def _sdk(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise UpstreamError("GEMINI_API_KEY not set in environment")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    # ───────────── Generation (async) ─────────────
    async def generate(
        self,
        prompt: str,
        *,
        system: str,
        json_output: bool = False,
        temperature: float = 0.7,
        max_output_tokens: int = 2000,
    ) -> str | None:
        """Run a chat completion and return the LLM's text (None if empty)."""
        config = types.GenerateContentConfig(
            system_instruction=system,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_mime_type="application/json" if json_output else None,
        )
        try:
            resp = await self._sdk().aio.models.generate_content(
                model=self._model,
                contents=[prompt],
                config=config,
            )
        except gerrors.APIError as e:
            if is_rate_limited(e):
                _LOG.warning("Gemini quota/rate limit hit: %s", e)
                raise RateLimited(str(e)) from e
            _LOG.error("Gemini generation failed: %s", e)
            raise UpstreamError(f"Gemini error: {e}", status_text=getattr(e, "status", None)) from e
        except httpx.HTTPError as e:
            _LOG.error("Gemini unreachable: %s", e)
            raise UpstreamError(f"Gemini unreachable: {e}") from e
        return resp.text
