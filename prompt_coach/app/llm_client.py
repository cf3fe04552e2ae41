"""
Minimal LLM client wrapper using Google Gemini.

Rationale:
- Use google-genai SDK (supported) for Gemini access.
- Keep interface tiny: generate(model, segments) -> str.
- No retries / no fallback.
"""

import logging
from functools import lru_cache
from typing import Protocol, Sequence

try:
    from google import genai
    from google.genai import types
except Exception as e:  # pragma: no cover
    raise RuntimeError(
        "Missing dependency for Gemini client. Install 'google-genai' and remove 'google-generativeai'. "
        "Original import error: " + str(e)
    )

logger = logging.getLogger(__name__)


class Provider(Protocol):
    async def generate(self, model: str, segments: Sequence[str]) -> str:
        ...


def _response_text(response) -> str:
    # Prefer the SDK's convenience property
    result = getattr(response, "text", None)
    if result:
        return result

    # Fallback: attempt to extract from candidates (SDK shape can vary across versions)
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise RuntimeError("Gemini returned no candidates.")

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) if content else None
    if parts:
        text0 = getattr(parts[0], "text", None)
        if text0:
            return text0

    raise RuntimeError("Gemini returned empty response")


@lru_cache(maxsize=4)
def _client_for(api_key: str):
    # One client (and HTTP pool) per key for the life of the process.
    return genai.Client(api_key=api_key)


class GeminiProvider:
    """Single-shot generate_content against the Gemini API."""

    def __init__(self, api_key: str):
        self._client = _client_for(api_key)

    async def generate(self, model: str, segments: Sequence[str]) -> str:
        contents = [
            types.Content(
                role="user",
                parts=[types.Part.from_text(text=segment) for segment in segments],
            )
        ]
        logger.debug("gemini.generate model=%s segments=%d", model, len(segments))
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
            )
            return _response_text(response)
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {str(e)}") from e
