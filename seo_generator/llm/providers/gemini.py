"""Google Gemini provider using the generateContent REST endpoint."""

from __future__ import annotations

from typing import Any

from .base import ProviderClient


class GeminiProvider(ProviderClient):
    """Gemini-backed client: one generateContent call, text from the first candidate."""

    async def generate(self, prompt: str) -> str:
        url = f"{self.descriptor.base_url}/v1beta/models/{self.descriptor.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.generation_cfg.temperature,
                "maxOutputTokens": self.generation_cfg.max_output_tokens,
            },
        }
        return await self._call(
            prompt,
            url,
            payload,
            _extract_text,
            params={"key": self.descriptor.api_key or ""},
        )


def _extract_text(data: dict[str, Any]) -> str | None:
    """Join the text parts of the first candidate.

    Thought parts are skipped unless they are the only parts present.
    """
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(parts, list):
        return None

    answer = [p.get("text", "") for p in parts if isinstance(p, dict) and not p.get("thought")]
    if any(answer):
        return "".join(answer)
    thoughts = [p.get("text", "") for p in parts if isinstance(p, dict)]
    if any(thoughts):
        return "".join(thoughts)
    return None
