"""OpenAI chat-completions provider."""

from __future__ import annotations

from typing import Any

from .base import ProviderClient


class OpenAICompatibleProvider(ProviderClient):
    """Chat-completion client: a one-message conversation, text from the first choice.

    Works with any endpoint that implements the OpenAI ``/chat/completions``
    contract; point ``base_url`` at it.
    """

    async def generate(self, prompt: str) -> str:
        url = f"{self.descriptor.base_url}/chat/completions"
        payload = {
            "model": self.descriptor.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.generation_cfg.temperature,
            "max_tokens": self.generation_cfg.max_output_tokens,
        }
        headers = {"Authorization": f"Bearer {self.descriptor.api_key}"}
        return await self._call(prompt, url, payload, _extract_text, headers=headers)


def _extract_text(data: dict[str, Any]) -> str | None:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str):
        return None
    return content
