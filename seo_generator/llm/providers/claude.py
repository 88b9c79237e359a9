"""Claude provider placeholder.

Claude is a known, selectable provider whose integration is not written
yet. It satisfies the client interface and fails every call cleanly.
"""

from __future__ import annotations

from ...errors import ProviderNotImplementedError
from .base import ProviderClient


class ClaudeProvider(ProviderClient):
    async def generate(self, prompt: str) -> str:
        self._log_llm_response("not_implemented", prompt, "")
        raise ProviderNotImplementedError("Claude integration not implemented yet")
