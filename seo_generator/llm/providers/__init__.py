"""LLM provider implementations for content generation."""

from .base import ProviderClient
from .claude import ClaudeProvider
from .factory import available_providers, create_client
from .gemini import GeminiProvider
from .openai_compatible import OpenAICompatibleProvider

__all__ = [
    "ProviderClient",
    "GeminiProvider",
    "OpenAICompatibleProvider",
    "ClaudeProvider",
    "create_client",
    "available_providers",
]
