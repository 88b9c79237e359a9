"""Provider factory and registry for hot-swappable LLM backends."""

from __future__ import annotations

import logging

import httpx

from ...config import GenerationConfig, LoggingConfig
from ...core.types import ProviderDescriptor, ProviderTag
from ...errors import UnsupportedProviderError
from .base import ProviderClient
from .claude import ClaudeProvider
from .gemini import GeminiProvider
from .openai_compatible import OpenAICompatibleProvider


ProviderBuilder = type[ProviderClient]

_PROVIDER_REGISTRY: dict[ProviderTag, ProviderBuilder] = {
    ProviderTag.GEMINI: GeminiProvider,
    ProviderTag.OPENAI: OpenAICompatibleProvider,
    ProviderTag.CLAUDE: ClaudeProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider tags."""
    return sorted(tag.value for tag in _PROVIDER_REGISTRY)


def create_client(
    descriptor: ProviderDescriptor,
    generation_cfg: GenerationConfig,
    log_cfg: LoggingConfig | None = None,
    llm_logger: logging.Logger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProviderClient:
    """Build a client instance for a provider descriptor."""
    builder = _PROVIDER_REGISTRY.get(descriptor.tag)
    if builder is None:
        supported = ", ".join(available_providers())
        raise UnsupportedProviderError(
            f"Unsupported provider: {descriptor.tag}. Supported: {supported}"
        )
    return builder(descriptor, generation_cfg, log_cfg, llm_logger, transport)
