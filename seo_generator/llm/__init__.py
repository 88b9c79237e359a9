"""LLM providers, provider selection, prompts, normalization and tracing."""

from .normalizer import normalize, parse_structured, strip_code_fence
from .prompts import build_prompt
from .providers.base import ProviderClient
from .providers.factory import available_providers, create_client
from .registry import ProviderRegistry, ProviderSelector
from .tracing import flush, generation_span, provider_span, setup_langfuse, tracing_enabled

__all__ = [
    "ProviderClient",
    "ProviderRegistry",
    "ProviderSelector",
    "create_client",
    "available_providers",
    "build_prompt",
    "normalize",
    "parse_structured",
    "strip_code_fence",
    "setup_langfuse",
    "tracing_enabled",
    "generation_span",
    "provider_span",
    "flush",
]
