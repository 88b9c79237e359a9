"""
SEO Content Generator - multi-provider LLM content generation.

This package turns a topic into SEO artifacts (keywords, title, meta
description, long-form content) using one of several interchangeable LLM
providers, and records each generation to an append-only sink.

Main entry point is the CLI via the `seo-generator` command.

Example:
    $ seo-generator generate all -t "artificial intelligence in healthcare"
"""

__all__ = [
    "__version__",
    "GenerationOrchestrator",
    "ProviderRegistry",
    "ProviderSelector",
    "load_config",
]
__version__ = "0.1.0"

from .config import load_config
from .llm.registry import ProviderRegistry, ProviderSelector
from .orchestrator import GenerationOrchestrator
