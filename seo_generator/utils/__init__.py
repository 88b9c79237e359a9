"""
Shared utility functions.

This package contains logging helpers and text utilities used across
the generation core, the CLI and the record sink.
"""

from .logging import (
    JsonlFormatter,
    log_event,
    redact_text,
    setup_llm_logger,
    setup_logging,
    truncate_text,
)
from .text import short_hash, slugify

__all__ = [
    "setup_logging",
    "setup_llm_logger",
    "log_event",
    "redact_text",
    "truncate_text",
    "JsonlFormatter",
    "slugify",
    "short_hash",
]
