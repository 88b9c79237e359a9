"""
Core domain models.

This package contains data types that are independent of any specific
provider or caller.
"""

from .types import (
    AggregatedResult,
    GenerationKind,
    GenerationOutcome,
    GenerationRecord,
    GenerationRequest,
    KeywordItem,
    MetaDescription,
    ProviderDescriptor,
    ProviderTag,
    to_jsonable,
)

__all__ = [
    "AggregatedResult",
    "GenerationKind",
    "GenerationOutcome",
    "GenerationRecord",
    "GenerationRequest",
    "KeywordItem",
    "MetaDescription",
    "ProviderDescriptor",
    "ProviderTag",
    "to_jsonable",
]
