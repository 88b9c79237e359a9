"""
Core data types for the SEO content generator.

This module defines the structures passed between the provider layer,
the normalizer and the orchestrator:
- ProviderTag / ProviderDescriptor: Static description of one LLM provider
- GenerationKind / GenerationRequest: What a caller asked for
- KeywordItem, MetaDescription, AggregatedResult: Normalized outputs
- GenerationOutcome: A result with the providers that produced it
- GenerationRecord: One persisted generation, handed to a record sink
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class ProviderTag(str, Enum):
    """Supported LLM provider tags."""

    GEMINI = "GEMINI"
    OPENAI = "OPENAI"
    CLAUDE = "CLAUDE"


class GenerationKind(str, Enum):
    """Content artifact targeted by a generation call."""

    KEYWORDS = "keywords"
    TITLE = "title"
    META = "meta"
    CONTENT = "content"
    ALL = "all"


@dataclass(frozen=True)
class ProviderDescriptor:
    """Immutable description of a configured provider.

    Attributes:
        tag: Provider tag (one descriptor per tag)
        display_name: Human-readable provider name (e.g., "Gemini")
        model: Model identifier sent to the provider
        api_key: Credential, or None when not configured
        base_url: Base URL for the provider API
        timeout_seconds: Per-request HTTP timeout
    """

    tag: ProviderTag
    display_name: str
    model: str
    api_key: str | None = field(default=None, repr=False)
    base_url: str = ""
    timeout_seconds: float = 60.0

    @property
    def available(self) -> bool:
        return bool(self.api_key)


@dataclass
class GenerationRequest:
    """A single caller request.

    Attributes:
        topic: Topic the content is generated for
        kind: Requested artifact
        selected_keywords: Keyword allow-list, only used when kind is "all"
    """

    topic: str
    kind: GenerationKind
    selected_keywords: list[str] | None = None


@dataclass
class KeywordItem:
    keyword: str
    relevance: float

    def to_dict(self) -> dict[str, Any]:
        return {"keyword": self.keyword, "relevance": self.relevance}


@dataclass
class MetaDescription:
    """SEO meta description.

    The 160 character limit is requested from the provider but not enforced.
    """

    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"description": self.description}


@dataclass
class AggregatedResult:
    """Output of a "generate all" call.

    Attributes:
        keywords: Generated keywords, filtered by the caller's allow-list if given
        titles: Generated title suggestions
        meta: Generated meta description
        content: Generated long-form content, raw text
    """

    keywords: list[KeywordItem] = field(default_factory=list)
    titles: list[str] = field(default_factory=list)
    meta: MetaDescription = field(default_factory=lambda: MetaDescription(description=""))
    content: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywords": [item.to_dict() for item in self.keywords],
            "titles": list(self.titles),
            "meta": self.meta.to_dict(),
            "content": self.content,
        }


@dataclass
class GenerationOutcome:
    """Normalized result of a request plus the providers that produced it.

    Attributes:
        result: Normalized output for the requested kind
        providers: Tags resolved by each provider call, in kind order. An
            "all" request lists one tag per branch and may mix providers.
    """

    result: Any
    providers: tuple[ProviderTag, ...]

    @property
    def provider(self) -> str:
        """Distinct provider tags joined with commas, in first-use order."""
        return ",".join(dict.fromkeys(tag.value for tag in self.providers))


@dataclass
class GenerationRecord:
    """Persisted record of one completed generation call.

    Attributes:
        request_kind: Kind that was generated
        input: Topic supplied by the caller
        slug: URL-safe slug derived from the topic
        output: JSON-ready normalized output
        provider: Provider tag(s) the call was resolved to
        process_time_ms: Wall-clock duration of the call in milliseconds
        timestamp: ISO 8601 UTC completion time
    """

    request_kind: str
    input: str
    slug: str
    output: Any
    provider: str | None
    process_time_ms: int
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def to_jsonable(value: Any) -> Any:
    """Convert normalized outputs into JSON-ready values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    return value
