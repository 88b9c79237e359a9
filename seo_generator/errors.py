"""
Error taxonomy for content generation.

Every failure raised by the generation core derives from GenerationError so
callers can render them uniformly as a failure plus message. None of these
are recovered inside the core.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all generation failures."""


class UnsupportedProviderError(GenerationError):
    """Provider tag is not one of the known providers."""


class UnavailableProviderError(GenerationError):
    """Provider is known but its credential is not configured."""


class ProviderNotImplementedError(GenerationError, NotImplementedError):
    """Provider is known but its integration is deliberately unfinished."""


class ProviderCallError(GenerationError):
    """Transport or protocol failure while calling a provider."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class MalformedResponseError(GenerationError):
    """Provider text could not be parsed into the structure expected for its kind.

    Attributes:
        kind: Content kind that was being normalized
        raw_text: The unmodified provider text, kept for diagnostics
    """

    def __init__(self, kind: str, raw_text: str, reason: str = "invalid JSON payload"):
        super().__init__(f"Malformed {kind} response ({reason}): {raw_text!r}")
        self.kind = kind
        self.raw_text = raw_text
        self.reason = reason


class AggregateGenerationError(GenerationError):
    """One branch of a "generate all" call failed.

    Attributes:
        kind: Kind of the branch that failed first
        cause: The branch's original exception
    """

    def __init__(self, kind: str, cause: BaseException):
        super().__init__(f"{kind} generation failed: {cause}")
        self.kind = kind
        self.cause = cause
