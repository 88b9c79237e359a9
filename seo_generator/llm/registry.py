"""
Provider registry and active-provider selection.

The registry is the static, load-once description of every supported
provider. The selector holds the single active provider tag and validates
switches against credential availability. A selector instance is created
once per process and injected wherever generation happens.
"""

from __future__ import annotations

import logging

from ..config import ProvidersConfig, get_api_key
from ..core.types import ProviderDescriptor, ProviderTag
from ..errors import UnavailableProviderError, UnsupportedProviderError

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Immutable mapping from provider tag to its descriptor."""

    def __init__(self, descriptors: list[ProviderDescriptor]):
        by_tag: dict[ProviderTag, ProviderDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.tag in by_tag:
                raise ValueError(f"Duplicate provider descriptor: {descriptor.tag.value}")
            by_tag[descriptor.tag] = descriptor
        missing = [tag.value for tag in ProviderTag if tag not in by_tag]
        if missing:
            raise ValueError(f"Missing provider descriptors: {', '.join(missing)}")
        self._descriptors = by_tag

    @classmethod
    def from_config(cls, cfg: ProvidersConfig) -> "ProviderRegistry":
        """Build the registry from config, resolving credentials once."""
        descriptors = []
        for tag in ProviderTag:
            entry = cfg.entries.get(tag.value)
            if entry is None:
                raise ValueError(f"Missing provider config for {tag.value}")
            descriptors.append(
                ProviderDescriptor(
                    tag=tag,
                    display_name=entry.display_name or tag.value.title(),
                    model=entry.model,
                    api_key=get_api_key(entry),
                    base_url=entry.base_url.rstrip("/"),
                    timeout_seconds=entry.timeout_seconds,
                )
            )
        unknown = sorted(set(cfg.entries) - {tag.value for tag in ProviderTag})
        if unknown:
            logger.warning("Ignoring unknown provider entries: %s", ", ".join(unknown))
        return cls(descriptors)

    def resolve_tag(self, name: str | ProviderTag) -> ProviderTag:
        """Map a user-supplied provider name to a tag, ignoring case."""
        if isinstance(name, ProviderTag):
            return name
        try:
            return ProviderTag(str(name).strip().upper())
        except ValueError:
            supported = ", ".join(tag.value for tag in ProviderTag)
            raise UnsupportedProviderError(
                f"Model {name} not supported. Supported: {supported}"
            ) from None

    def get(self, tag: str | ProviderTag) -> ProviderDescriptor:
        return self._descriptors[self.resolve_tag(tag)]

    def all(self) -> list[ProviderDescriptor]:
        return [self._descriptors[tag] for tag in ProviderTag]

    def available(self) -> list[ProviderDescriptor]:
        return [descriptor for descriptor in self.all() if descriptor.available]


class ProviderSelector:
    """Holds the currently active provider.

    Switching replaces a single reference, so the new provider is visible to
    every later ``get_active`` call. Callers that already resolved a
    descriptor keep using it.
    """

    def __init__(self, registry: ProviderRegistry, default: str | ProviderTag):
        self.registry = registry
        self._active = registry.resolve_tag(default)

    @property
    def active_tag(self) -> ProviderTag:
        return self._active

    def get_active(self) -> ProviderDescriptor:
        """Return the active provider, failing if its credential is missing."""
        descriptor = self.registry.get(self._active)
        if not descriptor.available:
            raise UnavailableProviderError(
                f"Current model {descriptor.tag.value} is not available. API key not configured."
            )
        return descriptor

    def set_active(self, name: str | ProviderTag) -> str:
        """Switch the active provider and return a confirmation message."""
        tag = self.registry.resolve_tag(name)
        descriptor = self.registry.get(tag)
        if not descriptor.available:
            raise UnavailableProviderError(
                f"Model {tag.value} is not available. API key not configured."
            )
        previous = self._active
        self._active = tag
        logger.info("Active provider switched from %s to %s", previous.value, tag.value)
        return f"Switched to {descriptor.display_name} model."

    def list_available(self) -> list[ProviderDescriptor]:
        return self.registry.available()
