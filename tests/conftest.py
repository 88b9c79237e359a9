"""Shared fixtures: a provider registry with fixed keys and a scripted client factory."""

from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from seo_generator.core.types import GenerationKind, ProviderDescriptor, ProviderTag
from seo_generator.llm.registry import ProviderRegistry, ProviderSelector
from seo_generator.orchestrator import GenerationOrchestrator

KEYWORDS_JSON = '[{"keyword": "x", "relevance": 9}, {"keyword": "y", "relevance": 7}]'
TITLES_JSON = '["Ten Ways AI Is Changing Healthcare"]'
META_JSON = '{"description": "How AI is reshaping diagnosis and care."}'
CONTENT_TEXT = "Introduction\n\nAI is changing healthcare.\n\nConclusion"


def make_registry(**keys: str | None) -> ProviderRegistry:
    """Build a registry where each tag's key comes from ``keys`` (missing means unset)."""
    names = {ProviderTag.GEMINI: "Gemini", ProviderTag.OPENAI: "OpenAI", ProviderTag.CLAUDE: "Claude"}
    return ProviderRegistry(
        [
            ProviderDescriptor(
                tag=tag,
                display_name=names[tag],
                model=f"{tag.value.lower()}-test-model",
                api_key=keys.get(tag.value),
                base_url=f"https://{tag.value.lower()}.test",
            )
            for tag in ProviderTag
        ]
    )


def _kind_for_prompt(prompt: str) -> GenerationKind:
    if "SEO keywords" in prompt:
        return GenerationKind.KEYWORDS
    if "engaging title" in prompt:
        return GenerationKind.TITLE
    if "meta description" in prompt:
        return GenerationKind.META
    return GenerationKind.CONTENT


class FakeClientFactory:
    """Client factory returning scripted responses per content kind.

    Attributes:
        responses: Raw text returned per kind
        errors: Exception raised per kind instead of responding
        hang: Kinds whose calls never complete unless cancelled
        gate: Optional event every call waits on before responding
        delays: Extra event-loop turns a kind waits before responding
        on_start: Optional hook called with the kind when a call starts
        calls: (provider tag, kind) for every started call, in start order
        cancelled: Kinds whose calls were cancelled
    """

    def __init__(self):
        self.responses = {
            GenerationKind.KEYWORDS: KEYWORDS_JSON,
            GenerationKind.TITLE: TITLES_JSON,
            GenerationKind.META: META_JSON,
            GenerationKind.CONTENT: CONTENT_TEXT,
        }
        self.errors: dict[GenerationKind, Exception] = {}
        self.hang: set[GenerationKind] = set()
        self.gate: asyncio.Event | None = None
        self.delays: dict[GenerationKind, int] = {}
        self.on_start: Callable[[GenerationKind], None] | None = None
        self.calls: list[tuple[ProviderTag, GenerationKind]] = []
        self.prompts: list[str] = []
        self.cancelled: list[GenerationKind] = []

    def __call__(self, descriptor, generation_cfg, log_cfg=None, llm_logger=None):
        return _FakeClient(self, descriptor)


class _FakeClient:
    def __init__(self, factory: FakeClientFactory, descriptor: ProviderDescriptor):
        self.factory = factory
        self.descriptor = descriptor

    async def generate(self, prompt: str) -> str:
        kind = _kind_for_prompt(prompt)
        self.factory.calls.append((self.descriptor.tag, kind))
        self.factory.prompts.append(prompt)
        if self.factory.on_start is not None:
            self.factory.on_start(kind)
        try:
            if kind in self.factory.hang:
                await asyncio.Event().wait()
            if self.factory.gate is not None:
                await self.factory.gate.wait()
            for _ in range(self.factory.delays.get(kind, 0)):
                await asyncio.sleep(0)
        except asyncio.CancelledError:
            self.factory.cancelled.append(kind)
            raise
        if kind in self.factory.errors:
            raise self.factory.errors[kind]
        return self.factory.responses[kind]


@pytest.fixture
def registry() -> ProviderRegistry:
    return make_registry(GEMINI="gemini-key", OPENAI="openai-key")


@pytest.fixture
def selector(registry) -> ProviderSelector:
    return ProviderSelector(registry, "GEMINI")


@pytest.fixture
def fake_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def orchestrator(selector, fake_factory) -> GenerationOrchestrator:
    return GenerationOrchestrator(selector, client_factory=fake_factory)
