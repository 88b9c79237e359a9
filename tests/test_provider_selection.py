"""Tests for the provider registry and active-provider selector."""

import pytest

from seo_generator.config import ProvidersConfig
from seo_generator.core.types import ProviderTag
from seo_generator.errors import UnavailableProviderError, UnsupportedProviderError
from seo_generator.llm.registry import ProviderRegistry, ProviderSelector

from conftest import make_registry


def test_switch_then_get_active_for_every_configured_provider(selector):
    for descriptor in selector.list_available():
        selector.set_active(descriptor.tag.value)
        assert selector.get_active().tag is descriptor.tag


def test_switch_returns_confirmation_message(selector):
    assert selector.set_active("OPENAI") == "Switched to OpenAI model."


def test_switch_is_case_insensitive(registry):
    lower = ProviderSelector(registry, "OPENAI")
    upper = ProviderSelector(registry, "OPENAI")

    assert lower.set_active("gemini") == upper.set_active("GEMINI")
    assert lower.get_active() == upper.get_active()
    assert lower.active_tag is ProviderTag.GEMINI


def test_switch_to_provider_without_key_fails_and_keeps_active(selector):
    selector.set_active("OPENAI")

    with pytest.raises(UnavailableProviderError, match="API key not configured"):
        selector.set_active("CLAUDE")

    assert selector.active_tag is ProviderTag.OPENAI
    assert selector.get_active().tag is ProviderTag.OPENAI


def test_switch_to_unknown_provider_fails_and_keeps_active(selector):
    with pytest.raises(UnsupportedProviderError, match="not supported"):
        selector.set_active("llama")

    assert selector.active_tag is ProviderTag.GEMINI


def test_get_active_fails_lazily_when_default_has_no_key():
    selector = ProviderSelector(make_registry(OPENAI="openai-key"), "GEMINI")

    assert selector.active_tag is ProviderTag.GEMINI
    with pytest.raises(UnavailableProviderError):
        selector.get_active()


def test_list_available_only_includes_providers_with_keys(selector):
    tags = [descriptor.tag for descriptor in selector.list_available()]
    assert tags == [ProviderTag.GEMINI, ProviderTag.OPENAI]


def test_unknown_default_is_rejected(registry):
    with pytest.raises(UnsupportedProviderError):
        ProviderSelector(registry, "mistral")


def test_registry_from_config_resolves_keys_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("CLAUDE_API_KEY", raising=False)

    registry = ProviderRegistry.from_config(ProvidersConfig())

    assert registry.get("openai").api_key == "sk-env"
    assert registry.get("openai").base_url == "https://api.openai.com/v1"
    assert [d.tag for d in registry.available()] == [ProviderTag.OPENAI]
    assert len(registry.all()) == len(ProviderTag)


def test_registry_requires_one_descriptor_per_tag(registry):
    descriptors = registry.all()
    with pytest.raises(ValueError, match="Duplicate"):
        ProviderRegistry(descriptors + [descriptors[0]])
    with pytest.raises(ValueError, match="Missing"):
        ProviderRegistry(descriptors[:2])


def test_descriptor_repr_hides_api_key(registry):
    assert "gemini-key" not in repr(registry.get("GEMINI"))
