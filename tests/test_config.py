"""Tests for YAML configuration loading and logging setup."""

from __future__ import annotations

import json
import logging

from seo_generator.config import AppConfig, LoggingConfig, ProviderEntryConfig, get_api_key, load_config
from seo_generator.utils.logging import (
    log_event,
    redact_text,
    setup_llm_logger,
    setup_logging,
    truncate_text,
)


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.providers.default == "GEMINI"
    assert set(cfg.providers.entries) == {"GEMINI", "OPENAI", "CLAUDE"}


def test_load_config_merges_partial_provider_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "providers:\n"
        "  default: openai\n"
        "  entries:\n"
        "    openai:\n"
        "      model: gpt-4.1-mini\n"
        "      timeout_seconds: 15\n"
        "generation:\n"
        "  keyword_count: 5\n"
        "storage:\n"
        "  enabled: false\n"
        "unknown_section:\n"
        "  ignored: true\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.providers.default == "OPENAI"
    openai = cfg.providers.entries["OPENAI"]
    assert openai.model == "gpt-4.1-mini"
    assert openai.timeout_seconds == 15
    assert openai.api_key_env == "OPENAI_API_KEY"
    assert openai.base_url == "https://api.openai.com/v1"
    assert cfg.providers.entries["GEMINI"].model == "gemini-2.0-flash"
    assert cfg.generation.keyword_count == 5
    assert cfg.generation.temperature == 0.7
    assert cfg.storage.enabled is False


def test_load_config_accepts_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_get_api_key_prefers_inline_then_env(monkeypatch):
    monkeypatch.setenv("MY_KEY", "from-env")

    assert get_api_key(ProviderEntryConfig(api_key="inline", api_key_env="MY_KEY")) == "inline"
    assert get_api_key(ProviderEntryConfig(api_key_env="MY_KEY")) == "from-env"

    monkeypatch.setenv("MY_KEY", "")
    assert get_api_key(ProviderEntryConfig(api_key_env="MY_KEY")) is None
    assert get_api_key(ProviderEntryConfig()) is None


def test_redact_and_truncate_text():
    assert redact_text("see https://a.test/x now", "redact_urls") == "see [REDACTED_URL] now"
    assert redact_text("secret", "redact_content") == ""
    assert redact_text("plain", "none") == "plain"
    assert truncate_text("abcdef", 3) == "abc...(truncated)"


def test_file_logging_writes_jsonl_with_extras(tmp_path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)

    log_event(logger, "Generation done", event="generation_done", kind="title")
    for handler in logger.handlers:
        handler.flush()

    line = (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "Generation done"
    assert payload["event"] == "generation_done"
    assert payload["kind"] == "title"
    assert payload["level"] == "INFO"

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_llm_logger_only_when_enabled(tmp_path):
    assert setup_llm_logger(LoggingConfig(), tmp_path) is None

    llm_logger = setup_llm_logger(LoggingConfig(llm_log_enabled=True), tmp_path)
    assert isinstance(llm_logger, logging.Logger)
    assert llm_logger.name == "seo_generator.llm"

    for handler in list(llm_logger.handlers):
        handler.close()
        llm_logger.removeHandler(handler)
