"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ProvidersConfig: Default provider and per-provider settings
- GenerationConfig: Prompt and sampling settings
- LoggingConfig: Logging behavior
- StorageConfig: Generation record sink settings
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


@dataclass
class ProviderEntryConfig:
    """Configuration for one LLM provider.

    Attributes:
        display_name: Human-readable name used in messages
        model: Model identifier sent to the provider
        api_key: Optional inline API key (overrides env var)
        api_key_env: Environment variable name containing the API key
        base_url: Base URL for the provider API
        timeout_seconds: HTTP timeout for a single provider call
    """

    display_name: str = ""
    model: str = ""
    api_key: str | None = None
    api_key_env: str | None = None
    base_url: str = ""
    timeout_seconds: float = 60.0


def _default_provider_entries() -> dict[str, ProviderEntryConfig]:
    return {
        "GEMINI": ProviderEntryConfig(
            display_name="Gemini",
            model="gemini-2.0-flash",
            api_key_env="GEMINI_API_KEY",
            base_url="https://generativelanguage.googleapis.com",
        ),
        "OPENAI": ProviderEntryConfig(
            display_name="OpenAI",
            model="gpt-4o-mini",
            api_key_env="OPENAI_API_KEY",
            base_url="https://api.openai.com/v1",
        ),
        "CLAUDE": ProviderEntryConfig(
            display_name="Claude",
            model="claude-3-5-sonnet-latest",
            api_key_env="CLAUDE_API_KEY",
            base_url="https://api.anthropic.com",
        ),
    }


@dataclass
class ProvidersConfig:
    """Configuration for the provider registry.

    Attributes:
        default: Tag of the provider active at process start
        entries: Mapping from provider tag to its settings
    """

    default: str = "GEMINI"
    entries: dict[str, ProviderEntryConfig] = field(default_factory=_default_provider_entries)


@dataclass
class GenerationConfig:
    """Configuration for prompt building and sampling.

    Attributes:
        temperature: Sampling temperature sent to providers
        max_output_tokens: Maximum output tokens per call
        keyword_count: Number of keywords requested
        title_max_chars: Title length requested from the provider
        meta_max_chars: Meta description length requested from the provider
    """

    temperature: float = 0.7
    max_output_tokens: int = 4096
    keyword_count: int = 10
    title_max_chars: int = 60
    meta_max_chars: int = 160


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        log_dir: Directory for log files
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"
    log_dir: str = "logs"
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "none"
    llm_log_file: str = "llm.jsonl"


@dataclass
class StorageConfig:
    """Configuration for the generation record sink.

    Attributes:
        enabled: Whether completed generations are persisted
        records_path: JSONL file receiving one record per generation
    """

    enabled: bool = True
    records_path: str = "data/generations.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    environment: str | None = None
    release: str | None = None
    redaction: str = "none"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if key == "providers" and isinstance(value, dict):
            _merge_providers(data["providers"], value)
        elif isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _merge_providers(data: dict[str, Any], raw: dict[str, Any]) -> None:
    """Merge provider entries one tag at a time so partial overrides keep defaults."""
    if raw.get("default"):
        data["default"] = str(raw["default"]).upper()
    for tag, entry in (raw.get("entries") or {}).items():
        tag = str(tag).upper()
        merged = data["entries"].get(tag, {})
        merged.update(entry or {})
        data["entries"][tag] = merged


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    providers_data = data["providers"]
    entries = {
        tag: ProviderEntryConfig(**entry) for tag, entry in providers_data["entries"].items()
    }
    return AppConfig(
        providers=ProvidersConfig(default=providers_data["default"], entries=entries),
        generation=GenerationConfig(**data["generation"]),
        logging=LoggingConfig(**data["logging"]),
        storage=StorageConfig(**data["storage"]),
        langfuse=LangfuseConfig(**data.get("langfuse", {})),
    )


def get_api_key(cfg: ProviderEntryConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    if cfg.api_key_env:
        return os.getenv(cfg.api_key_env) or None
    return None
