"""
Langfuse spans for generation requests and provider calls.

Two span shapes exist:
- ``generation_span``: one content kind for one topic, opened by the
  orchestrator. The "all" span is the parent of its four branch spans.
- ``provider_span``: one HTTP call to a provider, nested under the
  generation span that triggered it.

Tracing is off unless Langfuse is enabled in config and both keys are set.
When it is off every helper is a no-op.
"""

from __future__ import annotations

from contextlib import contextmanager
import json
import logging
import os
from typing import Any, Iterator

from ..config import LangfuseConfig
from ..core.types import ProviderDescriptor
from ..utils.logging import redact_text, truncate_text

logger = logging.getLogger(__name__)

_LANGFUSE = None
_CFG: LangfuseConfig | None = None


def setup_langfuse(cfg: LangfuseConfig) -> None:
    """Create the Langfuse client if tracing is enabled and keys are present."""
    global _LANGFUSE, _CFG  # noqa: PLW0603
    _CFG = cfg
    _LANGFUSE = None
    if not cfg.enabled:
        return

    public_key = cfg.public_key or os.getenv("LANGFUSE_PUBLIC_KEY")
    secret_key = cfg.secret_key or os.getenv("LANGFUSE_SECRET_KEY")
    if not public_key or not secret_key:
        logger.warning("Langfuse enabled but keys are missing; tracing disabled")
        return

    try:
        from langfuse import Langfuse
    except ImportError:
        logger.warning("Langfuse enabled but the langfuse package is not installed; tracing disabled")
        return

    _LANGFUSE = Langfuse(
        public_key=public_key,
        secret_key=secret_key,
        host=cfg.host or os.getenv("LANGFUSE_HOST"),
        environment=cfg.environment or os.getenv("LANGFUSE_ENVIRONMENT"),
        release=cfg.release or os.getenv("LANGFUSE_RELEASE"),
    )


def tracing_enabled() -> bool:
    return _LANGFUSE is not None


@contextmanager
def generation_span(
    kind: str,
    topic: str,
    descriptor: ProviderDescriptor | None = None,
) -> Iterator[Any | None]:
    """Span covering one generation kind for one topic."""
    metadata = {"generation.kind": kind, "generation.topic": topic}
    if descriptor is not None:
        metadata["llm.provider"] = descriptor.tag.value
        metadata["llm.model"] = descriptor.model
    with _open_span(f"generate.{kind}", topic, metadata) as span:
        yield span


@contextmanager
def provider_span(descriptor: ProviderDescriptor, prompt: str) -> Iterator[Any | None]:
    """Span covering one HTTP call to a provider."""
    metadata = {
        "span.kind": "llm",
        "llm.provider": descriptor.tag.value,
        "llm.model": descriptor.model,
    }
    with _open_span(f"{descriptor.tag.value.lower()}.generate", prompt, metadata) as span:
        yield span


def set_span_output(span: Any | None, output_value: Any) -> None:
    if span is None:
        return
    payload = _payload(output_value)
    if payload is not None:
        _update(span, output=payload)


def record_span_error(span: Any | None, exc: BaseException) -> None:
    if span is None:
        return
    _update(span, level="ERROR", status_message=f"{type(exc).__name__}: {exc}")


def flush() -> None:
    """Send pending spans before the process exits."""
    if _LANGFUSE is None:
        return
    try:
        _LANGFUSE.flush()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Langfuse flush failed: %s", exc)


@contextmanager
def _open_span(name: str, input_value: Any, metadata: dict[str, str]) -> Iterator[Any | None]:
    client = _LANGFUSE
    if client is None:
        yield None
        return

    try:
        cm = client.start_as_current_span(name=name, input=_payload(input_value), metadata=metadata)
        span = cm.__enter__()
    except Exception as exc:  # noqa: BLE001
        logger.debug("Could not open span %s: %s", name, exc)
        yield None
        return

    try:
        yield span
    finally:
        try:
            cm.__exit__(None, None, None)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Could not close span %s: %s", name, exc)


def _payload(value: Any) -> str | None:
    if value is None:
        return None
    text = value if isinstance(value, str) else json.dumps(value, ensure_ascii=True, default=str)
    if _CFG is None:
        return text
    return truncate_text(redact_text(text, _CFG.redaction), _CFG.max_text_chars)


def _update(span: Any, **kwargs: Any) -> None:
    try:
        span.update(**kwargs)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Span update failed: %s", exc)
