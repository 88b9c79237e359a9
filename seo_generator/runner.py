"""
Request handling around the generation core.

This module wires configuration into an orchestrator and runs single
requests the way an API handler would:
1. Time the call
2. Invoke the orchestrator for the requested kind
3. Append a record to the sink on success
4. Wrap the outcome in a ``{"success": ..., "data" | "error": ...}`` envelope
"""

from __future__ import annotations

import logging
from pathlib import Path
import time
from typing import Any, Iterable

from .config import AppConfig
from .core.types import GenerationKind, GenerationRequest, to_jsonable
from .errors import GenerationError
from .llm.registry import ProviderRegistry, ProviderSelector
from .orchestrator import GenerationOrchestrator
from .storage.records import JsonlRecordSink, RecordSink, build_record
from .utils.logging import log_event

logger = logging.getLogger(__name__)


def build_orchestrator(
    cfg: AppConfig,
    llm_logger: logging.Logger | None = None,
) -> GenerationOrchestrator:
    """Create the registry, selector and orchestrator from config."""
    registry = ProviderRegistry.from_config(cfg.providers)
    selector = ProviderSelector(registry, cfg.providers.default)
    return GenerationOrchestrator(
        selector,
        generation_cfg=cfg.generation,
        log_cfg=cfg.logging,
        llm_logger=llm_logger,
    )


def build_sink(cfg: AppConfig) -> JsonlRecordSink:
    return JsonlRecordSink(Path(cfg.storage.records_path), enabled=cfg.storage.enabled)


async def run_generation(
    orchestrator: GenerationOrchestrator,
    kind: GenerationKind | str,
    topic: str,
    selected_keywords: Iterable[str] | None = None,
    sink: RecordSink | None = None,
) -> dict[str, Any]:
    """Run one generation request and return its response envelope.

    Args:
        orchestrator: Orchestrator to call
        kind: Requested content kind
        topic: Topic to generate for
        selected_keywords: Keyword allow-list for kind "all"
        sink: Optional record sink receiving the completed generation

    Returns:
        ``{"success": True, "data": ...}`` or ``{"success": False, "error": ...}``
    """
    kind_label = kind.value if isinstance(kind, GenerationKind) else str(kind)
    started = time.perf_counter()
    log_event(logger, "Generation start", event="generation_start", kind=kind_label)
    try:
        request = GenerationRequest(
            topic=topic,
            kind=GenerationKind(kind),
            selected_keywords=list(selected_keywords) if selected_keywords else None,
        )
        outcome = await orchestrator.run(request)
        record = build_record(kind_label, topic, outcome.result, outcome.provider, started)
        if sink is not None:
            sink.append(record)
    except (GenerationError, ValueError, OSError) as exc:
        log_event(
            logger,
            "Generation failed",
            event="generation_failed",
            kind=kind_label,
            active_provider=orchestrator.selector.active_tag.value,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return {"success": False, "error": f"Failed to generate {kind_label}: {exc}"}

    log_event(
        logger,
        "Generation done",
        event="generation_done",
        kind=kind_label,
        provider=record.provider,
        process_time_ms=record.process_time_ms,
    )
    return {"success": True, "data": to_jsonable(outcome.result)}


def run_switch(orchestrator: GenerationOrchestrator, name: str) -> dict[str, Any]:
    """Switch the active provider and return a response envelope."""
    try:
        message = orchestrator.switch_provider(name)
    except GenerationError as exc:
        return {"success": False, "error": f"Failed to switch model: {exc}"}
    return {"success": True, "message": message}
