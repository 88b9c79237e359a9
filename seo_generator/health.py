"""Point-in-time health snapshot of the generator process."""

from __future__ import annotations

from datetime import datetime, timezone
import time
from typing import Any

from .llm.registry import ProviderSelector
from .llm.tracing import tracing_enabled
from .storage.records import JsonlRecordSink

_STARTED_AT = time.monotonic()


def get_health_status(selector: ProviderSelector, sink: JsonlRecordSink | None) -> dict[str, Any]:
    """Return process health.

    Status is "healthy" when the active provider has a credential and
    "degraded" otherwise.
    """
    active = selector.registry.get(selector.active_tag)
    return {
        "status": "healthy" if active.available else "degraded",
        "uptime_seconds": round(time.monotonic() - _STARTED_AT, 2),
        "active_provider": active.tag.value,
        "available_providers": [d.tag.value for d in selector.list_available()],
        "records_path": str(sink.path) if sink is not None else None,
        "records_writable": sink.is_writable() if sink is not None and sink.enabled else False,
        "tracing_enabled": tracing_enabled(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
