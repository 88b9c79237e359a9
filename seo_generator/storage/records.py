"""
Append-only persistence of generation records.

Each completed generation call is written as one JSON line with its kind,
input topic, normalized output, provider and duration. The core never
reads these records back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
import json
import os
import time
from pathlib import Path
from typing import Any

from ..core.types import GenerationKind, GenerationRecord, to_jsonable
from ..utils.text import short_hash, slugify


class RecordSink(ABC):
    """Receives one record per completed generation call."""

    @abstractmethod
    def append(self, record: GenerationRecord) -> None:
        raise NotImplementedError


class JsonlRecordSink(RecordSink):
    """Writes generation records to a JSONL file.

    Attributes:
        path: Full path to the records file
        enabled: Whether records are written
    """

    def __init__(self, path: Path, enabled: bool = True):
        self.path = path
        self.enabled = enabled

    def append(self, record: GenerationRecord) -> None:
        if not self.enabled:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record.to_dict(), ensure_ascii=True))
            handle.write("\n")

    def is_writable(self) -> bool:
        """Return True if the records file can be created or appended to."""
        target = self.path if self.path.exists() else self.path.parent
        while not target.exists():
            target = target.parent
        return os.access(target, os.W_OK)


def build_record(
    kind: GenerationKind | str,
    topic: str,
    output: Any,
    provider: str | None,
    started: float,
) -> GenerationRecord:
    """Build a record for a completed generation.

    Args:
        kind: Kind that was generated
        topic: Caller-supplied topic
        output: Normalized output (dataclasses are converted to dicts)
        provider: Provider tag active for the call
        started: ``time.perf_counter()`` value taken when the call started
    """
    kind_value = kind.value if isinstance(kind, GenerationKind) else str(kind)
    return GenerationRecord(
        request_kind=kind_value,
        input=topic,
        slug=f"{slugify(topic)}-{short_hash(topic)}",
        output=to_jsonable(output),
        provider=provider,
        process_time_ms=int((time.perf_counter() - started) * 1000),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
