"""Persistence of generation records."""

from .records import JsonlRecordSink, RecordSink, build_record

__all__ = ["RecordSink", "JsonlRecordSink", "build_record"]
