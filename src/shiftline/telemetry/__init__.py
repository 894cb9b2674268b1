"""Telemetry helpers for timeline sessions."""

from .jsonl import append_jsonl, read_jsonl
from .recorder import EventRecord, EventRecorder

__all__ = ["append_jsonl", "read_jsonl", "EventRecord", "EventRecorder"]
