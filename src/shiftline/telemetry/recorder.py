"""Listener that records engine events in memory and, optionally, as JSONL."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

from shiftline.timeline.controller import RejectionReason, ShiftProposal, TimelineListener

from .jsonl import append_jsonl

__all__ = ["EventRecord", "EventRecorder"]


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


@dataclass(slots=True)
class EventRecord:
    """One emitted engine event."""

    event: str
    payload: dict[str, Any]
    timestamp: str = field(default_factory=_iso_now)

    def to_dict(self, run_id: str | None = None) -> dict[str, Any]:
        record: dict[str, Any] = {"event": self.event, "timestamp": self.timestamp}
        if run_id is not None:
            record["run_id"] = run_id
        record.update(self.payload)
        return record


def _proposal_payload(proposal: ShiftProposal | None) -> dict[str, Any]:
    if proposal is None:
        return {"date": None, "start_hour": None, "end_hour": None}
    return {
        "date": proposal.date.isoformat(),
        "start_hour": proposal.start_hour,
        "end_hour": proposal.end_hour,
    }


class EventRecorder(TimelineListener):
    """Capture proposals, create requests, clicks, rejections and cancellations.

    Parameters
    ----------
    log_path:
        Optional JSONL file; each event is appended as it happens.
    scenario:
        Scenario label stamped on every persisted record.
    include_previews:
        Also record live preview updates (noisy; off by default).
    """

    def __init__(
        self,
        log_path: str | Path | None = None,
        *,
        scenario: str | None = None,
        include_previews: bool = False,
    ) -> None:
        self.log_path = Path(log_path) if log_path is not None else None
        self.scenario = scenario
        self.include_previews = include_previews
        self.run_id = uuid4().hex
        self.records: list[EventRecord] = []

    def __len__(self) -> int:
        return len(self.records)

    def events(self, name: str | None = None) -> list[EventRecord]:
        if name is None:
            return list(self.records)
        return [record for record in self.records if record.event == name]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [record.to_dict(self.run_id) for record in self.records]

    def _record(self, event: str, payload: dict[str, Any]) -> None:
        record = EventRecord(event=event, payload=payload)
        self.records.append(record)
        if self.log_path is not None:
            data = record.to_dict(self.run_id)
            if self.scenario is not None:
                data["scenario"] = self.scenario
            append_jsonl(self.log_path, data)

    def on_shift_proposed(self, shift_id: str, proposal: ShiftProposal) -> None:
        self._record("shift_proposed", {"shift_id": shift_id, **_proposal_payload(proposal)})

    def on_create_requested(
        self, employee_id: str, day: date, start_hour: float, end_hour: float
    ) -> None:
        self._record(
            "create_requested",
            {
                "employee_id": employee_id,
                "date": day.isoformat(),
                "start_hour": start_hour,
                "end_hour": end_hour,
            },
        )

    def on_shift_clicked(self, shift_id: str) -> None:
        self._record("shift_clicked", {"shift_id": shift_id})

    def on_rejected(self, reason: RejectionReason, message: str) -> None:
        self._record("rejected", {"reason": RejectionReason(reason).value, "message": message})

    def on_cancelled(self, shift_id: str | None) -> None:
        self._record("cancelled", {"shift_id": shift_id})

    def on_preview_changed(self, key: str, preview: ShiftProposal | None) -> None:
        if self.include_previews:
            self._record("preview", {"key": key, **_proposal_payload(preview)})
