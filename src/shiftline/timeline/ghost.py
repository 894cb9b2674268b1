"""Provisional "add shift" slot under the pointer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from shiftline.timeline.config import TimelineConfig
from shiftline.timeline.frames import CoalescedTask, FrameSource, ImmediateFrameSource
from shiftline.timeline.hours import BusinessHours
from shiftline.timeline.snapping import snap

__all__ = ["PointerType", "HoverInput", "GhostSlot", "HoverGhostCalculator"]


class PointerType(str, Enum):
    MOUSE = "mouse"
    PEN = "pen"
    TOUCH = "touch"


@dataclass(frozen=True, slots=True)
class HoverInput:
    """Pointer position resolved to an employee lane and a time of day."""

    employee_id: str
    date: date
    hour: float
    pointer_type: PointerType = PointerType.MOUSE
    over_grid: bool = True


@dataclass(frozen=True, slots=True)
class GhostSlot:
    employee_id: str
    date: date
    start_hour: float
    end_hour: float


class HoverGhostCalculator:
    """Computes the slot a click would create, recomputed at most once per frame."""

    def __init__(
        self,
        config: TimelineConfig,
        *,
        business_hours: Callable[[date], BusinessHours | None],
        is_editable_date: Callable[[date], bool],
        is_drag_active: Callable[[], bool] = lambda: False,
        frame_source: FrameSource | None = None,
        sink: Callable[[GhostSlot | None], None] | None = None,
    ) -> None:
        self.config = config
        self._business_hours = business_hours
        self._is_editable_date = is_editable_date
        self._is_drag_active = is_drag_active
        self._sink = sink
        self._task: CoalescedTask[HoverInput] = CoalescedTask(
            frame_source or ImmediateFrameSource(), self._apply
        )
        self.current: GhostSlot | None = None

    def slot_for(self, employee_id: str, day: date, hour: float) -> GhostSlot | None:
        """Centre a ghost-length slot on ``hour`` and keep it inside the opening hours."""

        if not self._is_editable_date(day):
            return None
        hours = self._business_hours(day)
        if hours is None:
            return None
        duration = self.config.ghost_duration_minutes
        start = snap(hour * 60 - duration / 2, self.config.snap_minutes)
        min_start = hours.open_minutes
        max_start = hours.close_minutes - duration
        if max_start < min_start:
            return None
        start = max(min_start, min(max_start, start))
        return GhostSlot(employee_id, day, start / 60, (start + duration) / 60)

    def compute(self, hover: HoverInput | None) -> GhostSlot | None:
        if hover is None or not hover.over_grid:
            return None
        if self._is_drag_active():
            return None
        if hover.pointer_type is PointerType.TOUCH:
            return None
        return self.slot_for(hover.employee_id, hover.date, hover.hour)

    def update(self, hover: HoverInput | None) -> None:
        self._task.submit(hover)  # type: ignore[arg-type]

    def flush(self) -> None:
        self._task.flush()

    def clear(self) -> None:
        self._task.cancel()
        self._set(None)

    def resolve(self, hover: HoverInput) -> GhostSlot | None:
        """Slot a create gesture at ``hover`` commits to.

        Mouse and pen gestures reuse the displayed ghost for the lane; touch has no hover, so the
        same calculation runs on the tap position.
        """

        if hover.pointer_type is PointerType.TOUCH:
            return self.slot_for(hover.employee_id, hover.date, hover.hour)
        self.flush()
        current = self.current
        if current is not None and (current.employee_id, current.date) == (
            hover.employee_id,
            hover.date,
        ):
            return current
        return self.compute(hover)

    def _apply(self, hover: HoverInput | None) -> None:
        self._set(self.compute(hover))

    def _set(self, slot: GhostSlot | None) -> None:
        if slot == self.current:
            return
        self.current = slot
        if self._sink is not None:
            self._sink(slot)
