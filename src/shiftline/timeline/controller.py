"""Pointer-gesture state machine for moving, resizing and creating shifts.

A gesture runs ``Idle -> Armed -> Activated`` and finishes either committed or cancelled:

* pointer-down on a shift body, a shift edge handle, or empty grid space arms a
  :class:`DragSession` and takes the exclusive interaction lock for that pointer;
* travel beyond ``activation_distance_px`` activates the drag, after which every pointer move
  (coalesced to one computation per frame) produces a snapped, clamped live preview;
* pointer-up commits: an activated drag becomes a proposal (or a create request). A release
  on a shift that never activated opens its editor; on empty grid only a short still press
  counts as a click, anything else is dropped.

The controller never edits shifts. Proposals are handed to the listener, which is expected to
confirm with the user and then call :meth:`TimelineController.confirm_proposal` or
:meth:`TimelineController.abort_proposal`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from shiftline.core.errors import PointerCaptureError
from shiftline.scenario.contract.models import Shift
from shiftline.timeline.book import ShiftBook
from shiftline.timeline.config import MINUTES_PER_DAY, TimelineConfig
from shiftline.timeline.frames import CoalescedTask, FrameSource, ImmediateFrameSource
from shiftline.timeline.ghost import GhostSlot, HoverGhostCalculator, HoverInput, PointerType
from shiftline.timeline.hours import BusinessHours
from shiftline.timeline.lock import InProcessLock, InteractionLock
from shiftline.timeline.mapper import Axis, ContinuousAxis
from shiftline.timeline.snapping import (
    ResizeEdge,
    clamp_move,
    clamp_resize,
    day_bounds,
    day_index_of,
    snap,
)
from shiftline.timeline.window import WindowManager

__all__ = [
    "GestureState",
    "DragMode",
    "TargetKind",
    "PointerTarget",
    "PointerEvent",
    "ShiftProposal",
    "Outcome",
    "RejectionReason",
    "DragSession",
    "TimelineListener",
    "TimelineController",
    "CREATE_PREVIEW_KEY",
]

CREATE_PREVIEW_KEY = "__new__"
_EPSILON = 1e-9

OverlapPredicate = Callable[[str, date, float, float], bool]


class GestureState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    ACTIVATED = "activated"


class DragMode(str, Enum):
    MOVE = "move"
    RESIZE_LEFT = "resize-left"
    RESIZE_RIGHT = "resize-right"
    CREATE = "create"


class TargetKind(str, Enum):
    SHIFT_BODY = "shift"
    LEFT_HANDLE = "resize-left"
    RIGHT_HANDLE = "resize-right"
    EMPTY_GRID = "grid"
    OTHER = "other"


_MODE_FOR_TARGET = {
    TargetKind.SHIFT_BODY: DragMode.MOVE,
    TargetKind.LEFT_HANDLE: DragMode.RESIZE_LEFT,
    TargetKind.RIGHT_HANDLE: DragMode.RESIZE_RIGHT,
    TargetKind.EMPTY_GRID: DragMode.CREATE,
}


class Outcome(str, Enum):
    IGNORED = "ignored"
    ARMED = "armed"
    ACTIVATED = "activated"
    MOVED = "moved"
    CLICKED = "clicked"
    PROPOSED = "proposed"
    CREATE_REQUESTED = "create-requested"
    NO_CHANGE = "no-change"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class RejectionReason(str, Enum):
    PAST_DATE = "past-date"
    OVERLAP = "overlap"
    NO_FREE_SLOT = "no-free-slot"
    UNAVAILABLE = "unavailable"


_MESSAGES = {
    RejectionReason.PAST_DATE: "Shifts on past dates cannot be edited.",
    RejectionReason.OVERLAP: "That time overlaps an existing shift for this employee.",
    RejectionReason.NO_FREE_SLOT: "No free slot is left on that day.",
    RejectionReason.UNAVAILABLE: "This employee is blocked or on time off that day.",
}


@dataclass(frozen=True, slots=True)
class PointerTarget:
    """What the pointer landed on.

    ``employee_id`` names the lane for grid targets; ``date`` optionally pins the lane's day
    (otherwise it is read off the axis at the pointer position).
    """

    kind: TargetKind = TargetKind.OTHER
    shift_id: str | None = None
    employee_id: str | None = None
    date: date | None = None


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Raw pointer input. ``x`` is measured on the axis content, scroll included."""

    pointer_id: int
    x: float
    y: float
    timestamp_ms: float
    pointer_type: PointerType = PointerType.MOUSE
    target: PointerTarget = field(default_factory=PointerTarget)


@dataclass(frozen=True, slots=True)
class ShiftProposal:
    date: date
    start_hour: float
    end_hour: float
    employee_id: str | None = None


@dataclass(slots=True)
class DragSession:
    """Ephemeral state of the single in-flight gesture."""

    pointer_id: int
    mode: DragMode
    axis: Axis
    employee_id: str
    shift_id: str | None
    anchor_start: float
    anchor_end: float
    anchor_day_index: int
    anchor_x: float
    anchor_y: float
    anchor_pointer_minutes: float
    started_at_ms: float
    pointer_type: PointerType = PointerType.MOUSE
    captured: bool = False
    activated: bool = False
    max_displacement: float = 0.0
    ghost: GhostSlot | None = None


class TimelineListener:
    """Receives engine output. Subclass and override what the host needs."""

    def on_shift_proposed(self, shift_id: str, proposal: ShiftProposal) -> None:
        return None

    def on_create_requested(
        self, employee_id: str, day: date, start_hour: float, end_hour: float
    ) -> None:
        return None

    def on_shift_clicked(self, shift_id: str) -> None:
        return None

    def on_rejected(self, reason: RejectionReason, message: str) -> None:
        return None

    def on_preview_changed(self, key: str, preview: ShiftProposal | None) -> None:
        return None

    def on_cancelled(self, shift_id: str | None) -> None:
        return None


class TimelineController:
    """Classifies pointer gestures and turns them into proposals.

    Parameters
    ----------
    config:
        Engine thresholds.
    window:
        View/window manager; supplies the axis a gesture is measured on.
    shifts:
        Read-only shift collection for the visible range.
    business_hours:
        Lookup returning the opening hours for a date, or ``None``.
    is_editable_date:
        Predicate forbidding edits on past days.
    listener:
        Output hooks (proposals, create requests, clicks, rejections, previews).
    has_overlap:
        Overlap predicate for create gestures; defaults to ``shifts.has_overlap``.
    ghost_sink:
        Receives the hover ghost slot after each frame it changes in.
    lock:
        Exclusive interaction lock; defaults to an in-process holder.
    frame_source:
        Tick source used to coalesce drag recomputation.
    """

    def __init__(
        self,
        config: TimelineConfig,
        *,
        window: WindowManager,
        shifts: ShiftBook,
        business_hours: Callable[[date], BusinessHours | None],
        is_editable_date: Callable[[date], bool],
        listener: TimelineListener | None = None,
        has_overlap: OverlapPredicate | None = None,
        ghost_sink: Callable[[GhostSlot | None], None] | None = None,
        lock: InteractionLock | None = None,
        frame_source: FrameSource | None = None,
    ) -> None:
        source = frame_source or ImmediateFrameSource()
        self.config = config
        self.window = window
        self.shifts = shifts
        self.listener = listener or TimelineListener()
        self.lock = lock or InProcessLock()
        self._business_hours = business_hours
        self._is_editable_date = is_editable_date
        self._has_overlap = has_overlap or shifts.has_overlap
        self.ghost = HoverGhostCalculator(
            config,
            business_hours=business_hours,
            is_editable_date=is_editable_date,
            is_drag_active=lambda: self.is_active,
            frame_source=source,
            sink=ghost_sink,
        )
        self._move_task: CoalescedTask[PointerEvent] = CoalescedTask(source, self._apply_move)
        self.session: DragSession | None = None
        self.previews: dict[str, ShiftProposal] = {}
        self.pending: dict[str, ShiftProposal] = {}

    @property
    def state(self) -> GestureState:
        if self.session is None:
            return GestureState.IDLE
        return GestureState.ACTIVATED if self.session.activated else GestureState.ARMED

    @property
    def is_active(self) -> bool:
        return self.session is not None and self.session.activated

    def display_range(self, shift: Shift) -> ShiftProposal:
        """Where the presentation layer should draw ``shift`` right now."""

        override = self.previews.get(shift.id) or self.pending.get(shift.id)
        if override is not None:
            return override
        return ShiftProposal(shift.date, shift.start_hour, shift.end_hour, shift.employee_id)

    def pointer_hover(self, event: PointerEvent) -> None:
        target = event.target
        if target.kind is not TargetKind.EMPTY_GRID or target.employee_id is None:
            self.ghost.update(None)
            return
        axis = self.window.axis()
        point = axis.offset_to_time(event.x)
        day = target.date or point.date
        self.ghost.update(
            HoverInput(target.employee_id, day, point.hour, PointerType(event.pointer_type))
        )

    def pointer_leave(self) -> None:
        self.ghost.update(None)

    def pointer_down(self, event: PointerEvent) -> Outcome:
        if self.session is not None:
            return Outcome.IGNORED
        target = event.target
        mode = _MODE_FOR_TARGET.get(target.kind)
        if mode is None:
            return Outcome.IGNORED
        axis = self.window.axis()
        if mode is DragMode.CREATE:
            session = self._arm_create(event, axis)
        else:
            session = self._arm_shift(event, axis, mode)
        if not isinstance(session, DragSession):
            return session

        try:
            acquired = self.lock.acquire(event.pointer_id)
            session.captured = acquired
        except PointerCaptureError:
            acquired = True
        if not acquired:
            return Outcome.IGNORED

        self.ghost.clear()
        if session.shift_id is not None:
            self.pending.pop(session.shift_id, None)
        self.session = session
        return Outcome.ARMED

    def pointer_move(self, event: PointerEvent) -> Outcome:
        session = self.session
        if session is None or event.pointer_id != session.pointer_id:
            return Outcome.IGNORED
        self._track(session, event)
        if not session.activated:
            dx = abs(event.x - session.anchor_x)
            dy = abs(event.y - session.anchor_y)
            threshold = self.config.activation_distance_px
            if dx <= threshold and dy <= threshold:
                return Outcome.IGNORED
            session.activated = True
            self.ghost.clear()
            self._move_task.submit(event)
            return Outcome.ACTIVATED
        self._move_task.submit(event)
        return Outcome.MOVED

    def pointer_up(self, event: PointerEvent) -> Outcome:
        session = self.session
        if session is None or event.pointer_id != session.pointer_id:
            return Outcome.IGNORED
        self._track(session, event)
        self._move_task.cancel()
        try:
            if not session.activated:
                return self._finish_unactivated(session, event)
            proposal = self._update_candidate(session, event.x)
            if session.mode is DragMode.CREATE:
                return self._request_create(
                    session.employee_id, proposal.date, proposal.start_hour, proposal.end_hour
                )
            return self._finish_shift_drag(session, proposal)
        finally:
            self._end_session(session)

    def pointer_cancel(self, event: PointerEvent) -> Outcome:
        session = self.session
        if session is None or event.pointer_id != session.pointer_id:
            return Outcome.IGNORED
        return self._cancel(session)

    def lost_capture(self, pointer_id: int) -> Outcome:
        session = self.session
        if session is None or pointer_id != session.pointer_id:
            return Outcome.IGNORED
        return self._cancel(session)

    def abort(self) -> Outcome:
        """External abort: drop the active gesture and every pending proposal override."""

        outcome = Outcome.IGNORED
        if self.session is not None:
            outcome = self._cancel(self.session)
        for shift_id in list(self.pending):
            self.abort_proposal(shift_id)
        return outcome

    def confirm_proposal(self, shift_id: str) -> None:
        self.pending.pop(shift_id, None)

    def abort_proposal(self, shift_id: str) -> None:
        """Forget a dismissed proposal so the shift renders at its stored position again."""

        had_override = self.pending.pop(shift_id, None) is not None
        if self.session is not None and self.session.shift_id == shift_id:
            return
        if self.previews.pop(shift_id, None) is not None or had_override:
            self.listener.on_preview_changed(shift_id, None)

    def request_quick_add(self, employee_id: str, day: date) -> Outcome:
        """Ask for a new shift in the first free slot of the lane."""

        if not self._is_editable_date(day):
            return self._reject(RejectionReason.PAST_DATE)
        if self.shifts.has_blocked(employee_id, day):
            return self._reject(RejectionReason.UNAVAILABLE)
        slot = self.shifts.first_available_slot(
            employee_id,
            day,
            duration_hours=self.config.ghost_duration_minutes / 60,
            step_hours=self.config.snap_minutes / 60,
            hours=self._business_hours(day),
        )
        if slot is None:
            return self._reject(RejectionReason.NO_FREE_SLOT)
        return self._request_create(employee_id, day, slot[0], slot[1])

    def _arm_shift(self, event: PointerEvent, axis: Axis, mode: DragMode) -> DragSession | Outcome:
        shift_id = event.target.shift_id
        shift = self.shifts.get(shift_id) if shift_id is not None else None
        if shift is None:
            return Outcome.CANCELLED
        if shift.is_blocked:
            return Outcome.IGNORED
        if shift.date not in axis.dates:
            return Outcome.IGNORED
        if not self._is_editable_date(shift.date):
            return self._reject(RejectionReason.PAST_DATE)
        day_index = axis.dates.index(shift.date)
        base = day_index * MINUTES_PER_DAY
        return DragSession(
            pointer_id=event.pointer_id,
            mode=mode,
            axis=axis,
            employee_id=shift.employee_id,
            shift_id=shift.id,
            anchor_start=base + shift.start_hour * 60,
            anchor_end=base + shift.end_hour * 60,
            anchor_day_index=day_index,
            anchor_x=event.x,
            anchor_y=event.y,
            anchor_pointer_minutes=axis.offset_to_minutes(event.x),
            started_at_ms=event.timestamp_ms,
            pointer_type=PointerType(event.pointer_type),
        )

    def _arm_create(self, event: PointerEvent, axis: Axis) -> DragSession | Outcome:
        target = event.target
        if target.employee_id is None:
            return Outcome.IGNORED
        point = axis.offset_to_time(event.x)
        day = target.date or point.date
        if day not in axis.dates:
            return Outcome.IGNORED
        if not self._is_editable_date(day):
            return self._reject(RejectionReason.PAST_DATE)
        if self.shifts.has_blocked(target.employee_id, day):
            return self._reject(RejectionReason.UNAVAILABLE)
        slot = self.ghost.resolve(
            HoverInput(target.employee_id, day, point.hour, PointerType(event.pointer_type))
        )
        if slot is None:
            return Outcome.IGNORED
        day_index = axis.dates.index(day)
        base = day_index * MINUTES_PER_DAY
        return DragSession(
            pointer_id=event.pointer_id,
            mode=DragMode.CREATE,
            axis=axis,
            employee_id=target.employee_id,
            shift_id=None,
            anchor_start=base + slot.start_hour * 60,
            anchor_end=base + slot.end_hour * 60,
            anchor_day_index=day_index,
            anchor_x=event.x,
            anchor_y=event.y,
            anchor_pointer_minutes=axis.offset_to_minutes(event.x),
            started_at_ms=event.timestamp_ms,
            pointer_type=PointerType(event.pointer_type),
            ghost=slot,
        )

    def _limits(self, axis: Axis, day_index: int) -> tuple[float, float]:
        day = axis.dates[day_index]
        hours = self._business_hours(day)
        if hours is not None and hours.span_hours * 60 >= self.config.min_duration_minutes:
            return day_bounds(day_index, hours.open_hour, hours.close_hour)
        return day_bounds(day_index)

    def _candidate(self, session: DragSession, x: float) -> tuple[float, float]:
        axis = session.axis
        step = self.config.snap_minutes
        min_duration = self.config.min_duration_minutes
        pointer = axis.offset_to_minutes(x)
        delta = pointer - session.anchor_pointer_minutes

        if session.mode is DragMode.MOVE:
            duration = session.anchor_end - session.anchor_start
            start = snap(session.anchor_start + delta, step)
            end = start + duration
            if isinstance(axis, ContinuousAxis):
                start, end = clamp_move(start, end, 0, axis.span_minutes, min_duration=min_duration)
                landing = min(max(day_index_of((start + end) / 2), 0), axis.days - 1)
                low, high = self._limits(axis, landing)
            else:
                low, high = self._limits(axis, session.anchor_day_index)
            return clamp_move(start, end, low, high, min_duration=min_duration)

        low, high = self._limits(axis, session.anchor_day_index)
        if session.mode is DragMode.RESIZE_LEFT:
            start = snap(session.anchor_start + delta, step)
            return clamp_resize(
                start, session.anchor_end, low, high, ResizeEdge.LEFT, min_duration=min_duration
            )
        if session.mode is DragMode.RESIZE_RIGHT:
            end = snap(session.anchor_end + delta, step)
            return clamp_resize(
                session.anchor_start, end, low, high, ResizeEdge.RIGHT, min_duration=min_duration
            )

        # Create drags grow the ghost slot towards the pointer.
        snapped = snap(pointer, step)
        if delta >= 0:
            end = max(session.anchor_end, snapped)
            return clamp_resize(
                session.anchor_start, end, low, high, ResizeEdge.RIGHT, min_duration=min_duration
            )
        start = min(session.anchor_start, snapped)
        return clamp_resize(
            start, session.anchor_end, low, high, ResizeEdge.LEFT, min_duration=min_duration
        )

    def _to_proposal(self, session: DragSession, start: float, end: float) -> ShiftProposal:
        axis = session.axis
        index = min(max(day_index_of(start), 0), len(axis.dates) - 1)
        base = index * MINUTES_PER_DAY
        return ShiftProposal(
            date=axis.dates[index],
            start_hour=(start - base) / 60,
            end_hour=(end - base) / 60,
            employee_id=session.employee_id,
        )

    def _update_candidate(self, session: DragSession, x: float) -> ShiftProposal:
        start, end = self._candidate(session, x)
        preview = self._to_proposal(session, start, end)
        key = session.shift_id or CREATE_PREVIEW_KEY
        if self.previews.get(key) != preview:
            self.previews[key] = preview
            self.listener.on_preview_changed(key, preview)
        return preview

    def _apply_move(self, event: PointerEvent) -> None:
        session = self.session
        if session is None or not session.activated or event.pointer_id != session.pointer_id:
            return
        self._update_candidate(session, event.x)

    def _track(self, session: DragSession, event: PointerEvent) -> None:
        displacement = max(abs(event.x - session.anchor_x), abs(event.y - session.anchor_y))
        session.max_displacement = max(session.max_displacement, displacement)

    def _is_click(self, session: DragSession, event: PointerEvent) -> bool:
        duration = event.timestamp_ms - session.started_at_ms
        return (
            session.max_displacement < self.config.click_distance_px
            and duration < self.config.click_max_duration_ms
        )

    def _finish_unactivated(self, session: DragSession, event: PointerEvent) -> Outcome:
        if session.mode is DragMode.CREATE:
            slot = session.ghost
            if slot is None or not self._is_click(session, event):
                self.listener.on_cancelled(None)
                return Outcome.CANCELLED
            return self._request_create(
                session.employee_id, slot.date, slot.start_hour, slot.end_hour
            )
        shift = self._session_shift(session)
        if shift is None:
            return Outcome.CANCELLED
        self.listener.on_shift_clicked(shift.id)
        return Outcome.CLICKED

    def _session_shift(self, session: DragSession) -> Shift | None:
        if session.shift_id is None:
            return None
        return self.shifts.get(session.shift_id)

    def _finish_shift_drag(self, session: DragSession, proposal: ShiftProposal) -> Outcome:
        shift = self._session_shift(session)
        if shift is None:
            self.listener.on_cancelled(session.shift_id)
            return Outcome.CANCELLED
        unchanged = (
            proposal.date == shift.date
            and abs(proposal.start_hour - shift.start_hour) < _EPSILON
            and abs(proposal.end_hour - shift.end_hour) < _EPSILON
        )
        if unchanged:
            return Outcome.NO_CHANGE
        if not self._is_editable_date(proposal.date):
            return self._reject(RejectionReason.PAST_DATE)
        self.pending[shift.id] = proposal
        self.listener.on_shift_proposed(shift.id, proposal)
        return Outcome.PROPOSED

    def _request_create(
        self, employee_id: str, day: date, start_hour: float, end_hour: float
    ) -> Outcome:
        if not self._is_editable_date(day):
            return self._reject(RejectionReason.PAST_DATE)
        if self._has_overlap(employee_id, day, start_hour, end_hour):
            return self._reject(RejectionReason.OVERLAP)
        self.listener.on_create_requested(employee_id, day, start_hour, end_hour)
        return Outcome.CREATE_REQUESTED

    def _reject(self, reason: RejectionReason) -> Outcome:
        self.listener.on_rejected(reason, _MESSAGES[reason])
        return Outcome.REJECTED

    def _cancel(self, session: DragSession) -> Outcome:
        self._move_task.cancel()
        self._end_session(session)
        self.listener.on_cancelled(session.shift_id)
        return Outcome.CANCELLED

    def _end_session(self, session: DragSession) -> None:
        if session.captured:
            self.lock.release(session.pointer_id)
        self._clear_preview(session.shift_id or CREATE_PREVIEW_KEY)
        if self.session is session:
            self.session = None

    def _clear_preview(self, key: str) -> None:
        if self.previews.pop(key, None) is not None:
            self.listener.on_preview_changed(key, None)
