"""Drive a timeline engine from a scripted gesture list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from shiftline.core.errors import ShiftlineValueError
from shiftline.scenario.contract.gestures import GestureAction, GestureStep
from shiftline.timeline.controller import Outcome, PointerEvent, PointerTarget, TargetKind
from shiftline.timeline.engine import TimelineEngine
from shiftline.timeline.frames import ManualFrameSource
from shiftline.timeline.ghost import PointerType

__all__ = ["ReplayStep", "replay_steps", "pointer_event_for"]

T = TypeVar("T")


@dataclass(slots=True)
class ReplayStep:
    index: int
    action: str
    outcome: str


def _required(value: T | None, step: GestureStep, name: str) -> T:
    if value is None:
        raise ShiftlineValueError(f"'{step.action.value}' steps require {name}")
    return value


def pointer_event_for(step: GestureStep) -> PointerEvent:
    target = PointerTarget(
        kind=TargetKind(step.target.kind),
        shift_id=step.target.shift_id,
        employee_id=step.target.employee_id,
        date=step.target.date,
    )
    return PointerEvent(
        pointer_id=step.pointer_id,
        x=step.x,
        y=step.y,
        timestamp_ms=step.t,
        pointer_type=PointerType(step.pointer_type),
        target=target,
    )


def replay_steps(
    engine: TimelineEngine,
    steps: Iterable[GestureStep],
    *,
    frames: ManualFrameSource | None = None,
) -> list[ReplayStep]:
    """Feed ``steps`` to ``engine`` and report each step's outcome.

    When the engine runs on a :class:`ManualFrameSource`, pass it as ``frames``; it is ticked
    only on explicit ``tick`` steps and before pointer-up, so coalescing is observable.
    """

    controller = engine.controller
    window = engine.window
    results: list[ReplayStep] = []
    for index, step in enumerate(steps):
        outcome: Outcome | str = Outcome.IGNORED
        action = step.action
        if action is GestureAction.DOWN:
            outcome = controller.pointer_down(pointer_event_for(step))
        elif action is GestureAction.MOVE:
            outcome = controller.pointer_move(pointer_event_for(step))
        elif action is GestureAction.UP:
            if frames is not None:
                frames.tick()
            outcome = controller.pointer_up(pointer_event_for(step))
        elif action is GestureAction.CANCEL:
            outcome = controller.pointer_cancel(pointer_event_for(step))
        elif action is GestureAction.LOST_CAPTURE:
            outcome = controller.lost_capture(step.pointer_id)
        elif action is GestureAction.HOVER:
            controller.pointer_hover(pointer_event_for(step))
            outcome = "hover"
        elif action is GestureAction.LEAVE:
            controller.pointer_leave()
            outcome = "leave"
        elif action is GestureAction.TICK:
            ran = frames.tick() if frames is not None else 0
            outcome = f"tick:{ran}"
        elif action is GestureAction.ABORT:
            outcome = controller.abort()
        elif action is GestureAction.CONFIRM:
            controller.confirm_proposal(_required(step.shift_id, step, "shift_id"))
            outcome = "confirmed"
        elif action is GestureAction.DISMISS:
            controller.abort_proposal(_required(step.shift_id, step, "shift_id"))
            outcome = "dismissed"
        elif action is GestureAction.GOTO:
            window.go_to_date(_required(step.date, step, "date"), reanchor=step.reanchor)
            outcome = f"window:{window.selected_date.isoformat()}"
        elif action is GestureAction.SCROLL:
            window.on_scroll(step.x)
            command = window.handle_scroll_edge(step.x, step.t)
            outcome = f"scroll:{command.target.isoformat()}" if command else "scroll"
        elif action is GestureAction.QUICK_ADD:
            outcome = controller.request_quick_add(
                _required(step.employee_id, step, "employee_id"), _required(step.date, step, "date")
            )
        elif action is GestureAction.CONTINUOUS:
            window.enter_continuous(step.date)
            outcome = f"window:{window.selected_date.isoformat()}"
        elif action is GestureAction.SINGLE_DAY:
            window.enter_single_day()
            outcome = "single-day"
        label = outcome.value if isinstance(outcome, Outcome) else str(outcome)
        results.append(ReplayStep(index=index, action=action.value, outcome=label))
    return results
