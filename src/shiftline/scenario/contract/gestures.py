"""Pydantic models for scripted gesture replays."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, model_validator


class GestureAction(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"
    LOST_CAPTURE = "lost_capture"
    HOVER = "hover"
    LEAVE = "leave"
    TICK = "tick"
    ABORT = "abort"
    CONFIRM = "confirm"
    DISMISS = "dismiss"
    GOTO = "goto"
    SCROLL = "scroll"
    QUICK_ADD = "quick_add"
    CONTINUOUS = "continuous"
    SINGLE_DAY = "single_day"


class GestureTarget(BaseModel):
    kind: str = "other"
    shift_id: str | None = None
    employee_id: str | None = None
    date: dt.date | None = None


class GestureStep(BaseModel):
    """Single scripted input.

    Pointer actions use ``pointer_id``/``x``/``y``/``t``/``target``; ``confirm``/``dismiss``
    name a ``shift_id``; ``goto`` takes ``date`` and ``reanchor``; ``scroll`` takes ``x`` as the
    scroll offset; ``quick_add`` takes ``employee_id`` and ``date``.
    """

    action: GestureAction
    pointer_id: int = 1
    x: float = 0.0
    y: float = 0.0
    t: float = 0.0
    pointer_type: str = "mouse"
    target: GestureTarget = GestureTarget()
    shift_id: str | None = None
    employee_id: str | None = None
    date: dt.date | None = None
    reanchor: bool = False

    @model_validator(mode="after")
    def _required_fields(self) -> GestureStep:
        if self.action in (GestureAction.CONFIRM, GestureAction.DISMISS) and not self.shift_id:
            raise ValueError(f"'{self.action.value}' steps require shift_id")
        if self.action is GestureAction.GOTO and self.date is None:
            raise ValueError("'goto' steps require date")
        if self.action is GestureAction.QUICK_ADD and (
            self.employee_id is None or self.date is None
        ):
            raise ValueError("'quick_add' steps require employee_id and date")
        return self


class GestureScript(BaseModel):
    name: str = "gestures"
    steps: list[GestureStep]


__all__ = ["GestureAction", "GestureTarget", "GestureStep", "GestureScript"]
