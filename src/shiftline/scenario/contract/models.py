"""Pydantic models describing timeline inputs."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ValidationInfo, field_validator, model_validator


class ScheduleState(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class ViewMode(str, Enum):
    SINGLE_DAY = "single-day"
    CONTINUOUS = "continuous"


class Shift(BaseModel):
    """Time-blocked assignment of an employee on a calendar day.

    Attributes
    ----------
    id:
        Unique shift identifier.
    employee_id:
        Employee lane the shift is drawn in.
    date:
        Calendar day of the shift.
    start_hour / end_hour:
        Decimal hours (``9.5`` is 9:30). ``end_hour`` may be ``24.0`` for a shift closing at
        midnight.
    job / location_id / notes:
        Optional descriptive fields carried through untouched.
    schedule_state:
        ``draft`` or ``published``.
    is_blocked:
        Placeholder for approved time off or an org-wide blackout. Never draggable.
    """

    id: str
    employee_id: str
    date: dt.date
    start_hour: float
    end_hour: float
    job: str | None = None
    location_id: str | None = None
    notes: str | None = None
    schedule_state: ScheduleState = ScheduleState.DRAFT
    is_blocked: bool = False

    @field_validator("start_hour")
    @classmethod
    def _start_in_day(cls, value: float) -> float:
        if not 0 <= value < 24:
            raise ValueError("Shift.start_hour must be within [0, 24)")
        return value

    @field_validator("end_hour")
    @classmethod
    def _end_after_start(cls, value: float, info: ValidationInfo) -> float:
        start = info.data.get("start_hour")
        if value > 24:
            raise ValueError("Shift.end_hour must be <= 24")
        if start is not None and value <= start:
            raise ValueError("Shift.end_hour must be greater than start_hour")
        return value

    @property
    def duration_hours(self) -> float:
        return self.end_hour - self.start_hour


class BusinessHoursRow(BaseModel):
    """Opening range for one weekday (``day_of_week`` 0 = Sunday … 6 = Saturday)."""

    day_of_week: int
    open_time: str
    close_time: str
    enabled: bool = True

    @field_validator("day_of_week")
    @classmethod
    def _weekday_range(cls, value: int) -> int:
        if not 0 <= value <= 6:
            raise ValueError("BusinessHoursRow.day_of_week must be within 0..6")
        return value


class TimelineScenario(BaseModel):
    """Everything the engine needs to replay a session.

    Attributes
    ----------
    name:
        Human-readable scenario label.
    today:
        Reference date; days before it are not editable.
    selected_date:
        Day shown on load (defaults to ``today``).
    mode:
        Initial view mode.
    viewport_width_px:
        Width of the scrolling viewport.
    profile:
        Name of the engine preset (see :mod:`shiftline.timeline.config`).
    shifts / business_hours:
        Read-only inputs for the visible range.
    """

    name: str
    today: dt.date
    selected_date: dt.date | None = None
    mode: ViewMode = ViewMode.SINGLE_DAY
    viewport_width_px: float = 1200.0
    profile: str = "default"
    shifts: list[Shift] = []
    business_hours: list[BusinessHoursRow] = []

    @field_validator("viewport_width_px")
    @classmethod
    def _positive_width(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("viewport_width_px must be > 0")
        return value

    @model_validator(mode="after")
    def _cross_validate(self) -> TimelineScenario:
        seen: set[str] = set()
        for shift in self.shifts:
            if shift.id in seen:
                raise ValueError(f"Duplicate shift id '{shift.id}'")
            seen.add(shift.id)
        if self.selected_date is None:
            self.selected_date = self.today
        return self

    def employee_ids(self) -> list[str]:
        return sorted({shift.employee_id for shift in self.shifts})


__all__ = [
    "ScheduleState",
    "ViewMode",
    "Shift",
    "BusinessHoursRow",
    "TimelineScenario",
]
