"""Conversions between wall-clock time and a horizontal pixel axis.

Two axes are provided:

* :class:`SingleDayAxis` stretches the displayed day's visible hours across the viewport.
* :class:`ContinuousAxis` lays a three-day window out at a fixed pixels-per-hour scale.

Both work in *absolute minutes* internally. For the single-day axis these count from midnight
of the displayed date; for the continuous axis they count from midnight of the window's first
day. Dates outside an axis are not representable and map to ``None``; callers ignore such input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol

from shiftline.core.errors import ShiftlineValueError
from shiftline.timeline.config import MINUTES_PER_DAY, WINDOW_DAYS
from shiftline.timeline.hours import BusinessHours

__all__ = [
    "TimePoint",
    "Axis",
    "SingleDayAxis",
    "ContinuousAxis",
    "single_day_axis_for",
    "current_time_offset",
]


@dataclass(frozen=True, slots=True)
class TimePoint:
    """A date plus a decimal hour on that date."""

    date: date
    hour: float


class Axis(Protocol):
    """Shared contract of the single-day and continuous axes."""

    px_per_hour: float

    @property
    def width_px(self) -> float: ...

    @property
    def dates(self) -> tuple[date, ...]: ...

    def time_to_offset(self, day: date, hour: float) -> float | None: ...

    def offset_to_time(self, px: float) -> TimePoint: ...

    def minutes_for(self, day: date, hour: float) -> float | None: ...

    def offset_to_minutes(self, px: float) -> float: ...

    def minutes_to_offset(self, minutes: float) -> float: ...

    def point_for_minutes(self, minutes: float) -> TimePoint | None: ...


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True, slots=True)
class SingleDayAxis:
    """One day, ``visible_start_hour``..``visible_end_hour`` spread over ``viewport_width_px``."""

    day: date
    viewport_width_px: float
    visible_start_hour: float = 0.0
    visible_end_hour: float = 24.0

    def __post_init__(self) -> None:
        if self.viewport_width_px <= 0:
            raise ShiftlineValueError("viewport_width_px must be > 0")
        if not 0 <= self.visible_start_hour < self.visible_end_hour <= 24:
            raise ShiftlineValueError("visible hours must satisfy 0 <= start < end <= 24")

    @property
    def visible_hour_count(self) -> float:
        return self.visible_end_hour - self.visible_start_hour

    @property
    def px_per_hour(self) -> float:
        return self.viewport_width_px / self.visible_hour_count

    @property
    def width_px(self) -> float:
        return self.viewport_width_px

    @property
    def dates(self) -> tuple[date, ...]:
        return (self.day,)

    def minutes_for(self, day: date, hour: float) -> float | None:
        if day != self.day:
            return None
        return _clamp(hour, self.visible_start_hour, self.visible_end_hour) * 60

    def time_to_offset(self, day: date, hour: float) -> float | None:
        minutes = self.minutes_for(day, hour)
        if minutes is None:
            return None
        return self.minutes_to_offset(minutes)

    def minutes_to_offset(self, minutes: float) -> float:
        hours = _clamp(minutes / 60, self.visible_start_hour, self.visible_end_hour)
        return (hours - self.visible_start_hour) * self.px_per_hour

    def offset_to_minutes(self, px: float) -> float:
        px = _clamp(px, 0.0, self.viewport_width_px)
        return (self.visible_start_hour + px / self.px_per_hour) * 60

    def offset_to_time(self, px: float) -> TimePoint:
        return TimePoint(self.day, self.offset_to_minutes(px) / 60)

    def point_for_minutes(self, minutes: float) -> TimePoint | None:
        if not 0 <= minutes <= MINUTES_PER_DAY:
            return None
        return TimePoint(self.day, minutes / 60)


@dataclass(frozen=True, slots=True)
class ContinuousAxis:
    """Three consecutive days starting at ``window_start`` at a fixed horizontal scale."""

    window_start: date
    px_per_hour: float
    days: int = WINDOW_DAYS

    def __post_init__(self) -> None:
        if self.px_per_hour <= 0:
            raise ShiftlineValueError("px_per_hour must be > 0")
        if self.days < 1:
            raise ShiftlineValueError("days must be >= 1")

    @property
    def width_px(self) -> float:
        return self.days * 24 * self.px_per_hour

    @property
    def span_minutes(self) -> int:
        return self.days * MINUTES_PER_DAY

    @property
    def dates(self) -> tuple[date, ...]:
        return tuple(self.window_start + timedelta(days=i) for i in range(self.days))

    def day_index(self, day: date) -> int | None:
        index = (day - self.window_start).days
        if not 0 <= index < self.days:
            return None
        return index

    def minutes_for(self, day: date, hour: float) -> float | None:
        index = self.day_index(day)
        if index is None:
            return None
        return (index * 24 + _clamp(hour, 0.0, 24.0)) * 60

    def time_to_offset(self, day: date, hour: float) -> float | None:
        minutes = self.minutes_for(day, hour)
        if minutes is None:
            return None
        return self.minutes_to_offset(minutes)

    def minutes_to_offset(self, minutes: float) -> float:
        return _clamp(minutes, 0.0, self.span_minutes) / 60 * self.px_per_hour

    def offset_to_minutes(self, px: float) -> float:
        return _clamp(px, 0.0, self.width_px) / self.px_per_hour * 60

    def point_for_minutes(self, minutes: float) -> TimePoint | None:
        if not 0 <= minutes <= self.span_minutes:
            return None
        return self._point(minutes)

    def _point(self, minutes: float) -> TimePoint:
        index = min(int(math.floor(minutes / MINUTES_PER_DAY)), self.days - 1)
        return TimePoint(
            self.window_start + timedelta(days=index),
            (minutes - index * MINUTES_PER_DAY) / 60,
        )

    def offset_to_time(self, px: float) -> TimePoint:
        return self._point(self.offset_to_minutes(px))

    def date_at_offset(self, px: float) -> date:
        """Day whose 24-hour span contains ``px``."""

        return self.offset_to_time(px).date


def single_day_axis_for(
    day: date,
    viewport_width_px: float,
    hours: BusinessHours | None,
) -> SingleDayAxis:
    """Axis for ``day`` sized to its opening hours, or the whole day when none are set."""

    if hours is None:
        return SingleDayAxis(day, viewport_width_px)
    start, end = hours.visible_range()
    return SingleDayAxis(day, viewport_width_px, start, end)


def current_time_offset(axis: Axis, now: datetime) -> float | None:
    """Pixel offset of the "now" marker, or ``None`` when ``now`` is off the axis."""

    hour = now.hour + now.minute / 60 + now.second / 3600
    minutes = axis.minutes_for(now.date(), hour)
    if minutes is None:
        return None
    if isinstance(axis, SingleDayAxis) and not (
        axis.visible_start_hour <= hour <= axis.visible_end_hour
    ):
        return None
    return axis.minutes_to_offset(minutes)
