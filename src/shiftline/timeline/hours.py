"""Business-hours resolution and time-of-day formatting helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from shiftline.scenario.contract.models import BusinessHoursRow

__all__ = [
    "BusinessHours",
    "BusinessHoursTable",
    "day_of_week",
    "parse_time_to_decimal",
    "decimal_to_time",
    "format_hour",
    "format_hour_short",
    "format_hour_label",
    "format_shift_duration",
]


def day_of_week(day: date) -> int:
    """Return the weekday with Sunday as 0 (the convention used by hours rows)."""

    return (day.weekday() + 1) % 7


def parse_time_to_decimal(value: str | None) -> float:
    """Parse ``"HH:MM"`` into decimal hours. Blank or malformed input yields ``0``."""

    if not value:
        return 0.0
    text = str(value).strip()
    if not text:
        return 0.0
    hours, _, minutes = text.partition(":")
    try:
        hour = float(hours)
        minute = float(minutes or "0")
    except ValueError:
        return 0.0
    if math.isnan(hour) or math.isnan(minute):
        return 0.0
    return hour + minute / 60


def decimal_to_time(value: float) -> str:
    safe = min(24.0, max(0.0, value))
    total_minutes = int(math.floor(safe * 60 + 0.5))
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def _split(hour: float) -> tuple[int, int]:
    whole = math.floor(hour)
    minutes = int(math.floor((hour - whole) * 60 + 0.5))
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return int(whole), minutes


def format_hour(hour: float) -> str:
    """Compact label such as ``9am`` or ``9:30pm``."""

    h, m = _split(hour)
    period = "pm" if h >= 12 else "am"
    display = 12 if h == 0 else h - 12 if h > 12 else h
    if m == 0:
        return f"{display}{period}"
    return f"{display}:{m:02d}{period}"


def format_hour_short(hour: float) -> str:
    h = math.floor(hour)
    if h in (0, 24):
        return "12a"
    if h == 12:
        return "12p"
    if h > 12:
        return f"{h - 12}p"
    return f"{h}a"


def format_hour_label(value: float) -> str:
    """Axis tick label (``12 AM``, ``6:30 PM``); 24:00 renders as midnight."""

    safe = min(24.0, max(0.0, value))
    if safe == 24:
        return "12 AM"
    h, m = _split(safe)
    period = "PM" if h >= 12 else "AM"
    display = 12 if h == 0 else h - 12 if h > 12 else h
    if m == 0:
        return f"{display} {period}"
    return f"{display}:{m:02d} {period}"


def format_shift_duration(start_hour: float, end_hour: float) -> str:
    duration = end_hour - start_hour
    hours = math.floor(duration)
    minutes = int(math.floor((duration - hours) * 60 + 0.5))
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


@dataclass(frozen=True, slots=True)
class BusinessHours:
    """Resolved opening range for a single day (decimal hours)."""

    open_hour: float
    close_hour: float

    @property
    def open_minutes(self) -> float:
        return self.open_hour * 60

    @property
    def close_minutes(self) -> float:
        return self.close_hour * 60

    @property
    def span_hours(self) -> float:
        return self.close_hour - self.open_hour

    def visible_range(self) -> tuple[float, float]:
        """Whole-hour axis range covering the opening hours."""

        return float(math.floor(self.open_hour)), float(min(24, math.ceil(self.close_hour)))


class BusinessHoursTable:
    """Per-weekday lookup built from hours rows.

    Disabled rows are skipped, rows whose close time is not after the open time are ignored,
    and several enabled rows on the same weekday resolve to their envelope.
    """

    def __init__(self, rows: Iterable[BusinessHoursRow] = ()) -> None:
        resolved: dict[int, BusinessHours] = {}
        for row in rows:
            if not row.enabled:
                continue
            open_hour = parse_time_to_decimal(row.open_time)
            close_hour = parse_time_to_decimal(row.close_time)
            if not close_hour or close_hour <= open_hour:
                continue
            current = resolved.get(row.day_of_week)
            if current is not None:
                open_hour = min(open_hour, current.open_hour)
                close_hour = max(close_hour, current.close_hour)
            resolved[row.day_of_week] = BusinessHours(open_hour, min(24.0, close_hour))
        self._by_weekday = resolved

    def __bool__(self) -> bool:
        return bool(self._by_weekday)

    def for_weekday(self, weekday: int) -> BusinessHours | None:
        return self._by_weekday.get(weekday)

    def for_date(self, day: date) -> BusinessHours | None:
        return self._by_weekday.get(day_of_week(day))

    def __call__(self, day: date) -> BusinessHours | None:
        return self.for_date(day)
