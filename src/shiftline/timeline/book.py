"""Read-only shift collection handed to the engine by the host application."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from datetime import date

from shiftline.scenario.contract.models import Shift
from shiftline.timeline.hours import BusinessHours

__all__ = ["ShiftBook"]


class ShiftBook:
    """Indexes shifts by id and by employee/day."""

    def __init__(self, shifts: Iterable[Shift] = ()) -> None:
        self._by_id: dict[str, Shift] = {}
        self._by_lane: dict[tuple[str, date], list[Shift]] = defaultdict(list)
        for shift in shifts:
            self._by_id[shift.id] = shift
            self._by_lane[(shift.employee_id, shift.date)].append(shift)
        for lane in self._by_lane.values():
            lane.sort(key=lambda item: (item.start_hour, item.end_hour))

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Shift]:
        return iter(self._by_id.values())

    def __contains__(self, shift_id: object) -> bool:
        return shift_id in self._by_id

    def get(self, shift_id: str) -> Shift | None:
        return self._by_id.get(shift_id)

    def for_lane(self, employee_id: str, day: date) -> list[Shift]:
        return list(self._by_lane.get((employee_id, day), ()))

    def for_date(self, day: date) -> list[Shift]:
        return [shift for shift in self._by_id.values() if shift.date == day]

    def has_overlap(
        self,
        employee_id: str,
        day: date,
        start_hour: float,
        end_hour: float,
        exclude_id: str | None = None,
    ) -> bool:
        """True when ``[start_hour, end_hour)`` intersects a non-blocked shift in the lane."""

        for shift in self._by_lane.get((employee_id, day), ()):
            if shift.is_blocked or shift.id == exclude_id:
                continue
            if start_hour < shift.end_hour and end_hour > shift.start_hour:
                return True
        return False

    def has_blocked(self, employee_id: str, day: date) -> bool:
        return any(shift.is_blocked for shift in self._by_lane.get((employee_id, day), ()))

    def first_available_slot(
        self,
        employee_id: str,
        day: date,
        *,
        duration_hours: float = 1.0,
        step_hours: float = 0.25,
        hours: BusinessHours | None = None,
    ) -> tuple[float, float] | None:
        """Earliest free slot, searching from 9:00 (or opening) and then from the day start."""

        low, high = (hours.open_hour, hours.close_hour) if hours else (0.0, 24.0)
        preferred = max(low, 9.0) if hours is None else low
        for origin in (preferred, low):
            start = origin
            while start + duration_hours <= high + 1e-9:
                end = start + duration_hours
                if not self.has_overlap(employee_id, day, start, end):
                    return start, end
                start += step_hours
        return None
