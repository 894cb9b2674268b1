"""View-mode and continuous-window state.

In continuous mode the timeline shows exactly three consecutive days, ``[target - 1, target,
target + 1]``. ``anchor_date`` remembers the last day the user explicitly jumped to; ordinary
navigation (toolbar arrows, scroll-edge hits) may only move the window one day either side of
it, while a re-anchoring jump ("Today", date picker) resets the anchor outright.

Example
-------
>>> from datetime import date
>>> manager = WindowManager(TimelineConfig(), viewport_width_px=1200, selected_date=date(2024, 6, 10))
>>> _ = manager.enter_continuous()
>>> _ = manager.go_to_date(date(2024, 6, 20))
>>> manager.state.dates[1]
datetime.date(2024, 6, 11)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from shiftline.scenario.contract.models import ViewMode
from shiftline.timeline.config import WINDOW_DAYS, TimelineConfig
from shiftline.timeline.frames import CoalescedTask, FrameSource, ImmediateFrameSource
from shiftline.timeline.hours import BusinessHours
from shiftline.timeline.mapper import Axis, ContinuousAxis, single_day_axis_for

__all__ = ["ScrollCommand", "WindowState", "WindowManager", "midnight"]

BusinessHoursLookup = Callable[[date], BusinessHours | None]
ONE_DAY = timedelta(days=1)


def midnight(value: date | datetime) -> date:
    """Calendar day of ``value`` (time-of-day discarded)."""

    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True, slots=True)
class ScrollCommand:
    """Request for the host to scroll the continuous viewport."""

    scroll_left: float
    window_start: date
    target: date


@dataclass(frozen=True, slots=True)
class WindowState:
    """Continuous-mode state published to the presentation layer."""

    window_start: date
    anchor_date: date
    displayed_date: date

    @property
    def dates(self) -> tuple[date, ...]:
        return tuple(self.window_start + timedelta(days=i) for i in range(WINDOW_DAYS))


class WindowManager:
    """Owns the view mode, the selected day and the continuous window."""

    def __init__(
        self,
        config: TimelineConfig,
        *,
        viewport_width_px: float,
        selected_date: date,
        business_hours: BusinessHoursLookup | None = None,
        frame_source: FrameSource | None = None,
        scroll_sink: Callable[[ScrollCommand], None] | None = None,
        displayed_date_sink: Callable[[date], None] | None = None,
    ) -> None:
        self.config = config
        self.viewport_width_px = float(viewport_width_px)
        self.selected_date = midnight(selected_date)
        self.mode = ViewMode.SINGLE_DAY
        self.anchor_date: date | None = None
        self.window_start: date | None = None
        self.displayed_date: date | None = None
        self.scroll_left = 0.0
        self._business_hours = business_hours or (lambda _day: None)
        self._scroll_sink = scroll_sink
        self._displayed_date_sink = displayed_date_sink
        self._edge_locked_until = -math.inf
        source = frame_source or ImmediateFrameSource()
        self._scroll_task: CoalescedTask[ScrollCommand] = CoalescedTask(source, self._emit_scroll)
        self._settle_task: CoalescedTask[float] = CoalescedTask(source, self._settle)

    @property
    def is_continuous(self) -> bool:
        return self.mode is ViewMode.CONTINUOUS

    @property
    def state(self) -> WindowState | None:
        """Window state, or ``None`` in single-day mode."""

        if not self.is_continuous or self.window_start is None or self.anchor_date is None:
            return None
        return WindowState(
            window_start=self.window_start,
            anchor_date=self.anchor_date,
            displayed_date=self.displayed_date or self.selected_date,
        )

    def axis(self) -> Axis:
        if self.is_continuous and self.window_start is not None:
            return ContinuousAxis(self.window_start, self.config.continuous_px_per_hour)
        return single_day_axis_for(
            self.selected_date,
            self.viewport_width_px,
            self._business_hours(self.selected_date),
        )

    def scrollable_width(self) -> float:
        return max(0.0, self.axis().width_px - self.viewport_width_px)

    def enter_continuous(self, selected_date: date | None = None) -> ScrollCommand:
        """Switch to continuous mode, re-anchoring on the selected day."""

        target = midnight(selected_date or self.selected_date)
        self.mode = ViewMode.CONTINUOUS
        self.anchor_date = target
        return self.recenter(target)

    def enter_single_day(self) -> None:
        self.mode = ViewMode.SINGLE_DAY
        self.anchor_date = None
        self.window_start = None
        self.displayed_date = None
        self.scroll_left = 0.0
        self._scroll_task.cancel()
        self._settle_task.cancel()

    def go_to_date(self, target: date | datetime, *, reanchor: bool = False) -> ScrollCommand | None:
        """Navigate to ``target``.

        Without ``reanchor`` the target is clamped to one day either side of the anchor. With it,
        the anchor moves to ``target`` first so explicit jumps are never blocked.
        """

        day = midnight(target)
        if not self.is_continuous:
            self.selected_date = day
            return None
        if reanchor or self.anchor_date is None:
            self.anchor_date = day
        else:
            low, high = self.anchor_date - ONE_DAY, self.anchor_date + ONE_DAY
            day = min(high, max(low, day))
        return self.recenter(day)

    def go_to_previous(self) -> ScrollCommand | None:
        return self.go_to_date(self.selected_date - ONE_DAY)

    def go_to_next(self) -> ScrollCommand | None:
        return self.go_to_date(self.selected_date + ONE_DAY)

    def recenter(self, target: date) -> ScrollCommand:
        """Rebuild the window around ``target`` and schedule the matching scroll."""

        self.selected_date = target
        self.window_start = target - ONE_DAY
        self.displayed_date = target
        offset = self.center_offset(target)
        self.scroll_left = offset
        command = ScrollCommand(scroll_left=offset, window_start=self.window_start, target=target)
        self._scroll_task.submit(command)
        return command

    def center_offset(self, target: date) -> float:
        """Scroll offset that puts ``target``'s focus hour in the middle of the viewport."""

        hours = self._business_hours(target)
        if hours is not None:
            center_hour = min(24.0, hours.open_hour + self.config.recenter_open_offset_hours)
        else:
            center_hour = self.config.default_center_hour
        px_per_hour = self.config.continuous_px_per_hour
        raw = (24 + center_hour) * px_per_hour - self.viewport_width_px / 2
        return max(0.0, min(self.scrollable_width(), raw))

    def on_scroll(self, scroll_left: float) -> None:
        """Record a scroll position; the header date is recomputed once per frame."""

        self.scroll_left = scroll_left
        if self.is_continuous:
            self._settle_task.submit(scroll_left)

    def displayed_date_at(self, scroll_left: float) -> date:
        axis = self.axis()
        if not isinstance(axis, ContinuousAxis):
            return self.selected_date
        return axis.date_at_offset(scroll_left + self.viewport_width_px / 2)

    def handle_scroll_edge(self, scroll_left: float, now_ms: float) -> ScrollCommand | None:
        """Step one day when the viewport reaches either scroll edge.

        Further edge hits are ignored until the cooldown has elapsed.
        """

        if not self.is_continuous or now_ms < self._edge_locked_until:
            return None
        axis = self.axis()
        if axis.width_px <= self.viewport_width_px:
            return None
        threshold = self.config.scroll_edge_threshold_px
        if scroll_left <= threshold:
            command = self.go_to_previous()
        elif scroll_left + self.viewport_width_px >= axis.width_px - threshold:
            command = self.go_to_next()
        else:
            return None
        self._edge_locked_until = now_ms + self.config.scroll_edge_cooldown_ms
        return command

    def _emit_scroll(self, command: ScrollCommand) -> None:
        if self._scroll_sink is not None:
            self._scroll_sink(command)

    def _settle(self, scroll_left: float) -> None:
        displayed = self.displayed_date_at(scroll_left)
        if displayed != self.displayed_date:
            self.displayed_date = displayed
            if self._displayed_date_sink is not None:
                self._displayed_date_sink(displayed)
