"""Wiring of the timeline components for a loaded scenario."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from shiftline.scenario.contract.models import TimelineScenario, ViewMode
from shiftline.timeline.book import ShiftBook
from shiftline.timeline.config import TimelineConfig, get_profile
from shiftline.timeline.controller import TimelineController, TimelineListener
from shiftline.timeline.frames import FrameSource, ImmediateFrameSource
from shiftline.timeline.ghost import GhostSlot, HoverGhostCalculator
from shiftline.timeline.hours import BusinessHoursTable
from shiftline.timeline.lock import InteractionLock
from shiftline.timeline.window import ScrollCommand, WindowManager

__all__ = ["TimelineEngine", "build_engine", "editable_from"]


def editable_from(today: date) -> Callable[[date], bool]:
    """Editability predicate that forbids days before ``today``."""

    def _is_editable(day: date) -> bool:
        return day >= today

    return _is_editable


@dataclass(slots=True)
class TimelineEngine:
    """Bundle of the collaborating timeline components."""

    config: TimelineConfig
    hours: BusinessHoursTable
    shifts: ShiftBook
    window: WindowManager
    ghost: HoverGhostCalculator
    controller: TimelineController


def build_engine(
    scenario: TimelineScenario,
    *,
    listener: TimelineListener | None = None,
    config: TimelineConfig | None = None,
    frame_source: FrameSource | None = None,
    lock: InteractionLock | None = None,
    is_editable_date: Callable[[date], bool] | None = None,
    scroll_sink: Callable[[ScrollCommand], None] | None = None,
    ghost_sink: Callable[[GhostSlot | None], None] | None = None,
) -> TimelineEngine:
    """Assemble an engine for ``scenario``.

    ``config`` defaults to the scenario's named profile. Continuous scenarios start re-anchored
    on their selected date.
    """

    cfg = config or get_profile(scenario.profile).config
    source = frame_source or ImmediateFrameSource()
    hours = BusinessHoursTable(scenario.business_hours)
    shifts = ShiftBook(scenario.shifts)
    editable = is_editable_date or editable_from(scenario.today)
    selected = scenario.selected_date or scenario.today

    window = WindowManager(
        cfg,
        viewport_width_px=scenario.viewport_width_px,
        selected_date=selected,
        business_hours=hours,
        frame_source=source,
        scroll_sink=scroll_sink,
    )
    if scenario.mode is ViewMode.CONTINUOUS:
        window.enter_continuous(selected)

    controller = TimelineController(
        cfg,
        window=window,
        shifts=shifts,
        business_hours=hours,
        is_editable_date=editable,
        listener=listener,
        ghost_sink=ghost_sink,
        lock=lock,
        frame_source=source,
    )
    return TimelineEngine(
        config=cfg,
        hours=hours,
        shifts=shifts,
        window=window,
        ghost=controller.ghost,
        controller=controller,
    )
