from __future__ import annotations

from datetime import date, timedelta

import pytest

from shiftline.timeline.config import TimelineConfig
from shiftline.timeline.frames import ManualFrameSource
from shiftline.timeline.ghost import GhostSlot, HoverGhostCalculator, HoverInput, PointerType
from shiftline.timeline.hours import BusinessHours

MONDAY = date(2024, 6, 10)


def _calculator(hours=BusinessHours(10.0, 23.0), **kwargs) -> HoverGhostCalculator:
    kwargs.setdefault("is_editable_date", lambda day: day >= MONDAY)
    return HoverGhostCalculator(TimelineConfig(), business_hours=lambda _day: hours, **kwargs)


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(16.0, (15.5, 16.5)), (16.2, (15.75, 16.75)), (10.2, (10.0, 11.0)), (22.9, (22.0, 23.0))],
)
def test_slot_is_centred_and_kept_inside_opening_hours(hour, expected):
    slot = _calculator().slot_for("E1", MONDAY, hour)
    assert slot == GhostSlot("E1", MONDAY, *expected)


def test_no_slot_without_business_hours_or_on_past_days():
    assert _calculator(hours=None).slot_for("E1", MONDAY, 12.0) is None
    assert _calculator().slot_for("E1", MONDAY - timedelta(days=1), 12.0) is None


def test_no_slot_when_opening_is_shorter_than_the_ghost():
    assert _calculator(hours=BusinessHours(10.0, 10.5)).slot_for("E1", MONDAY, 10.0) is None


def test_compute_gates():
    calc = _calculator()
    assert calc.compute(None) is None
    assert calc.compute(HoverInput("E1", MONDAY, 12.0, over_grid=False)) is None
    assert calc.compute(HoverInput("E1", MONDAY, 12.0, PointerType.TOUCH)) is None
    busy = _calculator(is_drag_active=lambda: True)
    assert busy.compute(HoverInput("E1", MONDAY, 12.0)) is None
    assert calc.compute(HoverInput("E1", MONDAY, 12.0, PointerType.PEN)) is not None


def test_updates_are_coalesced_per_frame():
    frames = ManualFrameSource()
    seen: list[GhostSlot | None] = []
    calc = _calculator(frame_source=frames, sink=seen.append)
    for hour in (12.0, 13.0, 14.0):
        calc.update(HoverInput("E1", MONDAY, hour))
    assert seen == []
    assert frames.pending == 1
    frames.tick()
    assert seen == [GhostSlot("E1", MONDAY, 13.5, 14.5)]
    calc.update(HoverInput("E1", MONDAY, 14.0))
    frames.tick()
    assert len(seen) == 1
    calc.clear()
    assert seen[-1] is None
    assert calc.current is None


def test_resolve_reuses_displayed_ghost():
    frames = ManualFrameSource()
    calc = _calculator(frame_source=frames)
    calc.update(HoverInput("E1", MONDAY, 12.0))
    resolved = calc.resolve(HoverInput("E1", MONDAY, 12.1))
    assert resolved == GhostSlot("E1", MONDAY, 11.5, 12.5)
    other_lane = calc.resolve(HoverInput("E2", MONDAY, 18.0))
    assert other_lane == GhostSlot("E2", MONDAY, 17.5, 18.5)


def test_touch_resolves_on_the_tap_position():
    calc = _calculator()
    slot = calc.resolve(HoverInput("E1", MONDAY, 18.0, PointerType.TOUCH))
    assert slot == GhostSlot("E1", MONDAY, 17.5, 18.5)
