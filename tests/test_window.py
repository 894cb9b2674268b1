from __future__ import annotations

import doctest
from datetime import date, timedelta

import pytest
from hypothesis import given, strategies as st

from shiftline.scenario.contract.models import ViewMode
from shiftline.timeline import window as window_module
from shiftline.timeline.config import TimelineConfig
from shiftline.timeline.frames import ManualFrameSource
from shiftline.timeline.hours import BusinessHours
from shiftline.timeline.window import ScrollCommand, WindowManager

ANCHOR = date(2024, 6, 10)
ONE_DAY = timedelta(days=1)


def _manager(**kwargs) -> WindowManager:
    kwargs.setdefault("viewport_width_px", 1200)
    kwargs.setdefault("selected_date", ANCHOR)
    return WindowManager(TimelineConfig(), **kwargs)


def test_module_examples():
    failures, _ = doctest.testmod(window_module)
    assert failures == 0


def test_enter_continuous_reanchors_on_selected_day():
    manager = _manager()
    assert manager.state is None
    manager.enter_continuous()
    state = manager.state
    assert manager.mode is ViewMode.CONTINUOUS
    assert state is not None
    assert state.anchor_date == ANCHOR
    assert state.window_start == ANCHOR - ONE_DAY
    assert state.dates == (ANCHOR - ONE_DAY, ANCHOR, ANCHOR + ONE_DAY)


def test_goto_without_reanchor_is_clamped_to_anchor_neighbourhood():
    manager = _manager()
    manager.enter_continuous()
    manager.go_to_date(date(2024, 6, 20))
    assert manager.selected_date == date(2024, 6, 11)
    assert manager.state.dates == (date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12))
    assert manager.state.anchor_date == ANCHOR


def test_goto_with_reanchor_moves_the_window():
    manager = _manager()
    manager.enter_continuous()
    manager.go_to_date(date(2024, 6, 20), reanchor=True)
    state = manager.state
    assert state.anchor_date == date(2024, 6, 20)
    assert state.dates == (date(2024, 6, 19), date(2024, 6, 20), date(2024, 6, 21))


def test_single_day_navigation_just_changes_the_day():
    manager = _manager()
    assert manager.go_to_date(date(2024, 7, 1)) is None
    assert manager.selected_date == date(2024, 7, 1)
    assert manager.go_to_next() is None
    assert manager.selected_date == date(2024, 7, 2)


def test_enter_single_day_drops_window_state():
    manager = _manager()
    manager.enter_continuous()
    manager.enter_single_day()
    assert manager.state is None
    assert manager.window_start is None
    assert manager.anchor_date is None


def test_center_offset_uses_business_hours():
    hours = {ANCHOR: BusinessHours(20.0, 23.0)}
    manager = _manager(business_hours=hours.get)
    manager.enter_continuous()
    # Open at 20:00, so focus on 22:00 of the middle day.
    assert manager.center_offset(ANCHOR) == pytest.approx((24 + 22) * 80 - 600)
    # No hours on the next day: noon.
    assert manager.center_offset(ANCHOR + ONE_DAY) == pytest.approx((24 + 12) * 80 - 600)


def test_center_offset_is_clamped_to_scrollable_width():
    manager = _manager(viewport_width_px=6000)
    manager.enter_continuous()
    assert manager.scrollable_width() == 0
    assert manager.center_offset(ANCHOR) == 0


def test_scroll_commands_are_coalesced_per_frame():
    frames = ManualFrameSource()
    commands: list[ScrollCommand] = []
    manager = _manager(frame_source=frames, scroll_sink=commands.append)
    manager.enter_continuous()
    manager.go_to_previous()
    manager.go_to_next()
    assert commands == []
    assert frames.tick() == 1
    assert len(commands) == 1
    assert commands[0].target == manager.selected_date


def test_displayed_date_follows_viewport_center():
    seen: list[date] = []
    manager = _manager(displayed_date_sink=seen.append)
    manager.enter_continuous()
    # The third day starts at 48h * 80px; centre the viewport just past it.
    manager.on_scroll(3300)
    assert seen == [ANCHOR + ONE_DAY]
    manager.on_scroll(3301)
    assert seen == [ANCHOR + ONE_DAY]
    assert manager.displayed_date_at(0) == ANCHOR - ONE_DAY


def test_scroll_edge_navigation_has_a_cooldown():
    manager = _manager()
    manager.enter_continuous()
    command = manager.handle_scroll_edge(0, now_ms=1000)
    assert command is not None
    assert command.target == ANCHOR - ONE_DAY
    assert manager.handle_scroll_edge(0, now_ms=1100) is None
    # Still bounded by the anchor after the cooldown.
    command = manager.handle_scroll_edge(0, now_ms=1400)
    assert command is not None
    assert command.target == ANCHOR - ONE_DAY
    right = manager.axis().width_px - manager.viewport_width_px - 10
    command = manager.handle_scroll_edge(right, now_ms=2000)
    assert command is not None
    assert command.target == ANCHOR
    assert manager.handle_scroll_edge(2000, now_ms=5000) is None


def test_scroll_edge_is_ignored_in_single_day_mode():
    manager = _manager()
    assert manager.handle_scroll_edge(0, now_ms=0) is None


navigation = st.one_of(
    st.just(("previous", 0)),
    st.just(("next", 0)),
    st.tuples(st.just("goto"), st.integers(min_value=-30, max_value=30)),
    st.tuples(st.just("jump"), st.integers(min_value=-30, max_value=30)),
)


@given(st.lists(navigation, min_size=1, max_size=25))
def test_window_stays_within_a_day_of_the_anchor(operations):
    manager = _manager()
    manager.enter_continuous()
    for name, days in operations:
        if name == "previous":
            manager.go_to_previous()
        elif name == "next":
            manager.go_to_next()
        elif name == "goto":
            manager.go_to_date(manager.selected_date + timedelta(days=days))
        else:
            manager.go_to_date(ANCHOR + timedelta(days=days), reanchor=True)
            assert manager.state.window_start == manager.state.anchor_date - ONE_DAY
        state = manager.state
        assert abs((state.window_start + ONE_DAY) - state.anchor_date) <= ONE_DAY
        assert len(state.dates) == 3
