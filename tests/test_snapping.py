from __future__ import annotations

import doctest

import pytest
from hypothesis import given, settings, strategies as st

from shiftline.core.errors import ShiftlineValueError
from shiftline.timeline import snapping
from shiftline.timeline.snapping import (
    MIN_DURATION_MINUTES,
    ResizeEdge,
    clamp_move,
    clamp_resize,
    day_bounds,
    day_index_of,
    snap,
)

bounds = st.tuples(
    st.integers(min_value=-3000, max_value=3000),
    st.integers(min_value=MIN_DURATION_MINUTES, max_value=3000),
).map(lambda pair: (pair[0], pair[0] + pair[1]))
positions = st.integers(min_value=-6000, max_value=6000)
durations = st.integers(min_value=0, max_value=4000)


def test_module_examples():
    failures, _ = doctest.testmod(snapping)
    assert failures == 0


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(0, 0), (7, 0), (7.5, 15), (8, 15), (22, 15), (22.5, 30), (-7, 0), (-8, -15), (1439, 1440)],
)
def test_snap_rounds_to_quarter_hours(minutes, expected):
    assert snap(minutes) == expected


def test_snap_custom_step():
    assert snap(14, 5) == 15
    assert snap(44, 30) == 30
    assert snap(float("nan")) == 0


@given(st.floats(min_value=-1e6, max_value=1e6, allow_nan=False))
def test_snap_is_idempotent(value):
    once = snap(value)
    assert snap(once) == once
    assert once % 15 == 0


@given(bounds, positions, durations)
def test_clamp_move_respects_bounds_and_minimum(limits, start, length):
    low, high = limits
    new_start, new_end = clamp_move(start, start + length, low, high)
    assert new_end - new_start >= MIN_DURATION_MINUTES
    assert low <= new_start
    assert new_end <= high


@settings(max_examples=200)
@given(bounds, positions, durations)
def test_clamp_move_preserves_length_when_it_fits(limits, start, length):
    low, high = limits
    if not MIN_DURATION_MINUTES <= length <= high - low:
        return
    new_start, new_end = clamp_move(start, start + length, low, high)
    assert new_end - new_start == length


@given(
    bounds,
    st.floats(min_value=0.0, max_value=1.0),
    positions,
    st.sampled_from(list(ResizeEdge)),
)
def test_clamp_resize_respects_bounds_and_minimum(limits, fraction, dragged, edge):
    low, high = limits
    fixed = low + (high - low) * fraction
    if edge is ResizeEdge.LEFT:
        new_start, new_end = clamp_resize(dragged, fixed, low, high, edge)
    else:
        new_start, new_end = clamp_resize(fixed, dragged, low, high, edge)
    assert new_end - new_start >= MIN_DURATION_MINUTES - 1e-9
    assert low <= new_start
    assert new_end <= high


@given(bounds, positions, positions, st.sampled_from(list(ResizeEdge)))
def test_clamp_resize_holds_the_fixed_edge_while_the_minimum_fits(limits, start, end, edge):
    low, high = limits
    new_start, new_end = clamp_resize(start, end, low, high, edge)
    if edge is ResizeEdge.LEFT and end - MIN_DURATION_MINUTES >= low:
        assert new_end == end
    if edge is ResizeEdge.RIGHT and start + MIN_DURATION_MINUTES <= high:
        assert new_start == start


def test_clamp_move_shifts_into_range():
    assert clamp_move(540, 600, 600, 1380) == (600, 660)
    assert clamp_move(1350, 1410, 600, 1380) == (1320, 1380)


def test_clamp_move_trims_blocks_longer_than_bounds():
    assert clamp_move(500, 1500, 600, 1380) == (600, 1380)


def test_clamp_resize_right_edge_stops_at_close():
    # 12:00-18:00 stretched to 23:30 with the day closing at 23:00.
    assert clamp_resize(720, 1410, 600, 1380, ResizeEdge.RIGHT) == (720, 1380)


def test_clamp_resize_holds_fixed_edge_and_keeps_minimum():
    assert clamp_resize(900, 1080, 600, 1380, ResizeEdge.LEFT) == (900, 1080)
    assert clamp_resize(1200, 1080, 600, 1380, ResizeEdge.LEFT) == (1065, 1080)
    assert clamp_resize(720, 600, 600, 1380, ResizeEdge.RIGHT) == (720, 735)


def test_clamp_resize_pushes_fixed_edge_at_the_boundary():
    # Dragging the right edge to opening time at a fixed start of 10:00 keeps 15 minutes.
    assert clamp_resize(600, 590, 600, 1380, ResizeEdge.RIGHT) == (600, 615)
    # The left edge cannot get closer than 15 minutes to a fixed end at the boundary.
    assert clamp_resize(1390, 1380, 600, 1380, ResizeEdge.LEFT) == (1365, 1380)


def test_clamp_resize_leaves_an_out_of_hours_fixed_edge_alone():
    # 08:00-12:00 with opening hours 10:00-23:00: only the dragged edge is clamped.
    assert clamp_resize(480, 735, 600, 1380, ResizeEdge.RIGHT) == (480, 735)
    assert clamp_resize(480, 1410, 600, 1380, ResizeEdge.RIGHT) == (480, 1380)
    assert clamp_resize(540, 1400, 600, 1380, ResizeEdge.LEFT) == (600, 1400)


def test_clamp_rejects_ranges_shorter_than_minimum():
    with pytest.raises(ShiftlineValueError):
        clamp_move(0, 10, 600, 610)
    with pytest.raises(ShiftlineValueError):
        clamp_resize(0, 10, 600, 610, ResizeEdge.LEFT)


def test_day_helpers():
    assert day_index_of(0) == 0
    assert day_index_of(1439) == 0
    assert day_index_of(1440) == 1
    assert day_index_of(-1) == -1
    assert day_bounds(1) == (1440.0, 2880.0)
    assert day_bounds(2, 10, 23) == (2880 + 600, 2880 + 1380)
