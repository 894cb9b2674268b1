"""Grid snapping and range clamping over absolute minutes.

Every function here is pure: the drag controller feeds it raw candidates and renders whatever
comes back. Move and resize share the same primitives so a block behaves identically whichever
handle is grabbed.

Example
-------
>>> snap(7), snap(8)
(0, 15)
>>> clamp_resize(720, 1410, 600, 1380, ResizeEdge.RIGHT)
(720, 1380)
"""

from __future__ import annotations

import math
from enum import Enum

from shiftline.core.errors import ShiftlineValueError
from shiftline.timeline.config import MINUTES_PER_DAY

__all__ = [
    "SNAP_MINUTES",
    "MIN_DURATION_MINUTES",
    "ResizeEdge",
    "snap",
    "clamp_move",
    "clamp_resize",
    "day_bounds",
    "day_index_of",
]

SNAP_MINUTES = 15
MIN_DURATION_MINUTES = 15


class ResizeEdge(str, Enum):
    LEFT = "left"
    RIGHT = "right"


def snap(minutes: float, step: int = SNAP_MINUTES) -> int:
    """Round ``minutes`` to the nearest multiple of ``step`` (halves round up)."""

    if not math.isfinite(minutes):
        return 0
    return int(math.floor(minutes / step + 0.5)) * step


def _check_bounds(min_bound: float, max_bound: float, min_duration: float) -> None:
    if max_bound - min_bound < min_duration:
        raise ShiftlineValueError(
            f"Clamp range [{min_bound}, {max_bound}] is shorter than the minimum duration "
            f"({min_duration} minutes)"
        )


def clamp_move(
    start: float,
    end: float,
    min_bound: float,
    max_bound: float,
    *,
    min_duration: float = MIN_DURATION_MINUTES,
) -> tuple[float, float]:
    """Slide ``[start, end]`` inside the bounds, preserving its length where possible.

    A block longer than the bounds is trimmed to them.
    """

    _check_bounds(min_bound, max_bound, min_duration)
    if start < min_bound:
        deficit = min_bound - start
        start, end = start + deficit, end + deficit
    if end > max_bound:
        excess = end - max_bound
        start, end = start - excess, end - excess
    start = max(start, min_bound)
    if end - start < min_duration:
        end = min(max_bound, start + min_duration)
        start = max(min_bound, end - min_duration)
    return start, end


def clamp_resize(
    start: float,
    end: float,
    min_bound: float,
    max_bound: float,
    edge: ResizeEdge,
    *,
    min_duration: float = MIN_DURATION_MINUTES,
) -> tuple[float, float]:
    """Clamp the dragged ``edge`` and hold the opposite one.

    The fixed edge only moves when the pair cannot otherwise satisfy both the bounds and the
    minimum duration.
    """

    _check_bounds(min_bound, max_bound, min_duration)
    edge = ResizeEdge(edge)
    if edge is ResizeEdge.LEFT:
        start = min(max(start, min_bound), end - min_duration)
        if start < min_bound:
            start = min_bound
            end = min(max_bound, start + min_duration)
    else:
        end = max(min(end, max_bound), start + min_duration)
        if end > max_bound:
            end = max_bound
            start = max(min_bound, end - min_duration)
    return start, end


def day_index_of(minutes: float) -> int:
    return int(math.floor(minutes / MINUTES_PER_DAY))


def day_bounds(
    day_index: int,
    open_hour: float | None = None,
    close_hour: float | None = None,
) -> tuple[float, float]:
    """Absolute-minute bounds of a day, narrowed to opening hours when given."""

    base = day_index * MINUTES_PER_DAY
    if open_hour is None or close_hour is None:
        return float(base), float(base + MINUTES_PER_DAY)
    return base + open_hour * 60, base + close_hour * 60
