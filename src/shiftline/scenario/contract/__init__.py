"""Data contract for timeline inputs."""

from .gestures import GestureAction, GestureScript, GestureStep, GestureTarget
from .models import BusinessHoursRow, ScheduleState, Shift, TimelineScenario, ViewMode

__all__ = [
    "BusinessHoursRow",
    "ScheduleState",
    "Shift",
    "TimelineScenario",
    "ViewMode",
    "GestureAction",
    "GestureScript",
    "GestureStep",
    "GestureTarget",
]
