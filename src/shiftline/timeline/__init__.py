"""Interactive shift-timeline engine (mapping, snapping, window, gestures, hover ghost)."""

from .book import ShiftBook
from .config import (
    DEFAULT_PROFILES,
    MINUTES_PER_DAY,
    WINDOW_DAYS,
    Profile,
    TimelineConfig,
    get_profile,
    list_profiles,
)
from .controller import (
    CREATE_PREVIEW_KEY,
    DragMode,
    DragSession,
    GestureState,
    Outcome,
    PointerEvent,
    PointerTarget,
    RejectionReason,
    ShiftProposal,
    TargetKind,
    TimelineController,
    TimelineListener,
)
from .engine import TimelineEngine, build_engine, editable_from
from .frames import CoalescedTask, FrameSource, ImmediateFrameSource, ManualFrameSource
from .ghost import GhostSlot, HoverGhostCalculator, HoverInput, PointerType
from .hours import BusinessHours, BusinessHoursTable
from .lock import InProcessLock, InteractionLock
from .mapper import (
    ContinuousAxis,
    SingleDayAxis,
    TimePoint,
    current_time_offset,
    single_day_axis_for,
)
from .replay import ReplayStep, replay_steps
from .snapping import ResizeEdge, clamp_move, clamp_resize, snap
from .window import ScrollCommand, WindowManager, WindowState

__all__ = [
    "ShiftBook",
    "DEFAULT_PROFILES",
    "MINUTES_PER_DAY",
    "WINDOW_DAYS",
    "Profile",
    "TimelineConfig",
    "get_profile",
    "list_profiles",
    "CREATE_PREVIEW_KEY",
    "DragMode",
    "DragSession",
    "GestureState",
    "Outcome",
    "PointerEvent",
    "PointerTarget",
    "RejectionReason",
    "ShiftProposal",
    "TargetKind",
    "TimelineController",
    "TimelineListener",
    "TimelineEngine",
    "build_engine",
    "editable_from",
    "CoalescedTask",
    "FrameSource",
    "ImmediateFrameSource",
    "ManualFrameSource",
    "GhostSlot",
    "HoverGhostCalculator",
    "HoverInput",
    "PointerType",
    "BusinessHours",
    "BusinessHoursTable",
    "InProcessLock",
    "InteractionLock",
    "ContinuousAxis",
    "SingleDayAxis",
    "TimePoint",
    "current_time_offset",
    "single_day_axis_for",
    "ResizeEdge",
    "clamp_move",
    "clamp_resize",
    "snap",
    "ReplayStep",
    "replay_steps",
    "ScrollCommand",
    "WindowManager",
    "WindowState",
]
