"""Engine constants and named configuration presets."""

from __future__ import annotations

from dataclasses import dataclass, replace

from shiftline.core.errors import ShiftlineValueError

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
WINDOW_DAYS = 3  # continuous mode always shows yesterday/target/tomorrow


@dataclass(frozen=True)
class TimelineConfig:
    """Thresholds and scales handed to the timeline engine at construction.

    Parameters
    ----------
    snap_minutes:
        Grid step applied to every candidate edge (minutes).
    min_duration_minutes:
        Shortest block the engine will ever surface. Must be a multiple of ``snap_minutes``.
    activation_distance_px:
        Pointer travel (either axis) that turns an armed gesture into a drag.
    click_distance_px / click_max_duration_ms:
        A release below both limits is classified as a click.
    continuous_px_per_hour:
        Fixed horizontal scale of the three-day continuous axis.
    ghost_duration_minutes:
        Length of the provisional slot offered by the hover ghost.
    recenter_open_offset_hours / default_center_hour:
        Horizontal focus used when the window is recentred on a day.
    scroll_edge_threshold_px / scroll_edge_cooldown_ms:
        Scroll-edge navigation sensitivity and the quiet period after a jump.
    """

    snap_minutes: int = 15
    min_duration_minutes: int = 15
    activation_distance_px: float = 4.0
    click_distance_px: float = 2.0
    click_max_duration_ms: float = 250.0
    continuous_px_per_hour: float = 80.0
    ghost_duration_minutes: int = 60
    recenter_open_offset_hours: float = 2.0
    default_center_hour: float = 12.0
    scroll_edge_threshold_px: float = 24.0
    scroll_edge_cooldown_ms: float = 300.0

    def __post_init__(self) -> None:
        if self.snap_minutes <= 0 or MINUTES_PER_DAY % self.snap_minutes:
            raise ShiftlineValueError("snap_minutes must be a positive divisor of 1440")
        if self.min_duration_minutes <= 0:
            raise ShiftlineValueError("min_duration_minutes must be > 0")
        if self.min_duration_minutes % self.snap_minutes:
            raise ShiftlineValueError("min_duration_minutes must be a multiple of snap_minutes")
        if self.activation_distance_px <= 0:
            raise ShiftlineValueError("activation_distance_px must be > 0")
        if not 0 < self.click_distance_px < self.activation_distance_px:
            raise ShiftlineValueError(
                "click_distance_px must be > 0 and smaller than activation_distance_px"
            )
        if self.click_max_duration_ms <= 0:
            raise ShiftlineValueError("click_max_duration_ms must be > 0")
        if self.continuous_px_per_hour <= 0:
            raise ShiftlineValueError("continuous_px_per_hour must be > 0")
        if self.ghost_duration_minutes < self.min_duration_minutes:
            raise ShiftlineValueError("ghost_duration_minutes must be >= min_duration_minutes")
        if self.ghost_duration_minutes % self.snap_minutes:
            raise ShiftlineValueError("ghost_duration_minutes must be a multiple of snap_minutes")
        if not 0 <= self.default_center_hour <= 24:
            raise ShiftlineValueError("default_center_hour must be within [0, 24]")
        if self.scroll_edge_threshold_px < 0 or self.scroll_edge_cooldown_ms < 0:
            raise ShiftlineValueError("scroll edge settings must be non-negative")

    def with_overrides(self, **overrides: object) -> TimelineConfig:
        """Return a copy with the given fields replaced (validated again)."""

        return replace(self, **overrides)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Profile:
    """Named engine preset."""

    name: str
    description: str
    config: TimelineConfig


DEFAULT_PROFILES: dict[str, Profile] = {
    "default": Profile(
        name="default",
        description="15-minute grid, 4px activation, 250ms click window.",
        config=TimelineConfig(),
    ),
    "precise": Profile(
        name="precise",
        description="5-minute grid for fine-grained edits on wide screens.",
        config=TimelineConfig(snap_minutes=5, min_duration_minutes=15, continuous_px_per_hour=160.0),
    ),
    "coarse": Profile(
        name="coarse",
        description="30-minute grid and 30-minute minimum blocks.",
        config=TimelineConfig(snap_minutes=30, min_duration_minutes=30),
    ),
    "touch": Profile(
        name="touch",
        description="Larger activation/click slop for finger input.",
        config=TimelineConfig(
            activation_distance_px=10.0,
            click_distance_px=6.0,
            click_max_duration_ms=350.0,
        ),
    ),
}


def get_profile(name: str) -> Profile:
    key = name.lower()
    if key not in DEFAULT_PROFILES:
        available = ", ".join(sorted(DEFAULT_PROFILES))
        raise KeyError(f"Unknown profile '{name}'. Available: {available}")
    return DEFAULT_PROFILES[key]


def list_profiles() -> tuple[Profile, ...]:
    return tuple(DEFAULT_PROFILES[key] for key in sorted(DEFAULT_PROFILES))


__all__ = [
    "MINUTES_PER_HOUR",
    "MINUTES_PER_DAY",
    "WINDOW_DAYS",
    "TimelineConfig",
    "Profile",
    "DEFAULT_PROFILES",
    "get_profile",
    "list_profiles",
]
