from __future__ import annotations

import dataclasses

import pytest

from shiftline.core.errors import ShiftlineValueError
from shiftline.timeline.config import DEFAULT_PROFILES, TimelineConfig, get_profile, list_profiles


def test_defaults_match_engine_constants():
    cfg = TimelineConfig()
    assert cfg.snap_minutes == 15
    assert cfg.min_duration_minutes == 15
    assert cfg.activation_distance_px == 4.0
    assert cfg.click_distance_px == 2.0
    assert cfg.click_max_duration_ms == 250.0
    assert cfg.ghost_duration_minutes == 60


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        TimelineConfig().snap_minutes = 5  # type: ignore[misc]


@pytest.mark.parametrize(
    "overrides",
    [
        {"snap_minutes": 0},
        {"snap_minutes": 7},
        {"min_duration_minutes": 20},
        {"activation_distance_px": 0},
        {"click_distance_px": 5.0},
        {"click_max_duration_ms": 0},
        {"continuous_px_per_hour": -1},
        {"ghost_duration_minutes": 10},
        {"default_center_hour": 25},
        {"scroll_edge_cooldown_ms": -1},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ShiftlineValueError):
        TimelineConfig(**overrides)


def test_with_overrides_revalidates():
    cfg = TimelineConfig().with_overrides(snap_minutes=5)
    assert cfg.snap_minutes == 5
    with pytest.raises(ShiftlineValueError):
        TimelineConfig().with_overrides(snap_minutes=-5)


def test_profiles_registry():
    assert get_profile("default").config == TimelineConfig()
    assert get_profile("COARSE").config.snap_minutes == 30
    assert get_profile("touch").config.activation_distance_px > 4.0
    names = [profile.name for profile in list_profiles()]
    assert names == sorted(DEFAULT_PROFILES)
    with pytest.raises(KeyError, match="Available"):
        get_profile("unknown")
