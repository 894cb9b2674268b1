from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from shiftline.scenario.contract.models import BusinessHoursRow, Shift

REPO_ROOT = Path(__file__).resolve().parents[1]
MONDAY = date(2024, 6, 10)


@pytest.fixture
def examples_dir() -> Path:
    return REPO_ROOT / "examples"


@pytest.fixture
def bistro_rows() -> list[BusinessHoursRow]:
    """Monday to Saturday 10:00-23:00, closed on Sunday."""

    return [
        BusinessHoursRow(day_of_week=weekday, open_time="10:00", close_time="23:00")
        for weekday in range(1, 7)
    ]


@pytest.fixture
def make_shift():
    def _make(shift_id: str = "s1", employee_id: str = "E1", **overrides) -> Shift:
        payload = {
            "id": shift_id,
            "employee_id": employee_id,
            "date": MONDAY,
            "start_hour": 12.0,
            "end_hour": 18.0,
        }
        payload.update(overrides)
        return Shift(**payload)

    return _make
