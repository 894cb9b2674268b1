"""Scenario loading utilities (YAML metadata + optional CSV tables)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml
from pydantic import TypeAdapter

from shiftline.scenario.contract.gestures import GestureScript, GestureStep
from shiftline.scenario.contract.models import BusinessHoursRow, Shift, TimelineScenario

__all__ = ["load_scenario", "load_gestures", "read_csv"]

_OPTIONAL_SHIFT_FIELDS = ("job", "location_id", "notes", "schedule_state")


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file using pandas with UTF-8 defaults."""
    return pd.read_csv(path)


def _as_optional_string(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if pd.isna(cast("Any", value)):
        return None
    return str(value)


def _normalise_shift_rows(rows: list[dict[str, object]]) -> None:
    for row in rows:
        for field in _OPTIONAL_SHIFT_FIELDS:
            normalised = _as_optional_string(row.get(field))
            if normalised is None:
                row.pop(field, None)
            else:
                row[field] = normalised
        blocked = row.get("is_blocked")
        if blocked is None or (not isinstance(blocked, str) and pd.isna(cast("Any", blocked))):
            row.pop("is_blocked", None)
        elif not isinstance(blocked, str):
            row["is_blocked"] = bool(blocked)


def _load_yaml(path: str | Path) -> tuple[dict[str, Any], Path]:
    base_path = Path(path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    if not isinstance(meta, dict):
        raise ValueError(f"{base_path} must contain a YAML mapping")
    return meta, base_path.parent


def load_scenario(yaml_path: str | Path) -> TimelineScenario:
    """Load a :class:`TimelineScenario` from YAML.

    Shifts and business hours may be inline lists or CSV files referenced under ``data:``
    (paths relative to the YAML file). Blank optional CSV cells are dropped so model
    defaults apply.
    """
    meta, root = _load_yaml(yaml_path)
    data_section = meta.get("data", {}) or {}

    def require(name: str) -> Path:
        candidate = root / data_section[name]
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        return candidate

    if "shifts" in data_section:
        shift_rows = cast(list[dict[str, object]], read_csv(require("shifts")).to_dict("records"))
        _normalise_shift_rows(shift_rows)
        shifts = TypeAdapter(list[Shift]).validate_python(shift_rows)
    else:
        shifts = TypeAdapter(list[Shift]).validate_python(meta.get("shifts") or [])

    if "business_hours" in data_section:
        hours = TypeAdapter(list[BusinessHoursRow]).validate_python(
            read_csv(require("business_hours")).to_dict("records")
        )
    else:
        hours = TypeAdapter(list[BusinessHoursRow]).validate_python(
            meta.get("business_hours") or []
        )

    payload = {
        key: meta[key]
        for key in ("name", "today", "selected_date", "mode", "viewport_width_px", "profile")
        if key in meta
    }
    return TimelineScenario(**payload, shifts=shifts, business_hours=hours)


def load_gestures(yaml_path: str | Path) -> GestureScript:
    """Load a gesture script: either a mapping with ``steps`` or a bare list of steps."""
    base_path = Path(yaml_path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or []
    if isinstance(raw, list):
        steps = TypeAdapter(list[GestureStep]).validate_python(raw)
        return GestureScript(name=base_path.stem, steps=steps)
    return GestureScript.model_validate(raw)
