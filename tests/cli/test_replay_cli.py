from pathlib import Path

import pandas as pd
from typer.testing import CliRunner

from shiftline.cli.main import app
from shiftline.telemetry import read_jsonl

BISTRO = Path(__file__).resolve().parents[2] / "examples" / "bistro"


def test_replay_exports_events(tmp_path: Path) -> None:
    runner = CliRunner()
    events_jsonl = tmp_path / "events.jsonl"
    events_csv = tmp_path / "out" / "events.csv"

    result = runner.invoke(
        app,
        [
            "replay",
            str(BISTRO / "scenario.yaml"),
            str(BISTRO / "gestures.yaml"),
            "--out-jsonl",
            str(events_jsonl),
            "--out-csv",
            str(events_csv),
            "--show-steps",
        ],
        prog_name="shiftline",
    )

    assert result.exit_code == 0, result.output
    assert "Replayed 16 steps, 4 events" in result.output

    rows = list(read_jsonl(events_jsonl))
    assert [row["event"] for row in rows] == [
        "shift_proposed",
        "shift_clicked",
        "create_requested",
        "rejected",
    ]
    assert {row["scenario"] for row in rows} == {"bistro"}

    events_df = pd.read_csv(events_csv)
    assert len(events_df) == 4
    assert {"event", "run_id", "timestamp", "shift_id"}.issubset(events_df.columns)


def test_replay_rejects_unknown_profile() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "replay",
            str(BISTRO / "scenario.yaml"),
            str(BISTRO / "gestures.yaml"),
            "--profile",
            "nope",
        ],
    )
    assert result.exit_code == 2


def test_hours_command_lists_weekdays() -> None:
    result = CliRunner().invoke(app, ["hours", str(BISTRO / "scenario.yaml")])
    assert result.exit_code == 0, result.output
    assert "Monday" in result.output
    assert "Sunday" in result.output
    assert "10:00" in result.output


def test_window_command_is_anchor_bounded() -> None:
    runner = CliRunner()
    bounded = runner.invoke(app, ["window", str(BISTRO / "scenario.yaml"), "2024-06-20"])
    assert bounded.exit_code == 0, bounded.output
    assert "2024-06-10, 2024-06-11, 2024-06-12" in bounded.output

    jumped = runner.invoke(
        app, ["window", str(BISTRO / "scenario.yaml"), "2024-06-20", "--reanchor"]
    )
    assert jumped.exit_code == 0, jumped.output
    assert "2024-06-19, 2024-06-20, 2024-06-21" in jumped.output


def test_window_command_rejects_bad_dates() -> None:
    result = CliRunner().invoke(app, ["window", str(BISTRO / "scenario.yaml"), "June 20"])
    assert result.exit_code == 2


def test_profiles_command() -> None:
    result = CliRunner().invoke(app, ["profiles"])
    assert result.exit_code == 0
    for name in ("default", "precise", "coarse", "touch"):
        assert name in result.output
