from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import click
import pandas as pd
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from shiftline.core.errors import ShiftlineValueError
from shiftline.scenario.contract.models import TimelineScenario
from shiftline.scenario.io import load_gestures, load_scenario
from shiftline.telemetry import EventRecorder
from shiftline.timeline import (
    DEFAULT_PROFILES,
    ManualFrameSource,
    TimelineConfig,
    build_engine,
    get_profile,
    list_profiles,
    replay_steps,
)
from shiftline.timeline.hours import (
    BusinessHoursTable,
    decimal_to_time,
    format_hour,
    format_shift_duration,
)
from shiftline.timeline.mapper import single_day_axis_for

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()

PROFILE_CHOICE = click.Choice(sorted(DEFAULT_PROFILES), case_sensitive=False)
WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def _load(scenario_path: Path) -> TimelineScenario:
    try:
        return load_scenario(scenario_path)
    except (ValidationError, ShiftlineValueError, ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc), param_hint="SCENARIO") from exc


def _resolve_config(scenario: TimelineScenario, profile: str | None) -> TimelineConfig:
    try:
        return get_profile(profile or scenario.profile).config
    except KeyError as exc:
        raise typer.BadParameter(str(exc.args[0]), param_hint="--profile") from exc


def _format_event(record: dict[str, object]) -> str:
    start = record.get("start_hour")
    end = record.get("end_hour")
    if isinstance(start, float | int) and isinstance(end, float | int):
        span = f"{format_hour(start)}-{format_hour(end)} ({format_shift_duration(start, end)})"
        return f"{record.get('date')} {span}"
    if record.get("message"):
        return str(record["message"])
    return ""


@app.command("replay")
def replay(
    scenario_path: Path = typer.Argument(..., help="Path to scenario YAML file."),
    gestures_path: Path = typer.Argument(..., help="Path to gesture script YAML file."),
    profile: Annotated[
        str | None,
        typer.Option(
            "--profile",
            "-p",
            help="Engine preset (defaults to the scenario's).",
            show_choices=True,
            click_type=PROFILE_CHOICE,
        ),
    ] = None,
    out_jsonl: Annotated[
        Path | None,
        typer.Option("--out-jsonl", help="Append emitted events to this JSONL telemetry log."),
    ] = None,
    out_csv: Annotated[
        Path | None,
        typer.Option("--out-csv", help="Write emitted events as CSV."),
    ] = None,
    show_steps: Annotated[
        bool,
        typer.Option("--show-steps/--no-show-steps", help="Print the outcome of every step."),
    ] = False,
) -> None:
    """Replay a scripted gesture sequence and report the engine's events."""

    scenario = _load(scenario_path)
    config = _resolve_config(scenario, profile)
    try:
        script = load_gestures(gestures_path)
    except (ValidationError, ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc), param_hint="GESTURES") from exc

    recorder = EventRecorder(out_jsonl, scenario=scenario.name)
    frames = ManualFrameSource()
    engine = build_engine(scenario, listener=recorder, config=config, frame_source=frames)
    try:
        steps = replay_steps(engine, script.steps, frames=frames)
    except ShiftlineValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="GESTURES") from exc

    if show_steps:
        step_table = Table(title=f"Steps ({script.name})")
        step_table.add_column("#", justify="right")
        step_table.add_column("Action")
        step_table.add_column("Outcome")
        for step in steps:
            step_table.add_row(str(step.index), step.action, step.outcome)
        console.print(step_table)

    records = recorder.to_dicts()
    table = Table(title=f"Events ({scenario.name})")
    table.add_column("Event", style="cyan")
    table.add_column("Subject")
    table.add_column("Detail")
    for record in records:
        subject = record.get("shift_id") or record.get("employee_id") or record.get("reason") or ""
        table.add_row(str(record["event"]), str(subject), _format_event(record))
    console.print(table)
    console.print(f"[bold green]Replayed[/] {len(steps)} steps, {len(records)} events")

    if out_jsonl:
        console.print(f"Appended events to {out_jsonl}")
    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(records).to_csv(out_csv, index=False)
        console.print(f"Wrote events to {out_csv}")


@app.command("hours")
def hours(
    scenario_path: Path = typer.Argument(..., help="Path to scenario YAML file."),
) -> None:
    """Show resolved business hours and the single-day axis for each weekday."""

    scenario = _load(scenario_path)
    table_data = BusinessHoursTable(scenario.business_hours)
    table = Table(title=f"Business hours ({scenario.name})")
    table.add_column("Weekday")
    table.add_column("Open")
    table.add_column("Close")
    table.add_column("Axis")
    table.add_column("px/hour", justify="right")
    for weekday in (1, 2, 3, 4, 5, 6, 0):
        resolved = table_data.for_weekday(weekday)
        axis = single_day_axis_for(scenario.today, scenario.viewport_width_px, resolved)
        axis_label = (
            f"{decimal_to_time(axis.visible_start_hour)}-{decimal_to_time(axis.visible_end_hour)}"
        )
        if resolved is None:
            table.add_row(WEEKDAYS[weekday], "closed", "", axis_label, f"{axis.px_per_hour:.1f}")
            continue
        table.add_row(
            WEEKDAYS[weekday],
            decimal_to_time(resolved.open_hour),
            decimal_to_time(resolved.close_hour),
            axis_label,
            f"{axis.px_per_hour:.1f}",
        )
    console.print(table)


@app.command("window")
def window(
    scenario_path: Annotated[Path, typer.Argument(help="Path to scenario YAML file.")],
    target: Annotated[str, typer.Argument(help="Date to navigate to (YYYY-MM-DD).")],
    reanchor: Annotated[
        bool,
        typer.Option("--reanchor/--no-reanchor", help="Treat as an explicit jump."),
    ] = False,
    profile: Annotated[
        str | None,
        typer.Option(
            "--profile",
            "-p",
            help="Engine preset (defaults to the scenario's).",
            show_choices=True,
            click_type=PROFILE_CHOICE,
        ),
    ] = None,
) -> None:
    """Navigate the continuous window and print the resulting state."""

    scenario = _load(scenario_path)
    config = _resolve_config(scenario, profile)
    try:
        day = date.fromisoformat(target)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid date '{target}'", param_hint="TARGET") from exc
    engine = build_engine(scenario, config=config)
    manager = engine.window
    if not manager.is_continuous:
        manager.enter_continuous(scenario.selected_date)
    command = manager.go_to_date(day, reanchor=reanchor)
    state = manager.state
    if state is None or command is None:
        raise typer.BadParameter("Scenario has no continuous window", param_hint="SCENARIO")
    console.print(f"[cyan]Anchor:[/] {state.anchor_date.isoformat()}")
    console.print("[cyan]Window:[/] " + ", ".join(d.isoformat() for d in state.dates))
    console.print(f"[cyan]Scroll:[/] {command.scroll_left:.1f}px")


@app.command("profiles")
def profiles() -> None:
    """List engine presets."""

    table = Table(title="Timeline profiles")
    table.add_column("Name", style="cyan")
    table.add_column("Snap", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Activation", justify="right")
    table.add_column("Description")
    for item in list_profiles():
        cfg = item.config
        table.add_row(
            item.name,
            f"{cfg.snap_minutes}m",
            f"{cfg.min_duration_minutes}m",
            f"{cfg.activation_distance_px:g}px",
            item.description,
        )
    console.print(table)


if __name__ == "__main__":
    app()
