"""Lift commands: recent, log-lift, history."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.aggregator import matching_rows
from ...core.config import LIFT_LOG_SHEET
from ...core.models import LiftSession, SessionExercise
from ...core.normalize import normalize_session
from ...core.recommendation import get_recent_lifts, load_lift_rows, parse_target_sets
from ...core.workout_plan import get_splits, rep_range_lookup
from ...io.serializers import (
    ValidationError,
    parse_sets_string,
    recent_lifts_to_dict,
    row_to_values,
    validate_date,
    validate_time,
)
from ...io.sheet_store import StoreError
from .. import views
from ..app import GoogleOption, JsonOption, SheetDirOption, app, get_store


def resolve_started_at(date: str | None, time: str | None) -> str:
    """
    Build the session timestamp from optional --date/--time values.

    Missing parts default to now.  Raises ValidationError on bad input.
    """
    now = datetime.now()
    date_str = validate_date(date) if date else now.strftime("%Y-%m-%d")
    time_str = validate_time(time) if time else now.strftime("%H:%M")
    return f"{date_str}T{time_str}:00"


def _planned_rep_range(exercise: str) -> str | None:
    """Rep range text from the workout plan, if the exercise is in it."""
    key = exercise.strip().lower()
    for split in get_splits():
        for ex in split.exercises():
            if ex.exercise.strip().lower() == key:
                return ex.rep_range
    return None


@app.command()
def recent(
    exercise: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Bench Press'")],
    target_sets: Annotated[
        Optional[str],
        typer.Option("--target-sets", "-n", help="Number of recent sets to show (default 3)"),
    ] = None,
    sheet_dir: SheetDirOption = None,
    use_google: GoogleOption = False,
    json_out: JsonOption = False,
) -> None:
    """
    Show recent sets for an exercise and the plan for the next session.
    """
    if not exercise.strip():
        views.print_error("Missing exercise name")
        raise typer.Exit(1)

    try:
        store = get_store(sheet_dir, use_google)
    except StoreError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    count = parse_target_sets(target_sets)
    result = get_recent_lifts(store, exercise, count, rep_range_lookup())

    if json_out:
        print(json.dumps(recent_lifts_to_dict(result), indent=2))
        return

    views.print_recent_lifts(exercise.strip(), result, count)
    views.console.print()


@app.command("log-lift")
def log_lift(
    split: Annotated[str, typer.Option("--split", help="Split name, e.g. 'Upper/Lower'")],
    day: Annotated[str, typer.Option("--day", help="Day within the split, e.g. 'Upper A'")],
    exercises: Annotated[
        list[str],
        typer.Option("--exercise", "-e", help="Exercise name (repeat for each exercise)"),
    ],
    sets: Annotated[
        list[str],
        typer.Option(
            "--sets",
            "-s",
            help="Sets for the matching --exercise, e.g. '135x8@2, 135x8@1, 135x7@0'",
        ),
    ],
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", help="Session notes (saved on every set)"),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date (YYYY-MM-DD, default: today)"),
    ] = None,
    time: Annotated[
        Optional[str],
        typer.Option("--time", "-t", help="Session start time (HH:MM, default: now)"),
    ] = None,
    sheet_dir: SheetDirOption = None,
    use_google: GoogleOption = False,
) -> None:
    """
    Log a lift session to Lift_Log.
    """
    if len(exercises) != len(sets):
        views.print_error(
            f"Got {len(exercises)} --exercise and {len(sets)} --sets; give one --sets per exercise"
        )
        raise typer.Exit(1)

    try:
        started_at = resolve_started_at(date, time)
        session_exercises = [
            SessionExercise(
                name=name.strip(),
                target_sets=len(logged),
                target_rep_range=_planned_rep_range(name),
                sets=logged,
                completed=True,
            )
            for name, logged in ((n, parse_sets_string(s)) for n, s in zip(exercises, sets))
        ]
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    for ex in session_exercises:
        if not ex.name:
            views.print_error("Exercise name cannot be empty")
            raise typer.Exit(1)
        if ex.target_rep_range is None:
            views.print_warning(f"'{ex.name}' is not in the workout plan; no plan will be suggested for it.")

    session = LiftSession(
        split=split,
        day=day,
        exercises=session_exercises,
        started_at=started_at,
        notes=notes or None,
    )
    rows = normalize_session(session)

    try:
        store = get_store(sheet_dir, use_google)
        store.append_rows(LIFT_LOG_SHEET, [row_to_values(r) for r in rows])
    except StoreError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Logged {len(rows)} set(s) for {split} / {day}")
    views.print_logged_lift_rows(rows)  # type: ignore[arg-type]


@app.command()
def history(
    exercise: Annotated[str, typer.Argument(help="Exercise name")],
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Maximum number of sets to show"),
    ] = 20,
    sheet_dir: SheetDirOption = None,
    use_google: GoogleOption = False,
) -> None:
    """
    Show logged sets for an exercise, most recent first.
    """
    try:
        store = get_store(sheet_dir, use_google)
        rows = load_lift_rows(store)
    except StoreError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    matched = matching_rows(rows, exercise)
    if not matched:
        views.print_info(f"No sets logged for '{exercise.strip()}'.")
        return

    views.print_lift_history(matched[: max(1, limit)])
