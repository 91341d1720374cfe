"""Endurance commands: log-run, log-bike, log-swim."""

from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_RPE
from ...core.formatting import parse_time_input
from ...core.models import ActivityType, EnduranceSession
from ...core.normalize import normalize_session
from ...io.serializers import ValidationError, row_to_values, sheet_for_row
from ...io.sheet_store import SheetStore, StoreError
from .. import views
from ..app import GoogleOption, SheetDirOption, app, get_store
from .lifts import resolve_started_at

DurationOption = Annotated[str, typer.Option("--time", "-t", help="Duration as MM:SS or HH:MM:SS")]
RpeOption = Annotated[int, typer.Option("--rpe", help="Perceived exertion, 1-10")]
NotesOption = Annotated[Optional[str], typer.Option("--notes", help="Session notes")]
DateOption = Annotated[Optional[str], typer.Option("--date", "-d", help="Session date (YYYY-MM-DD, default: today)")]
StartOption = Annotated[Optional[str], typer.Option("--start", help="Start time (HH:MM, default: now)")]


def log_endurance(
    store: SheetStore,
    activity_type: ActivityType,
    distance: float,
    duration: str,
    rpe: int = DEFAULT_RPE,
    notes: str | None = None,
    date: str | None = None,
    start: str | None = None,
):
    """
    Validate, normalize and append one endurance session.

    Returns:
        The appended EnduranceRow

    Raises:
        ValidationError: On malformed duration, date or time
        ValueError: On non-positive distance or out-of-range RPE
        StoreError: If the row cannot be written
    """
    fmt = "hh:mm:ss" if duration.count(":") == 2 else "mm:ss"
    total_seconds = parse_time_input(duration, fmt)
    if total_seconds is None:
        raise ValidationError(f"Invalid duration: {duration!r}. Expected MM:SS or HH:MM:SS")

    session = EnduranceSession(
        activity_type=activity_type,
        distance=distance,
        total_seconds=total_seconds,
        started_at=resolve_started_at(date, start),
        rpe=rpe,
        notes=notes or None,
    )
    (row,) = normalize_session(session)
    store.append_rows(sheet_for_row(row), [row_to_values(row)])
    return row


def _run_command(activity_type: ActivityType, distance, duration, rpe, notes, date, start, sheet_dir, use_google) -> None:
    try:
        store = get_store(sheet_dir, use_google)
        row = log_endurance(store, activity_type, distance, duration, rpe, notes, date, start)
    except (ValidationError, ValueError, StoreError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Logged {activity_type.value.lower()} on {row.date}")
    views.print_logged_endurance_row(row)


@app.command("log-run")
def log_run(
    distance: Annotated[float, typer.Option("--distance", help="Distance in miles")],
    duration: DurationOption,
    rpe: RpeOption = DEFAULT_RPE,
    notes: NotesOption = None,
    date: DateOption = None,
    start: StartOption = None,
    sheet_dir: SheetDirOption = None,
    use_google: GoogleOption = False,
) -> None:
    """
    Log a run to Run_Log (pace per mile is computed).
    """
    _run_command(ActivityType.RUN, distance, duration, rpe, notes, date, start, sheet_dir, use_google)


@app.command("log-bike")
def log_bike(
    distance: Annotated[float, typer.Option("--distance", help="Distance in miles")],
    duration: DurationOption,
    rpe: RpeOption = DEFAULT_RPE,
    notes: NotesOption = None,
    date: DateOption = None,
    start: StartOption = None,
    sheet_dir: SheetDirOption = None,
    use_google: GoogleOption = False,
) -> None:
    """
    Log a ride to Bike_Log (average mph is computed).
    """
    _run_command(ActivityType.BIKE, distance, duration, rpe, notes, date, start, sheet_dir, use_google)


@app.command("log-swim")
def log_swim(
    distance: Annotated[float, typer.Option("--distance", help="Distance in yards")],
    duration: DurationOption,
    rpe: RpeOption = DEFAULT_RPE,
    notes: NotesOption = None,
    date: DateOption = None,
    start: StartOption = None,
    sheet_dir: SheetDirOption = None,
    use_google: GoogleOption = False,
) -> None:
    """
    Log a swim to Swim_Log (pace per 100 yd is computed).
    """
    _run_command(ActivityType.SWIM, distance, duration, rpe, notes, date, start, sheet_dir, use_google)
