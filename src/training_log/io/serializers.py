"""
Serialization for log rows and query results.

Handles conversion between sheet value grids and dataclasses, and the
JSON shape returned by the recent-lifts query.
"""

import re
from datetime import datetime
from typing import Any

from ..core.config import (
    BIKE_LOG_SHEET,
    LIFT_COL_DATE,
    LIFT_COL_DAY,
    LIFT_COL_EXERCISE,
    LIFT_COL_NOTES,
    LIFT_COL_REPS,
    LIFT_COL_RIR,
    LIFT_COL_SET_NUMBER,
    LIFT_COL_SPLIT,
    LIFT_COL_TIME,
    LIFT_COL_WEIGHT,
    LIFT_LOG_SHEET,
    RUN_LOG_SHEET,
    SWIM_LOG_SHEET,
)
from ..core.models import (
    ActivityType,
    CellValue,
    EnduranceRow,
    LiftLogRow,
    LiftRow,
    LoggedSet,
    RecentLiftsResult,
    SessionRow,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


SHEET_FOR_ACTIVITY: dict[ActivityType, str] = {
    ActivityType.LIFT: LIFT_LOG_SHEET,
    ActivityType.RUN: RUN_LOG_SHEET,
    ActivityType.BIKE: BIKE_LOG_SHEET,
    ActivityType.SWIM: SWIM_LOG_SHEET,
}


def validate_date(date_str: str) -> str:
    """
    Validate a YYYY-MM-DD date string.

    Raises:
        ValidationError: If date format is invalid
    """
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e
    return date_str


def validate_time(time_str: str) -> str:
    """
    Validate a zero-padded HH:MM time string.

    Raises:
        ValidationError: If time format is invalid
    """
    if not re.match(r"^\d{2}:\d{2}$", time_str):
        raise ValidationError(f"Invalid time format: {time_str}. Expected HH:MM")
    try:
        datetime.strptime(time_str, "%H:%M")
    except ValueError as e:
        raise ValidationError(f"Invalid time: {time_str}") from e
    return time_str


# =============================================================================
# Reading Lift_Log
# =============================================================================


def _cell(row: list, index: int) -> CellValue:
    return row[index] if index < len(row) else None


def _text(row: list, index: int) -> str:
    value = _cell(row, index)
    return "" if value is None else str(value).strip()


def _set_number(value: CellValue) -> int:
    """Integer set number; 0 when blank or not a whole number."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0
    return int(number) if number.is_integer() else 0


def parse_lift_log_rows(values: list[list[Any]]) -> list[LiftLogRow]:
    """
    Parse the raw Lift_Log value grid.

    Row 0 is the header and is skipped.  Rows with a blank date are
    dropped.  Short rows (sheets omit trailing blank cells) are read as
    blank.  weight, reps, rir and notes are kept as raw cell values.

    Args:
        values: Grid as returned by SheetStore.read_range()

    Returns:
        Parsed rows in sheet order
    """
    rows: list[LiftLogRow] = []
    for raw in values[1:]:
        raw = list(raw or [])
        date_str = _text(raw, LIFT_COL_DATE)
        if not date_str:
            continue
        rows.append(
            LiftLogRow(
                date=date_str,
                time=_text(raw, LIFT_COL_TIME),
                exercise=_text(raw, LIFT_COL_EXERCISE),
                set_number=_set_number(_cell(raw, LIFT_COL_SET_NUMBER)),
                weight=_cell(raw, LIFT_COL_WEIGHT),
                reps=_cell(raw, LIFT_COL_REPS),
                rir=_cell(raw, LIFT_COL_RIR),
                notes=_cell(raw, LIFT_COL_NOTES),
                split=_text(raw, LIFT_COL_SPLIT),
                day=_text(raw, LIFT_COL_DAY),
            )
        )
    return rows


# =============================================================================
# Writing rows
# =============================================================================


def _number(value: float) -> int | float:
    """Render integral floats as ints (105.0 -> 105)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def row_to_values(row: SessionRow) -> list[Any]:
    """
    Convert a normalized row to the cell list for its sheet.

    Lift rows use the Lift_Log layout, endurance rows the shared
    Run/Bike/Swim layout.

    Raises:
        TypeError: If row is neither a LiftRow nor an EnduranceRow
    """
    if isinstance(row, LiftRow):
        return [
            row.date,
            row.time,
            row.split,
            row.day,
            row.exercise,
            row.set_number,
            _number(row.weight),
            row.reps,
            row.rir,
            _number(row.volume),
            row.notes or "",
        ]
    if isinstance(row, EnduranceRow):
        return [
            row.date,
            row.time,
            _number(row.distance),
            row.time_seconds,
            _number(round(row.derived_metric, 2)),
            row.rpe,
            row.notes or "",
        ]
    raise TypeError(f"Unsupported row type: {type(row).__name__}")


def sheet_for_row(row: SessionRow) -> str:
    """Name of the sheet a row is appended to."""
    return SHEET_FOR_ACTIVITY[ActivityType(row.activity_type)]


# =============================================================================
# Query results
# =============================================================================


def _json_cell(value: CellValue) -> CellValue:
    return _number(value) if isinstance(value, float) else value


def recent_lifts_to_dict(result: RecentLiftsResult) -> dict[str, Any]:
    """
    Convert a RecentLiftsResult to the response shape.

    lastTrained and previousNote are omitted when absent; recommendedPlan
    is always present and None when no plan could be made.
    """
    d: dict[str, Any] = {}
    if result.last_trained is not None:
        d["lastTrained"] = result.last_trained
    d["sets"] = [
        {"weight": _json_cell(s.weight), "reps": _json_cell(s.reps), "rir": _json_cell(s.rir)}
        for s in result.sets
    ]
    if result.previous_note is not None:
        d["previousNote"] = result.previous_note
    d["recommendedPlan"] = (
        None
        if result.recommended_plan is None
        else [
            {
                "setNumber": p.set_number,
                "weight": _number(p.weight),
                "targetReps": _number(p.target_reps),
                "targetRIR": p.target_rir,
            }
            for p in result.recommended_plan
        ]
    )
    return d


# =============================================================================
# CLI set entry
# =============================================================================

_SET_RE = re.compile(
    r"^\s*(?P<weight>\d+(?:\.\d+)?)\s*[xX×]\s*(?P<reps>\d+)\s*(?:@\s*(?P<rir>\d+))?\s*$"
)


def parse_set_string(text: str) -> LoggedSet:
    """
    Parse one set in WEIGHTxREPS@RIR form, e.g. "135x8@2".

    RIR is required, matching the logging form which will not save a set
    without one.

    Raises:
        ValidationError: If the text is not a valid set
    """
    match = _SET_RE.match(text)
    if match is None or match.group("rir") is None:
        raise ValidationError(
            f"Invalid set: {text.strip()!r}. Expected WEIGHTxREPS@RIR, e.g. 135x8@2"
        )
    try:
        return LoggedSet(
            weight=float(match.group("weight")),
            reps=int(match.group("reps")),
            rir=int(match.group("rir")),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def parse_sets_string(text: str) -> list[LoggedSet]:
    """
    Parse comma-separated sets, e.g. "135x8@2, 135x8@1, 135x7@0".

    Raises:
        ValidationError: If the text is empty or any set is invalid
    """
    parts = [p for p in text.split(",") if p.strip()]
    if not parts:
        raise ValidationError("No sets given")
    return [parse_set_string(p) for p in parts]
