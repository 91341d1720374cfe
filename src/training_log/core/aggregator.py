"""
Session aggregation over the append-only Lift_Log.

Groups flat set rows into sessions (same exercise, date and time) and
picks out the most recent one.  All functions are pure.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .config import DEFAULT_DISPLAY_RIR, DEFAULT_TARGET_SETS, MIN_TARGET_SETS
from .models import LiftLogRow, RecentSet


@dataclass
class Aggregate:
    """Aggregated view of one exercise's history."""

    last_trained: str | None = None
    sets: list[RecentSet] = field(default_factory=list)
    previous_note: str | None = None
    anchor_rows: list[LiftLogRow] = field(default_factory=list)
    session_count: int = 0


def matching_rows(rows: Iterable[LiftLogRow], exercise: str) -> list[LiftLogRow]:
    """
    Return the rows for an exercise, most recent session first.

    Exercise names match case-insensitively after trimming.  Rows with a
    blank date belong to no session and are dropped.  Rows sharing a
    session key keep their stored order.

    Args:
        rows: Parsed Lift_Log rows
        exercise: Exercise name as entered by the user

    Returns:
        Matching rows sorted by (date, time) descending
    """
    key = exercise.strip().lower()
    matched = [r for r in rows if r.date.strip() and r.exercise_key == key]
    return sorted(matched, key=lambda r: r.session_key, reverse=True)


def anchor_session_rows(matched: list[LiftLogRow]) -> list[LiftLogRow]:
    """
    Rows of the most recent session, ascending by set number.

    Args:
        matched: Output of matching_rows()

    Returns:
        Rows sharing the first row's (date, time); empty if matched is empty
    """
    if not matched:
        return []
    anchor = matched[0].session_key
    session = [r for r in matched if r.session_key == anchor]
    return sorted(session, key=lambda r: r.set_number)


def previous_note(anchor_rows: list[LiftLogRow]) -> str | None:
    """Note on the highest-numbered set of the session, if it has one."""
    if not anchor_rows:
        return None
    last_set = anchor_rows[0]
    for row in anchor_rows[1:]:
        if row.set_number > last_set.set_number:
            last_set = row
    if last_set.notes is None:
        return None
    note = str(last_set.notes).strip()
    return note or None


def _display_value(value):
    return "" if value is None else value


def recent_sets(matched: list[LiftLogRow], target_sets: int = DEFAULT_TARGET_SETS) -> list[RecentSet]:
    """
    The most recent individual sets, newest session first.

    Taken from the whole match list rather than the anchor session alone,
    so a short last session is topped up with sets from the one before.
    Cell values pass through unchanged; blank weight/reps show as "" and a
    blank RIR as 0.
    """
    count = max(MIN_TARGET_SETS, target_sets)
    return [
        RecentSet(
            weight=_display_value(r.weight),
            reps=_display_value(r.reps),
            rir=DEFAULT_DISPLAY_RIR if r.rir is None or str(r.rir).strip() == "" else r.rir,
        )
        for r in matched[:count]
    ]


def count_sessions(matched: Iterable[LiftLogRow]) -> int:
    """Number of distinct (date, time) sessions among the rows."""
    return len({r.session_key for r in matched})


def aggregate(
    rows: Iterable[LiftLogRow],
    exercise: str,
    target_sets: int = DEFAULT_TARGET_SETS,
) -> Aggregate:
    """
    Summarize an exercise's history.

    Args:
        rows: All parsed Lift_Log rows
        exercise: Exercise to look up
        target_sets: How many recent sets to return (floored at 1)

    Returns:
        Aggregate; all fields empty when the exercise has no rows
    """
    matched = matching_rows(rows, exercise)
    if not matched:
        return Aggregate()

    anchor_rows = anchor_session_rows(matched)
    return Aggregate(
        last_trained=matched[0].date,
        sets=recent_sets(matched, target_sets),
        previous_note=previous_note(anchor_rows),
        anchor_rows=anchor_rows,
        session_count=count_sessions(matched),
    )
