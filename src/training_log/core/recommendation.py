"""
Recent-lifts query: history summary plus next-session plan.

Reads Lift_Log, aggregates the exercise's sessions and runs the
progression planner.  A failed read is treated as an empty history so
that a missing sheet never blocks logging a new session.
"""

import logging

from ..io.serializers import parse_lift_log_rows
from ..io.sheet_store import SheetStore
from .aggregator import aggregate
from .config import DEFAULT_TARGET_SETS, LIFT_LOG_RANGE, MIN_TARGET_SETS
from .models import LiftLogRow, RecentLiftsResult, RepRange
from .progression import plan_next_session
from .workout_plan import rep_range_lookup

logger = logging.getLogger(__name__)


def parse_target_sets(raw: str | int | None) -> int:
    """
    Read the requested number of recent sets.

    Leading digits of a string are used ("4sets" -> 4).  A missing, zero
    or unparsable value gives DEFAULT_TARGET_SETS; the result is never
    below MIN_TARGET_SETS.
    """
    if raw is None:
        return DEFAULT_TARGET_SETS
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        text = str(raw).strip()
        digits = ""
        for i, ch in enumerate(text):
            if ch.isdigit() or (i == 0 and ch in "+-"):
                digits += ch
            else:
                break
        try:
            value = int(digits)
        except ValueError:
            value = 0
    return max(MIN_TARGET_SETS, value or DEFAULT_TARGET_SETS)


def load_lift_rows(store: SheetStore) -> list[LiftLogRow]:
    """Read and parse every Lift_Log row; raises whatever the store raises."""
    return parse_lift_log_rows(store.read_range(LIFT_LOG_RANGE))


def recommend(
    rows: list[LiftLogRow],
    exercise: str,
    target_sets: int = DEFAULT_TARGET_SETS,
    rep_ranges: dict[str, RepRange] | None = None,
) -> RecentLiftsResult:
    """
    Summarize history and plan the next session from already-loaded rows.

    Args:
        rows: Parsed Lift_Log rows
        exercise: Exercise name
        target_sets: Number of recent sets to return
        rep_ranges: {exercise_key: RepRange}; exercises without an entry get
            no plan

    Returns:
        RecentLiftsResult
    """
    agg = aggregate(rows, exercise, target_sets)
    rep_range = (rep_ranges or {}).get(exercise.strip().lower())
    plan = plan_next_session(agg.anchor_rows, rep_range, agg.session_count)
    return RecentLiftsResult(
        last_trained=agg.last_trained,
        sets=agg.sets,
        previous_note=agg.previous_note,
        recommended_plan=plan,
    )


def get_recent_lifts(
    store: SheetStore,
    exercise: str,
    target_sets: int = DEFAULT_TARGET_SETS,
    rep_ranges: dict[str, RepRange] | None = None,
) -> RecentLiftsResult:
    """
    Recent sets, last note and recommended plan for an exercise.

    Args:
        store: Spreadsheet to read Lift_Log from
        exercise: Exercise name (must not be blank)
        target_sets: Number of recent sets to return (floored at 1)
        rep_ranges: {exercise_key: RepRange}; defaults to the workout plan

    Returns:
        RecentLiftsResult; RecentLiftsResult.empty() if the log cannot be read

    Raises:
        ValueError: If exercise is blank
    """
    name = exercise.strip()
    if not name:
        raise ValueError("Missing exercise name")

    if rep_ranges is None:
        rep_ranges = rep_range_lookup()

    try:
        rows = load_lift_rows(store)
    except Exception as exc:
        logger.warning("Could not read %s, treating history as empty: %s", LIFT_LOG_RANGE, exc)
        return RecentLiftsResult.empty()

    return recommend(rows, name, target_sets, rep_ranges)
