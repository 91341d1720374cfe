"""
Double-progression planning for the next session.

Given the sets of the most recent session and the exercise's rep range,
each set earns either one more rep at the same load or, once the top of
the range is reached with reps to spare, more load and a reset to the
bottom of the range.
"""

import math
import re

from .config import MIN_SESSIONS_FOR_PLAN, TARGET_RIR, WEIGHT_INCREMENT
from .models import CellValue, LiftLogRow, RecommendedPlanSet, RepRange

_REP_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)")


def parse_rep_range(text: str | None) -> RepRange | None:
    """
    Parse a "min-max" rep range such as "8-12".

    Returns:
        RepRange, or None when the text has no digits-hyphen-digits pattern
        or the bounds are not a valid range
    """
    if not text:
        return None
    match = _REP_RANGE_RE.search(str(text))
    if match is None:
        return None
    try:
        return RepRange(min=int(match.group(1)), max=int(match.group(2)))
    except ValueError:
        return None


def to_finite(value: CellValue) -> float | None:
    """
    Read a spreadsheet cell as a finite number.

    Accepts ints, floats and numeric strings.  Blank cells, text, booleans,
    NaN and infinities give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def progress_set(
    set_number: int,
    weight: float,
    reps: float,
    rir: float | None,
    rep_range: RepRange,
) -> RecommendedPlanSet:
    """
    Apply the progression rule to one set.

    Branches are checked in this order:
    1. rir == 0 (failure): one more rep, same weight
    2. reps == max and rir >= 1: add WEIGHT_INCREMENT, reps back to min
    3. reps < max: one more rep, same weight
    4. anything else: repeat the set unchanged

    Args:
        set_number: 1-based set number
        weight: Last performed weight
        reps: Last performed reps
        rir: Last reported RIR, None if blank or not a number
        rep_range: Programmed rep range

    Returns:
        RecommendedPlanSet targeting TARGET_RIR
    """
    target_weight = weight
    target_reps = reps

    if rir is not None and rir == 0:
        target_reps = reps + 1
    elif reps == rep_range.max and rir is not None and rir >= 1:
        target_weight = weight + WEIGHT_INCREMENT
        target_reps = rep_range.min
    elif reps < rep_range.max:
        target_reps = reps + 1
    # reps at (or past) the top without a usable RIR: no defined step

    return RecommendedPlanSet(
        set_number=set_number,
        weight=target_weight,
        target_reps=target_reps,
        target_rir=TARGET_RIR,
    )


def plan_next_session(
    anchor_rows: list[LiftLogRow],
    rep_range: RepRange | None,
    session_count: int,
) -> list[RecommendedPlanSet] | None:
    """
    Build the recommended plan from the most recent session.

    Args:
        anchor_rows: Rows of the most recent session
        rep_range: Configured rep range, or None if the exercise has none
        session_count: Distinct sessions in the exercise's whole history

    Returns:
        One RecommendedPlanSet per parseable set, ordered by set number,
        or None when history is too short, no rep range is configured, or
        no set could be parsed
    """
    if rep_range is None or session_count < MIN_SESSIONS_FOR_PLAN:
        return None

    plan: list[RecommendedPlanSet] = []
    for row in sorted(anchor_rows, key=lambda r: r.set_number):
        weight = to_finite(row.weight)
        reps = to_finite(row.reps)
        if weight is None or reps is None:
            continue
        plan.append(progress_set(row.set_number, weight, reps, to_finite(row.rir), rep_range))

    return plan or None
