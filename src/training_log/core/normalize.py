"""
Normalization of active sessions into log rows.

A finished session becomes one row per lift set, or a single row for a
run, bike or swim.  The session's ActivityType picks the row layout.
"""

from datetime import datetime

from .config import SECONDS_PER_HOUR, SWIM_PACE_DISTANCE
from .models import (
    ActiveSession,
    ActivityType,
    EnduranceRow,
    EnduranceSession,
    LiftRow,
    LiftSession,
    SessionRow,
)


def split_timestamp(started_at: str) -> tuple[str, str]:
    """
    Split an ISO timestamp into the (date, time) columns of a log row.

    Args:
        started_at: e.g. "2026-10-19T07:45:12.000Z"

    Returns:
        ("YYYY-MM-DD", "HH:MM")

    Raises:
        ValueError: If started_at is not an ISO timestamp
    """
    text = started_at.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    return dt.strftime("%Y-%m-%d"), dt.strftime("%H:%M")


def derived_metric(activity_type: ActivityType, distance: float, total_seconds: float) -> float:
    """
    Pace or speed for an endurance session.

    Run: seconds per mile.  Bike: miles per hour.  Swim: seconds per 100 yd.
    Returns 0.0 when distance or time is not positive.
    """
    if distance <= 0 or total_seconds <= 0:
        return 0.0
    if activity_type == ActivityType.RUN:
        return total_seconds / distance
    if activity_type == ActivityType.BIKE:
        return distance / (total_seconds / SECONDS_PER_HOUR)
    if activity_type == ActivityType.SWIM:
        return total_seconds / distance * SWIM_PACE_DISTANCE
    raise ValueError(f"No derived metric for {activity_type}")


def _normalize_lift(session: LiftSession) -> list[LiftRow]:
    date_str, time_str = split_timestamp(session.started_at)
    rows: list[LiftRow] = []
    for exercise in session.exercises:
        for i, logged in enumerate(exercise.sets, 1):
            rows.append(
                LiftRow(
                    date=date_str,
                    time=time_str,
                    split=session.split,
                    day=session.day,
                    exercise=exercise.name,
                    set_number=i,
                    weight=logged.weight,
                    reps=logged.reps,
                    rir=logged.rir,
                    notes=session.notes or None,
                )
            )
    return rows


def _normalize_endurance(session: EnduranceSession) -> list[EnduranceRow]:
    date_str, time_str = split_timestamp(session.started_at)
    return [
        EnduranceRow(
            activity_type=session.activity_type,
            date=date_str,
            time=time_str,
            distance=session.distance,
            time_seconds=session.total_seconds,
            derived_metric=derived_metric(
                session.activity_type, session.distance, session.total_seconds
            ),
            rpe=session.rpe,
            notes=session.notes or None,
        )
    ]


def normalize_session(session: ActiveSession) -> list[SessionRow]:
    """
    Turn a finished session into rows for the log.

    Args:
        session: LiftSession or EnduranceSession

    Returns:
        LiftRow per logged set (set numbers restart at 1 for each exercise),
        or a single EnduranceRow
    """
    if session.activity_type == ActivityType.LIFT:
        return list(_normalize_lift(session))  # type: ignore[arg-type]
    return list(_normalize_endurance(session))  # type: ignore[arg-type]
