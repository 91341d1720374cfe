"""
Data models for the training log.

Dataclasses for logged spreadsheet rows, derived sessions, progression
targets and the active sessions that the write path turns into rows.
Every row type carries an explicit ActivityType tag; nothing downstream
infers the activity from which fields happen to be filled in.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Union

# Raw spreadsheet cell as returned by the store (never coerced on read)
CellValue = Union[str, int, float, None]


class ActivityType(str, Enum):
    """Kind of workout a row or session belongs to."""

    LIFT = "Lift"
    RUN = "Run"
    BIKE = "Bike"
    SWIM = "Swim"


ENDURANCE_TYPES: frozenset[ActivityType] = frozenset(
    {ActivityType.RUN, ActivityType.BIKE, ActivityType.SWIM}
)

_DATE_PREFIX = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}")
_DATE_FORMATS = ("%m/%d/%Y",)
_TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M:%S %p")


def _parse_day(text: str) -> date | None:
    match = _DATE_PREFIX.match(text)
    if match:
        try:
            return datetime.strptime(match.group(0), "%Y-%m-%d").date()
        except ValueError:
            return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _parse_timestamp(text: str) -> datetime | None:
    """Full ISO timestamp in a date cell (e.g. "2026-10-15T18:30:00.000Z")."""
    if "T" not in text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_clock(text: str) -> time | None:
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


@dataclass(frozen=True, order=True)
class SessionKey:
    """
    Structured (date, time) identity of a session.

    Compared on parsed calendar values, so "9:05" and "09:05" are the same
    session and ordering does not depend on zero padding.  A part that
    cannot be parsed sorts as the oldest possible value and keeps its raw
    text as a tie-breaker so the ordering stays total.
    """

    day: date
    date_text: str
    clock: time
    time_text: str

    @classmethod
    def parse(cls, date_str: str, time_str: str) -> "SessionKey":
        date_str = date_str.strip()
        time_str = time_str.strip()
        stamp = _parse_timestamp(date_str)
        day = stamp.date() if stamp is not None else _parse_day(date_str)
        clock = _parse_clock(time_str)
        # a blank time cell falls back to the timestamp's own clock
        if clock is None and not time_str and stamp is not None:
            clock = stamp.time()
        return cls(
            day=day if day is not None else date.min,
            date_text="" if day is not None else date_str,
            clock=clock if clock is not None else time.min,
            time_text="" if clock is not None else time_str,
        )


@dataclass(frozen=True)
class RepRange:
    """Inclusive rep range an exercise is programmed for (e.g. 8-12)."""

    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min < 1:
            raise ValueError("RepRange.min must be at least 1")
        if self.max < self.min:
            raise ValueError(f"RepRange.max ({self.max}) must be >= min ({self.min})")

    def __str__(self) -> str:
        return f"{self.min}-{self.max}"


@dataclass
class LiftLogRow:
    """
    One persisted Lift_Log row: a single set of one exercise.

    weight, reps, rir and notes hold the raw cell values.  Malformed numbers
    are kept as-is so they can still be shown back to the user.
    """

    date: str
    time: str
    exercise: str
    set_number: int
    weight: CellValue = None
    reps: CellValue = None
    rir: CellValue = None
    notes: CellValue = None
    split: str = ""
    day: str = ""
    activity_type: ActivityType = field(default=ActivityType.LIFT, init=False)

    @property
    def exercise_key(self) -> str:
        """Case-insensitive, trimmed exercise name used for matching."""
        return self.exercise.strip().lower()

    @property
    def session_key(self) -> SessionKey:
        return SessionKey.parse(self.date, self.time)


@dataclass(frozen=True)
class RecentSet:
    """A recent set as displayed to the user."""

    weight: CellValue
    reps: CellValue
    rir: CellValue


@dataclass(frozen=True)
class RecommendedPlanSet:
    """Target for one set of the next session."""

    set_number: int
    weight: float
    target_reps: float
    target_rir: int


@dataclass
class RecentLiftsResult:
    """
    Everything the logging screen needs about an exercise's history.

    recommended_plan is None when there is not enough history, no rep range
    is configured, or no set of the last session could be parsed.
    """

    last_trained: str | None = None
    sets: list[RecentSet] = field(default_factory=list)
    previous_note: str | None = None
    recommended_plan: list[RecommendedPlanSet] | None = None

    @classmethod
    def empty(cls) -> "RecentLiftsResult":
        """Result for an exercise with no readable history."""
        return cls()


# =============================================================================
# Active sessions (write path)
# =============================================================================


@dataclass
class LoggedSet:
    """A set entered during an active lift session."""

    weight: float
    reps: int
    rir: int

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.rir < 0:
            raise ValueError("rir must be non-negative")


@dataclass
class SessionExercise:
    """One exercise of an active lift session and the sets logged so far."""

    name: str
    target_sets: int
    target_rep_range: str | None = None
    sets: list[LoggedSet] = field(default_factory=list)
    completed: bool = False


@dataclass
class LiftSession:
    """An in-progress or finished lift session for one split day."""

    split: str
    day: str
    exercises: list[SessionExercise]
    started_at: str  # ISO timestamp
    notes: str | None = None
    activity_type: ActivityType = field(default=ActivityType.LIFT, init=False)

    @property
    def total_target_sets(self) -> int:
        return sum(ex.target_sets for ex in self.exercises)

    @property
    def logged_set_count(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)


@dataclass
class EnduranceSession:
    """A run, bike or swim session."""

    activity_type: ActivityType
    distance: float
    total_seconds: int
    started_at: str  # ISO timestamp
    rpe: int = 5
    notes: str | None = None

    def __post_init__(self) -> None:
        self.activity_type = ActivityType(self.activity_type)
        if self.activity_type not in ENDURANCE_TYPES:
            raise ValueError(f"Not an endurance activity: {self.activity_type.value}")
        if self.distance <= 0:
            raise ValueError("distance must be positive")
        if self.total_seconds <= 0:
            raise ValueError("total_seconds must be positive")
        if not 1 <= self.rpe <= 10:
            raise ValueError(f"rpe must be between 1 and 10, got {self.rpe}")

    @property
    def minutes(self) -> int:
        return self.total_seconds // 60

    @property
    def seconds(self) -> int:
        return self.total_seconds % 60


@dataclass
class LiftRow:
    """A normalized lift set ready to append to Lift_Log."""

    date: str
    time: str
    split: str
    day: str
    exercise: str
    set_number: int
    weight: float
    reps: int
    rir: int
    notes: str | None = None
    activity_type: ActivityType = field(default=ActivityType.LIFT, init=False)

    @property
    def volume(self) -> float:
        return self.weight * self.reps


@dataclass
class EnduranceRow:
    """
    A normalized endurance session ready to append to its sheet.

    derived_metric is pace per mile (Run), average mph (Bike) or pace per
    100 yd (Swim), depending on activity_type.
    """

    activity_type: ActivityType
    date: str
    time: str
    distance: float
    time_seconds: int
    derived_metric: float
    rpe: int
    notes: str | None = None

    def __post_init__(self) -> None:
        self.activity_type = ActivityType(self.activity_type)
        if self.activity_type not in ENDURANCE_TYPES:
            raise ValueError(f"Not an endurance activity: {self.activity_type.value}")


SessionRow = Union[LiftRow, EnduranceRow]
ActiveSession = Union[LiftSession, EnduranceSession]
