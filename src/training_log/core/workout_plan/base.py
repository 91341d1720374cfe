"""
Base types for the workout plan.

A Split groups training days; each day lists the exercises to perform
with their set count and programmed rep range.
"""

from dataclasses import dataclass, field
from typing import Literal

InputMode = Literal["weight", "plates"]


@dataclass(frozen=True)
class PlannedExercise:
    """One exercise on a training day."""

    exercise: str        # Display name; also the Lift_Log exercise name
    sets: int            # Target working sets
    rep_range: str       # e.g. "8-12"
    input_mode: InputMode = "weight"


@dataclass(frozen=True)
class Split:
    """A training split, e.g. Upper/Lower, and its days in order."""

    split: str
    days: dict[str, list[PlannedExercise]] = field(default_factory=dict)

    def exercises(self) -> list[PlannedExercise]:
        """All exercises across days, in day order."""
        return [ex for day in self.days.values() for ex in day]
