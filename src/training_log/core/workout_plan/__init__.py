"""
Workout plan configuration.

Splits, days and per-exercise rep ranges, loaded from YAML.
"""

from .base import PlannedExercise, Split
from .registry import get_split, get_splits, rep_range_lookup

__all__ = [
    "PlannedExercise",
    "Split",
    "get_split",
    "get_splits",
    "rep_range_lookup",
]
