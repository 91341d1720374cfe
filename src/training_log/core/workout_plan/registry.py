"""
Workout plan registry.

Splits are loaded from YAML on first use (see loader.py).  The rep range
lookup maps a trimmed, lower-cased exercise name to its RepRange and is
what the progression planner consults.
"""

from functools import lru_cache

from ..models import RepRange
from ..progression import parse_rep_range
from .base import Split


@lru_cache(maxsize=1)
def get_splits() -> tuple[Split, ...]:
    """Return all configured splits (cached after the first call)."""
    from .loader import load_splits_from_yaml

    return tuple(load_splits_from_yaml())


def get_split(name: str) -> Split:
    """
    Return the Split with the given name.

    Args:
        name: Split name, matched case-insensitively

    Raises:
        ValueError: If no split has that name
    """
    for split in get_splits():
        if split.split.strip().lower() == name.strip().lower():
            return split
    valid = ", ".join(s.split for s in get_splits()) or "(none configured)"
    raise ValueError(f"Unknown split '{name}'. Valid splits: {valid}")


def rep_range_lookup(splits=None) -> dict[str, RepRange]:
    """
    Build {exercise_key: RepRange} from the workout plan.

    The first occurrence of an exercise wins.  Exercises whose rep_range
    does not parse are left out, which disables planning for them.

    Args:
        splits: Splits to index; defaults to get_splits()
    """
    if splits is None:
        splits = get_splits()
    lookup: dict[str, RepRange] = {}
    for split in splits:
        for ex in split.exercises():
            key = ex.exercise.strip().lower()
            if key in lookup:
                continue
            rep_range = parse_rep_range(ex.rep_range)
            if rep_range is not None:
                lookup[key] = rep_range
    return lookup
