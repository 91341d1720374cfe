"""
YAML to Split loader.

Loads the bundled ``src/training_log/workout_plan.yaml`` and, when present,
the user's ``~/.training-log/workout_plan.yaml``.  A user split with the
same name as a bundled one is deep-merged over it, so only the days that
change need to be listed; user splits with new names are appended.

Usage (internal, called by registry.py):
    from .loader import load_splits_from_yaml
    splits = load_splits_from_yaml()
"""

from __future__ import annotations

import warnings
from pathlib import Path

import yaml

from ..config import WORKOUT_PLAN_FILE, get_home_dir
from .base import PlannedExercise, Split

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset({"exercise", "sets", "rep_range"})
_INPUT_MODES: frozenset[str] = frozenset({"weight", "plates"})


def exercise_from_dict(d: dict) -> PlannedExercise:
    """Convert a raw dict (from YAML) to a PlannedExercise.

    Raises ValueError if a required field is absent or invalid.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"exercise missing fields: {sorted(missing)}")

    name = str(d["exercise"]).strip()
    if not name:
        raise ValueError("exercise name is empty")

    input_mode = str(d.get("input_mode", "weight"))
    if input_mode not in _INPUT_MODES:
        raise ValueError(f"invalid input_mode {input_mode!r} for {name!r}")

    return PlannedExercise(
        exercise=name,
        sets=int(d["sets"]),
        rep_range=str(d["rep_range"]),
        input_mode=input_mode,  # type: ignore[arg-type]
    )


def split_from_dict(d: dict) -> Split:
    """Convert a raw split dict to a Split, skipping malformed exercises."""
    if "split" not in d:
        raise ValueError("split entry has no 'split' name")
    name = str(d["split"])

    days: dict[str, list[PlannedExercise]] = {}
    for day_name, raw_exercises in (d.get("days") or {}).items():
        exercises: list[PlannedExercise] = []
        for raw in raw_exercises or []:
            try:
                exercises.append(exercise_from_dict(raw))
            except (TypeError, ValueError) as exc:
                warnings.warn(
                    f"training-log: skipping exercise in {name}/{day_name} ({exc})",
                    stacklevel=2,
                )
        days[str(day_name)] = exercises

    return Split(split=name, days=days)


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; return {} on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"training-log: could not read {path} ({exc})", stacklevel=2)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _split_entries(path: Path) -> list:
    """The `splits` list of a plan file; [] (with a warning) if it is not a list."""
    entries = _load_yaml_file(path).get("splits") or []
    if not isinstance(entries, list):
        warnings.warn(
            f"training-log: ignoring {path} ('splits' must be a list, got {type(entries).__name__})",
            stacklevel=3,
        )
        return []
    return entries


def get_bundled_plan_path() -> Path:
    """Return the path of the workout plan shipped with the package."""
    # loader.py lives at src/training_log/core/workout_plan/loader.py
    return Path(__file__).parent.parent.parent / WORKOUT_PLAN_FILE


def get_user_plan_path() -> Path | None:
    """Return the user's workout_plan.yaml if it exists, else None."""
    p = get_home_dir() / WORKOUT_PLAN_FILE
    return p if p.exists() else None


def merge_split_dicts(bundled: list[dict], user: list[dict]) -> list[dict]:
    """Merge user split dicts over bundled ones by split name, keeping order."""
    merged: dict[str, dict] = {}
    for raw in bundled + user:
        if not isinstance(raw, dict) or "split" not in raw:
            warnings.warn(f"training-log: ignoring split entry {raw!r}", stacklevel=2)
            continue
        name = str(raw["split"])
        merged[name] = _deep_merge(merged[name], raw) if name in merged else dict(raw)
    return list(merged.values())


def load_splits_from_yaml(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> list[Split]:
    """Return the configured splits.

    Args:
        bundled_path: Override for the bundled file (tests)
        user_path: Override for the user file; defaults to
            ``~/.training-log/workout_plan.yaml`` when it exists

    Returns:
        Splits in file order; empty if nothing could be loaded
    """
    bundled_path = bundled_path or get_bundled_plan_path()
    if user_path is None:
        user_path = get_user_plan_path()

    bundled_raw: list = []
    if bundled_path.exists():
        bundled_raw = _split_entries(bundled_path)
    user_raw: list = []
    if user_path is not None:
        user_raw = _split_entries(user_path)

    splits: list[Split] = []
    for raw in merge_split_dicts(bundled_raw, user_raw):
        try:
            splits.append(split_from_dict(raw))
        except (AttributeError, TypeError, ValueError) as exc:
            warnings.warn(f"training-log: skipping split ({exc})", stacklevel=2)
    return splits
