"""Shared fixtures: an in-memory sheet store and an isolated home directory."""

from typing import Any, Sequence

import pytest

from training_log.core.config import LIFT_LOG_HEADER
from training_log.core.workout_plan.registry import get_splits
from training_log.io.sheet_store import SheetStore, StoreError, parse_range


class FakeStore(SheetStore):
    """SheetStore kept in memory; optionally fails every read."""

    def __init__(self, sheets: dict[str, list[list[Any]]] | None = None, fail_reads: bool = False):
        self.sheets = sheets or {}
        self.fail_reads = fail_reads
        self.reads: list[str] = []

    def read_range(self, range_name: str) -> list[list[Any]]:
        self.reads.append(range_name)
        if self.fail_reads:
            raise StoreError("sheet unavailable")
        sheet, _, _ = parse_range(range_name)
        if sheet not in self.sheets:
            raise StoreError(f"Sheet not found: {sheet}")
        return [list(r) for r in self.sheets[sheet]]

    def append_rows(self, sheet: str, rows: Sequence[Sequence[Any]]) -> None:
        self.sheets.setdefault(sheet, []).extend(list(r) for r in rows)


def lift_row(
    date: str,
    time: str,
    exercise: str,
    set_number: Any,
    weight: Any,
    reps: Any,
    rir: Any,
    notes: Any = "",
    split: str = "Upper/Lower",
    day: str = "Upper A",
) -> list[Any]:
    """One Lift_Log row in sheet column order."""
    return [date, time, split, day, exercise, set_number, weight, reps, rir, "", notes]


def lift_grid(*rows: list[Any]) -> list[list[Any]]:
    """Lift_Log value grid with header row."""
    return [list(LIFT_LOG_HEADER), *rows]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the data directory at a temp dir and reset the plan cache."""
    home = tmp_path / "home"
    monkeypatch.setenv("TRAINING_LOG_HOME", str(home))
    get_splits.cache_clear()
    yield home
    get_splits.cache_clear()
