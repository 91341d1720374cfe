"""
Tests for the workout plan loader and registry.
"""

import pytest

from training_log.core.models import RepRange
from training_log.core.workout_plan import (
    PlannedExercise,
    Split,
    get_split,
    get_splits,
    rep_range_lookup,
)
from training_log.core.workout_plan.loader import (
    exercise_from_dict,
    get_bundled_plan_path,
    load_splits_from_yaml,
    merge_split_dicts,
    split_from_dict,
)

USER_OVERRIDE = """\
splits:
  - split: Upper/Lower
    days:
      Upper A:
        - exercise: Bench Press
          sets: 4
          rep_range: "8-12"
  - split: Full Body
    days:
      Day 1:
        - exercise: Goblet Squat
          sets: 3
          rep_range: "10-15"
"""


def _write_user_plan(home, text: str) -> None:
    home.mkdir(parents=True, exist_ok=True)
    (home / "workout_plan.yaml").write_text(text, encoding="utf-8")


class TestBundledPlan:
    def test_bundled_file_exists(self):
        assert get_bundled_plan_path().exists()

    def test_splits_in_file_order(self):
        assert [s.split for s in get_splits()] == ["Upper/Lower", "Push/Pull/Legs"]

    def test_days_in_order(self):
        assert list(get_split("Upper/Lower").days) == ["Upper A", "Lower A", "Upper B", "Lower B"]

    def test_input_mode(self):
        leg_press = [e for e in get_split("Upper/Lower").exercises() if e.exercise == "Leg Press"][0]
        assert leg_press.input_mode == "plates"

    def test_cached(self):
        assert get_splits() is get_splits()


class TestGetSplit:
    def test_case_insensitive(self):
        assert get_split("  push/pull/legs ").split == "Push/Pull/Legs"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Valid splits: Upper/Lower, Push/Pull/Legs"):
            get_split("Bro Split")


class TestRepRangeLookup:
    def test_bundled_ranges(self):
        lookup = rep_range_lookup()
        assert lookup["bench press"] == RepRange(6, 10)
        assert lookup["leg press"] == RepRange(10, 15)
        assert "bench press " not in lookup

    def test_first_occurrence_wins(self):
        splits = [
            Split("A", {"Day": [PlannedExercise("Curl", 3, "8-12")]}),
            Split("B", {"Day": [PlannedExercise("curl", 3, "12-15")]}),
        ]
        assert rep_range_lookup(splits) == {"curl": RepRange(8, 12)}

    def test_unparsable_range_left_out(self):
        splits = [Split("A", {"Day": [PlannedExercise("Plank", 3, "60s"), PlannedExercise("Curl", 3, "8-12")]})]
        assert rep_range_lookup(splits) == {"curl": RepRange(8, 12)}

    def test_unparsable_first_entry_does_not_block_later_one(self):
        splits = [
            Split("A", {"Day": [PlannedExercise("Curl", 3, "AMRAP")]}),
            Split("B", {"Day": [PlannedExercise("Curl", 3, "10-12")]}),
        ]
        assert rep_range_lookup(splits) == {"curl": RepRange(10, 12)}


class TestUserOverride:
    def test_override_merges_by_split_name(self, isolated_home):
        _write_user_plan(isolated_home, USER_OVERRIDE)

        upper_lower = get_split("Upper/Lower")
        assert [e.exercise for e in upper_lower.days["Upper A"]] == ["Bench Press"]
        assert upper_lower.days["Upper A"][0].sets == 4
        # days not named in the override are kept
        assert "Lower B" in upper_lower.days

    def test_override_changes_rep_range(self, isolated_home):
        _write_user_plan(isolated_home, USER_OVERRIDE)
        assert rep_range_lookup()["bench press"] == RepRange(8, 12)

    def test_new_split_appended(self, isolated_home):
        _write_user_plan(isolated_home, USER_OVERRIDE)
        assert [s.split for s in get_splits()] == ["Upper/Lower", "Push/Pull/Legs", "Full Body"]

    def test_invalid_yaml_warns_and_keeps_bundled(self, isolated_home):
        _write_user_plan(isolated_home, "splits: [unclosed\n")
        with pytest.warns(UserWarning, match="could not read"):
            splits = get_splits()
        assert [s.split for s in splits] == ["Upper/Lower", "Push/Pull/Legs"]

    @pytest.mark.parametrize("text", ["splits: 5\n", "splits: Upper/Lower\n", "splits:\n  split: Full Body\n"])
    def test_splits_not_a_list_warns_and_keeps_bundled(self, isolated_home, text):
        _write_user_plan(isolated_home, text)
        with pytest.warns(UserWarning, match="'splits' must be a list"):
            splits = get_splits()
        assert [s.split for s in splits] == ["Upper/Lower", "Push/Pull/Legs"]

    def test_malformed_days_skip_only_that_split(self, isolated_home):
        _write_user_plan(isolated_home, "splits:\n  - split: Full Body\n    days: [Day 1]\n")
        with pytest.warns(UserWarning, match="skipping split"):
            names = [s.split for s in get_splits()]
        assert names == ["Upper/Lower", "Push/Pull/Legs"]

    def test_no_plan_files(self, tmp_path):
        assert load_splits_from_yaml(bundled_path=tmp_path / "missing.yaml") == []


class TestLoaderHelpers:
    def test_exercise_from_dict(self):
        ex = exercise_from_dict({"exercise": " Curl ", "sets": "3", "rep_range": "8-12"})
        assert ex == PlannedExercise("Curl", 3, "8-12", "weight")

    @pytest.mark.parametrize(
        "raw",
        [
            {"exercise": "Curl", "sets": 3},
            {"exercise": "  ", "sets": 3, "rep_range": "8-12"},
            {"exercise": "Curl", "sets": 3, "rep_range": "8-12", "input_mode": "bands"},
            {"exercise": "Curl", "sets": "three", "rep_range": "8-12"},
        ],
    )
    def test_exercise_from_dict_invalid(self, raw):
        with pytest.raises(ValueError):
            exercise_from_dict(raw)

    def test_split_skips_bad_exercise_with_warning(self):
        raw = {
            "split": "A",
            "days": {"Day": [{"exercise": "Curl", "sets": 3}, {"exercise": "Row", "sets": 3, "rep_range": "8-12"}]},
        }
        with pytest.warns(UserWarning, match="skipping exercise"):
            split = split_from_dict(raw)
        assert [e.exercise for e in split.days["Day"]] == ["Row"]

    def test_split_without_name(self):
        with pytest.raises(ValueError):
            split_from_dict({"days": {}})

    def test_merge_split_dicts(self):
        bundled = [{"split": "A", "days": {"X": [1], "Y": [2]}}, {"split": "B", "days": {}}]
        user = [{"split": "A", "days": {"Y": [3]}}, {"split": "C", "days": {}}]
        merged = merge_split_dicts(bundled, user)
        assert [m["split"] for m in merged] == ["A", "B", "C"]
        assert merged[0]["days"] == {"X": [1], "Y": [3]}

    def test_merge_ignores_nameless_entries(self):
        with pytest.warns(UserWarning):
            merged = merge_split_dicts([{"days": {}}], [])
        assert merged == []
