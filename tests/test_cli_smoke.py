"""
Minimal smoke tests for the training-log CLI.

Tests basic functionality:
- App runs without errors
- Lift and endurance sessions are appended to their sheets
- Recent lifts and the next-session plan are shown
- Workout plan commands list splits
"""

import csv
import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from training_log.cli.main import app


runner = CliRunner()


@pytest.fixture
def sheet_dir():
    """Create a temporary directory for sheet files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _log_bench(sheet_dir: Path, date: str, sets: str, notes: str | None = None):
    args = [
        "log-lift",
        "--sheet-dir", str(sheet_dir),
        "--split", "Upper/Lower",
        "--day", "Upper A",
        "--date", date,
        "--time", "18:00",
        "-e", "Bench Press",
        "-s", sets,
    ]
    if notes:
        args += ["--notes", notes]
    return runner.invoke(app, args)


def _read_sheet(path: Path) -> list[list[str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        """Test that app runs and shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "recent" in result.output
        assert "log-lift" in result.output

    def test_log_lift_appends_rows(self, sheet_dir):
        """Test log-lift writes one row per set, numbered per exercise."""
        result = runner.invoke(app, [
            "log-lift",
            "--sheet-dir", str(sheet_dir),
            "--split", "Upper/Lower",
            "--day", "Upper A",
            "--date", "2026-10-15",
            "--time", "18:00",
            "-e", "Bench Press", "-s", "185x8@2, 185x8@1",
            "-e", "Barbell Row", "-s", "135x12@2",
            "--notes", "elbow fine",
        ])

        assert result.exit_code == 0
        assert "Logged 3 set(s)" in result.output

        grid = _read_sheet(sheet_dir / "Lift_Log.csv")
        assert grid[0][:3] == ["date", "time", "split"]
        assert grid[1] == [
            "2026-10-15", "18:00", "Upper/Lower", "Upper A", "Bench Press",
            "1", "185", "8", "2", "1480", "elbow fine",
        ]
        assert [(r[4], r[5]) for r in grid[1:]] == [
            ("Bench Press", "1"), ("Bench Press", "2"), ("Barbell Row", "1"),
        ]

    def test_log_lift_rejects_bad_set(self, sheet_dir):
        result = _log_bench(sheet_dir, "2026-10-15", "185x8")
        assert result.exit_code == 1
        assert "Invalid set" in result.output
        assert not (sheet_dir / "Lift_Log.csv").exists()

    def test_log_lift_mismatched_sets(self, sheet_dir):
        result = runner.invoke(app, [
            "log-lift",
            "--sheet-dir", str(sheet_dir),
            "--split", "Upper/Lower",
            "--day", "Upper A",
            "-e", "Bench Press",
            "-e", "Barbell Row",
            "-s", "185x8@2",
        ])
        assert result.exit_code == 1

    def test_log_lift_warns_for_unplanned_exercise(self, sheet_dir):
        result = runner.invoke(app, [
            "log-lift",
            "--sheet-dir", str(sheet_dir),
            "--split", "Upper/Lower",
            "--day", "Upper A",
            "-e", "Zercher Squat",
            "-s", "135x5@2",
        ])
        assert result.exit_code == 0
        assert "Warning" in result.output
        assert "Zercher Squat" in result.output

    def test_recent_json_after_two_sessions(self, sheet_dir):
        """Test recent returns sets, note and plan once two sessions exist."""
        assert _log_bench(sheet_dir, "2026-10-12", "185x8@2, 185x8@1").exit_code == 0
        assert _log_bench(sheet_dir, "2026-10-15", "185x10@2, 185x9@0", notes="felt strong").exit_code == 0

        result = runner.invoke(app, ["recent", "bench press", "--sheet-dir", str(sheet_dir), "--json"])
        assert result.exit_code == 0

        data = json.loads(result.output)
        assert data["lastTrained"] == "2026-10-15"
        assert data["previousNote"] == "felt strong"
        assert data["sets"] == [
            {"weight": "185", "reps": "10", "rir": "2"},
            {"weight": "185", "reps": "9", "rir": "0"},
            {"weight": "185", "reps": "8", "rir": "2"},
        ]
        # Bench Press is programmed 6-10
        assert data["recommendedPlan"] == [
            {"setNumber": 1, "weight": 190, "targetReps": 6, "targetRIR": 1},
            {"setNumber": 2, "weight": 185, "targetReps": 10, "targetRIR": 1},
        ]

    def test_recent_single_session_has_no_plan(self, sheet_dir):
        _log_bench(sheet_dir, "2026-10-15", "185x8@2")

        result = runner.invoke(app, ["recent", "Bench Press", "-p", str(sheet_dir), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["recommendedPlan"] is None
        assert len(data["sets"]) == 1

    def test_recent_table_output(self, sheet_dir):
        _log_bench(sheet_dir, "2026-10-12", "185x8@2")
        _log_bench(sheet_dir, "2026-10-15", "185x9@1", notes="easy")

        result = runner.invoke(app, ["recent", "Bench Press", "-p", str(sheet_dir), "-n", "2"])
        assert result.exit_code == 0
        assert "Last 2 Sets" in result.output
        assert "Next Session Plan" in result.output
        assert "easy" in result.output

    def test_recent_without_history(self, sheet_dir):
        """A missing Lift_Log is an empty history, not an error."""
        result = runner.invoke(app, ["recent", "Bench Press", "-p", str(sheet_dir)])
        assert result.exit_code == 0
        assert "No data available" in result.output
        assert "Not enough data to generate plan" in result.output

    def test_recent_with_malformed_user_plan(self, sheet_dir, isolated_home):
        """A user plan with a non-list 'splits' falls back to the bundled plan."""
        isolated_home.mkdir(parents=True, exist_ok=True)
        (isolated_home / "workout_plan.yaml").write_text("splits: 5\n", encoding="utf-8")
        _log_bench(sheet_dir, "2026-10-12", "185x8@2")
        _log_bench(sheet_dir, "2026-10-15", "185x9@1")

        result = runner.invoke(app, ["recent", "Bench Press", "-p", str(sheet_dir)])
        assert result.exit_code == 0
        assert "Next Session Plan" in result.output

    def test_recent_blank_exercise(self, sheet_dir):
        result = runner.invoke(app, ["recent", "  ", "-p", str(sheet_dir)])
        assert result.exit_code == 1
        assert "Missing exercise name" in result.output

    def test_history(self, sheet_dir):
        _log_bench(sheet_dir, "2026-10-12", "185x8@2")
        _log_bench(sheet_dir, "2026-10-15", "190x6@1")

        result = runner.invoke(app, ["history", "Bench Press", "-p", str(sheet_dir)])
        assert result.exit_code == 0
        assert "Lift History" in result.output
        assert result.output.index("2026-10-15") < result.output.index("2026-10-12")

    def test_history_unknown_exercise(self, sheet_dir):
        _log_bench(sheet_dir, "2026-10-12", "185x8@2")
        result = runner.invoke(app, ["history", "Deadlift", "-p", str(sheet_dir)])
        assert result.exit_code == 0
        assert "No sets logged" in result.output

    def test_history_missing_sheet(self, sheet_dir):
        result = runner.invoke(app, ["history", "Bench Press", "-p", str(sheet_dir)])
        assert result.exit_code == 1

    def test_log_run(self, sheet_dir):
        """Test log-run writes one Run_Log row with pace per mile."""
        result = runner.invoke(app, [
            "log-run",
            "-p", str(sheet_dir),
            "--distance", "3",
            "--time", "27:00",
            "--rpe", "6",
            "--date", "2026-10-19",
            "--start", "07:00",
        ])

        assert result.exit_code == 0
        assert "Logged run on 2026-10-19" in result.output
        grid = _read_sheet(sheet_dir / "Run_Log.csv")
        assert grid[0] == ["date", "time", "distance", "timeSeconds", "pacePerMile", "rpe", "notes"]
        assert grid[1] == ["2026-10-19", "07:00", "3", "1620", "540", "6", ""]

    def test_log_bike_hours(self, sheet_dir):
        result = runner.invoke(app, [
            "log-bike", "-p", str(sheet_dir), "--distance", "18", "--time", "1:00:00",
            "--date", "2026-10-19", "--start", "07:00",
        ])
        assert result.exit_code == 0
        assert _read_sheet(sheet_dir / "Bike_Log.csv")[1][4] == "18"

    def test_log_swim(self, sheet_dir):
        result = runner.invoke(app, [
            "log-swim", "-p", str(sheet_dir), "--distance", "1000", "--time", "20:00",
            "--date", "2026-10-19", "--start", "07:00",
        ])
        assert result.exit_code == 0
        assert _read_sheet(sheet_dir / "Swim_Log.csv")[1][4] == "120"

    def test_log_run_bad_duration(self, sheet_dir):
        result = runner.invoke(app, ["log-run", "-p", str(sheet_dir), "--distance", "3", "--time", "27:75"])
        assert result.exit_code == 1
        assert "Invalid duration" in result.output
        assert not (sheet_dir / "Run_Log.csv").exists()

    def test_log_run_bad_rpe(self, sheet_dir):
        result = runner.invoke(app, ["log-run", "-p", str(sheet_dir), "--distance", "3", "--time", "27:00", "--rpe", "11"])
        assert result.exit_code == 1

    def test_splits(self):
        result = runner.invoke(app, ["splits"])
        assert result.exit_code == 0
        assert "Upper/Lower" in result.output
        assert "Push/Pull/Legs" in result.output

    def test_splits_json(self):
        result = runner.invoke(app, ["splits", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["split"] == "Upper/Lower"
        assert data[0]["days"]["Upper A"][0] == {
            "exercise": "Bench Press", "sets": 3, "rep_range": "6-10", "input_mode": "weight",
        }

    def test_show_plan(self):
        result = runner.invoke(app, ["show-plan", "upper/lower"])
        assert result.exit_code == 0
        assert "Bench Press" in result.output

    def test_show_plan_unknown(self):
        result = runner.invoke(app, ["show-plan", "Bro Split"])
        assert result.exit_code == 1
        assert "Unknown split" in result.output
