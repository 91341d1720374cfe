"""
Configuration constants for the training log.

All adjustable parameters are centralized here for easy tuning.
"""

import os
from pathlib import Path
from typing import Final

# =============================================================================
# PROGRESSION (double progression within a rep range)
# =============================================================================

WEIGHT_INCREMENT: Final[float] = 5.0  # Added load once the top of the range is reached (lbs)
TARGET_RIR: Final[int] = 1  # Every planned set aims for one rep in reserve
MIN_SESSIONS_FOR_PLAN: Final[int] = 2  # Distinct (date, time) sessions needed before planning

# =============================================================================
# RECENT LIFTS QUERY
# =============================================================================

DEFAULT_TARGET_SETS: Final[int] = 3  # Recent sets returned when not requested
MIN_TARGET_SETS: Final[int] = 1

# Display fallback for a blank RIR cell
DEFAULT_DISPLAY_RIR: Final[int] = 0

# =============================================================================
# SPREADSHEET LAYOUT
# =============================================================================

LIFT_LOG_SHEET: Final[str] = "Lift_Log"
RUN_LOG_SHEET: Final[str] = "Run_Log"
BIKE_LOG_SHEET: Final[str] = "Bike_Log"
SWIM_LOG_SHEET: Final[str] = "Swim_Log"

LIFT_LOG_HEADER: Final[tuple[str, ...]] = (
    "date", "time", "split", "day", "exercise", "setNumber",
    "weight", "reps", "rir", "volume", "notes",
)
RUN_LOG_HEADER: Final[tuple[str, ...]] = (
    "date", "time", "distance", "timeSeconds", "pacePerMile", "rpe", "notes",
)
BIKE_LOG_HEADER: Final[tuple[str, ...]] = (
    "date", "time", "distance", "timeSeconds", "avgSpeed", "rpe", "notes",
)
SWIM_LOG_HEADER: Final[tuple[str, ...]] = (
    "date", "time", "distance", "timeSeconds", "pacePer100", "rpe", "notes",
)

# Column indices into a Lift_Log row (volume at 9 is not read back)
LIFT_COL_DATE: Final[int] = 0
LIFT_COL_TIME: Final[int] = 1
LIFT_COL_SPLIT: Final[int] = 2
LIFT_COL_DAY: Final[int] = 3
LIFT_COL_EXERCISE: Final[int] = 4
LIFT_COL_SET_NUMBER: Final[int] = 5
LIFT_COL_WEIGHT: Final[int] = 6
LIFT_COL_REPS: Final[int] = 7
LIFT_COL_RIR: Final[int] = 8
LIFT_COL_NOTES: Final[int] = 10

LIFT_LOG_RANGE: Final[str] = f"{LIFT_LOG_SHEET}!A:K"

# =============================================================================
# ENDURANCE SESSIONS
# =============================================================================

DEFAULT_RPE: Final[int] = 5
SECONDS_PER_HOUR: Final[int] = 3600
SWIM_PACE_DISTANCE: Final[int] = 100  # Pace is reported per 100 yd

# =============================================================================
# DATA DIRECTORY
# =============================================================================

HOME_ENV_VAR: Final[str] = "TRAINING_LOG_HOME"
HOME_DIR_NAME: Final[str] = ".training-log"
WORKOUT_PLAN_FILE: Final[str] = "workout_plan.yaml"


def get_home_dir() -> Path:
    """Return the per-user data directory ($TRAINING_LOG_HOME or ~/.training-log)."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / HOME_DIR_NAME
