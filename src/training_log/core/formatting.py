"""Time and pace formatting helpers for endurance sessions."""

import math
from typing import Literal

TimeFormat = Literal["mm:ss", "hh:mm:ss"]


def format_seconds_to_min_sec(total_seconds: float) -> str:
    """Format seconds as M:SS (e.g. 512.4 -> "8:32")."""
    mins = math.floor(total_seconds / 60)
    secs = round(total_seconds % 60)
    if secs == 60:
        mins, secs = mins + 1, 0
    return f"{mins}:{secs:02d}"


def parse_time_input(text: str, fmt: TimeFormat = "mm:ss") -> int | None:
    """
    Parse a duration typed by the user into total seconds.

    Args:
        text: "MM:SS" or "HH:MM:SS" depending on fmt
        fmt: Expected format

    Returns:
        Total seconds, or None if the text does not match the format or
        the duration is zero
    """
    parts = text.strip().split(":")
    expected = 2 if fmt == "mm:ss" else 3
    if len(parts) != expected or not all(p.isdigit() for p in parts):
        return None

    values = [int(p) for p in parts]
    if any(v >= 60 for v in values[1:]):
        return None

    if fmt == "mm:ss":
        total = values[0] * 60 + values[1]
    else:
        total = values[0] * 3600 + values[1] * 60 + values[2]
    return total or None


def format_total_seconds(total_seconds: int, fmt: TimeFormat = "mm:ss") -> str:
    """Inverse of parse_time_input()."""
    if fmt == "mm:ss":
        return f"{total_seconds // 60:02d}:{total_seconds % 60:02d}"
    hours, rem = divmod(total_seconds, 3600)
    return f"{hours:02d}:{rem // 60:02d}:{rem % 60:02d}"
