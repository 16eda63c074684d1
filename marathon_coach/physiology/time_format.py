"""Pace and time string conversions.

Every conversion to a display string floors to whole seconds through
``_whole_seconds`` so that stored and displayed values never drift apart.
"""

import math

NO_PACE = "--:--"

# Absorbs float noise such as 7.1 * 60 == 425.99999999999994
_FLOAT_EPSILON = 1e-6


def _whole_seconds(seconds: float) -> int:
    return max(0, math.floor(seconds + _FLOAT_EPSILON))


def seconds_to_pace(seconds: float) -> str:
    """Format seconds (per mile) as "M:SS".

    Args:
        seconds: Seconds per mile

    Returns:
        Pace string with floored seconds, e.g. 515.7 -> "8:35"
    """
    total = _whole_seconds(seconds)
    mins, secs = divmod(total, 60)
    return f"{mins}:{secs:02d}"


def pace_to_seconds(pace: str | None) -> int | None:
    """Parse a "M:SS" pace string into seconds.

    Args:
        pace: Pace string; empty or "--:--" means no pace

    Returns:
        Seconds per mile, or None if the string carries no pace
    """
    if not pace or pace == NO_PACE:
        return None
    parts = pace.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        mins, secs = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return mins * 60 + secs


def format_minutes(minutes: float) -> str:
    """Format fractional minutes as "M:SS" (e.g. 22.5 -> "22:30")."""
    return seconds_to_pace(minutes * 60)


def parse_time_to_minutes(time_str: str | None) -> float:
    """Parse "MM:SS" or "H:MM:SS" into fractional minutes.

    Returns 0.0 for empty or malformed input; callers treat 0 as "no result".
    """
    if not time_str:
        return 0.0
    try:
        parts = [float(p) for p in time_str.strip().split(":")]
    except ValueError:
        return 0.0
    if len(parts) == 2:
        return parts[0] + parts[1] / 60
    if len(parts) == 3:
        return parts[0] * 60 + parts[1] + parts[2] / 60
    return 0.0


def format_duration(seconds: float) -> str:
    """Format elapsed seconds as "M:SS", or "H:MM:SS" past the hour."""
    total = _whole_seconds(seconds)
    hours, remainder = divmod(total, 3600)
    mins, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"
