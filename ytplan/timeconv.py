"""Duration parsing and human-readable time formatting."""

import re
from typing import Optional

# YouTube Data API durations: PT4M13S, PT1H30M, P1DT2H ...
_ISO_RE = re.compile(r'^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$', re.IGNORECASE)


def parse_iso8601_duration(duration: Optional[str]) -> float:
    """
    Parse an ISO 8601 duration to total minutes.

    Examples:
        PT4M13S -> 4.2166...
        PT1H30M -> 90.0
        PT45S -> 0.75

    Returns 0.0 for empty or unrecognised input (live streams report P0D).
    """
    if not duration or not isinstance(duration, str):
        return 0.0

    match = _ISO_RE.match(duration.strip())
    if not match:
        return 0.0

    days, hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    return days * 24 * 60 + hours * 60 + minutes + seconds / 60


def seconds_to_minutes(seconds) -> float:
    """Convert a yt-dlp style duration in seconds to minutes."""
    if seconds is None or isinstance(seconds, bool):
        return 0.0
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return 0.0
    if value != value or value < 0:  # NaN or negative
        return 0.0
    return value / 60


def format_minutes(total_minutes: float) -> str:
    """
    Format minutes for display.

    Examples:
        150 -> "2h 30m"
        45 -> "45m"
        90.5 -> "1h 30m"
    """
    if not total_minutes or total_minutes <= 0:
        return "0m"

    rounded = int(round(total_minutes))
    hours, minutes = divmod(rounded, 60)

    if hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


def format_offset(minutes: float) -> str:
    """Format a position inside a video as M:SS or H:MM:SS."""
    total_seconds = int(round(max(minutes, 0) * 60))
    hours = total_seconds // 3600
    mins = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    if hours:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"
