"""
Sentinel - Duration Utilities
=============================

Parsing and formatting of the short duration strings accepted by
/sentinel-timeout.

Usage:
    from sentinel.utils.duration import parse_duration, format_duration

    seconds = parse_duration("1d12h30m")  # 131400
    display = format_duration(131400)     # "1d 12h 30m"
"""

import re
from typing import Optional


# =============================================================================
# Time Constants
# =============================================================================

SECONDS_PER_WEEK = 604800
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

TIME_MULTIPLIERS = {
    "w": SECONDS_PER_WEEK,
    "d": SECONDS_PER_DAY,
    "h": SECONDS_PER_HOUR,
    "m": SECONDS_PER_MINUTE,
    "s": 1,
}

TIME_UNIT_ALIASES = {
    "week": "w", "weeks": "w", "wk": "w", "wks": "w",
    "day": "d", "days": "d",
    "hour": "h", "hours": "h", "hr": "h", "hrs": "h",
    "minute": "m", "minutes": "m", "min": "m", "mins": "m",
    "second": "s", "seconds": "s", "sec": "s", "secs": "s",
}

_COMBINED_PATTERN = re.compile(r"(?:(\d+)w)?(?:(\d+)d)?(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?")


# =============================================================================
# Parsing
# =============================================================================

def _normalize_duration_string(duration_str: str) -> str:
    """
    Convert full unit words to their short forms and drop spaces.

    Examples:
        "1 day" -> "1d"
        "2 hours 30 minutes" -> "2h30m"
    """
    result = duration_str.lower().strip()

    # Longest aliases first so "minutes" is not eaten by "min"
    for word in sorted(TIME_UNIT_ALIASES, key=len, reverse=True):
        short = TIME_UNIT_ALIASES[word]
        result = re.sub(rf"(?<=\d)\s*{word}\b", short, result)

    return result.replace(" ", "")


def parse_duration(duration_str: Optional[str]) -> Optional[int]:
    """
    Parse a duration string into seconds.

    Supports "30s", "10m", "6h", "2d", "1w", combinations such as
    "1d12h30m", full words ("2 hours"), and plain numbers, which are
    read as minutes.

    Returns:
        Duration in seconds, or None if the string is empty or invalid.

    Examples:
        >>> parse_duration("1h")
        3600
        >>> parse_duration("30")
        1800
        >>> parse_duration("soon")
        None
    """
    if not duration_str:
        return None

    normalized = _normalize_duration_string(duration_str)

    if normalized.isdigit():
        return int(normalized) * SECONDS_PER_MINUTE

    match = _COMBINED_PATTERN.fullmatch(normalized)
    if not match or not any(match.groups()):
        return None

    weeks, days, hours, minutes, seconds = (int(g or 0) for g in match.groups())
    return (
        weeks * SECONDS_PER_WEEK
        + days * SECONDS_PER_DAY
        + hours * SECONDS_PER_HOUR
        + minutes * SECONDS_PER_MINUTE
        + seconds
    )


# =============================================================================
# Formatting
# =============================================================================

def format_duration(seconds: int, max_units: int = 3) -> str:
    """
    Format seconds into a human-readable duration.

    Examples:
        >>> format_duration(3660)
        "1h 1m"
        >>> format_duration(45)
        "45s"
    """
    if seconds <= 0:
        return "0s"

    parts = []
    for unit in ("w", "d", "h", "m", "s"):
        size = TIME_MULTIPLIERS[unit]
        if seconds >= size and len(parts) < max_units:
            value, seconds = divmod(seconds, size)
            parts.append(f"{value}{unit}")

    return " ".join(parts)


__all__ = [
    "SECONDS_PER_WEEK",
    "SECONDS_PER_DAY",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_MINUTE",
    "parse_duration",
    "format_duration",
]
