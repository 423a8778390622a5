"""
Date/time parsing and duration formatting.
"""

from datetime import datetime, timedelta
from typing import Union

TIMESTAMP_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y %H:%M")


def parse_timestamp(date_field: str, time_field: str) -> datetime:
    """Parse a stamped MM/DD/YYYY date and an HH:MM[:SS] time.

    Raises:
        ValueError: If the fields match none of the known formats.
    """
    text = f"{date_field} {time_field}"
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized timestamp: {text!r}")


def format_duration(duration: Union[timedelta, int]) -> str:
    """Render a duration as HH:MM:SS; hours may exceed 24."""
    if isinstance(duration, timedelta):
        seconds = int(duration.total_seconds())
    else:
        seconds = int(duration)
    sign = "-" if seconds < 0 else ""
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"


def hour_minute(time_field: str) -> tuple:
    """First two components of an HH:MM[:SS] time."""
    parts = time_field.split(":")
    return tuple(parts[:2])
