"""Time-of-day helpers shared by the timetable and the live view."""

import re
from datetime import datetime, time
from typing import Union

from .exceptions import InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")

TimeLike = Union[str, time, datetime]


def parse_clock_time(value: TimeLike) -> time:
    """
    Read a time of day.

    Args:
        value: "HH:MM" string, datetime.time, or datetime (seconds are dropped).

    Returns:
        datetime.time with hour and minute set.

    Raises:
        InvalidTimeFormat: If the value is not a valid time of day.
    """
    # datetime is a subclass of date, not time, so check it first
    if isinstance(value, datetime):
        return time(value.hour, value.minute)
    if isinstance(value, time):
        return time(value.hour, value.minute)
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected 'HH:MM' string or time, got {type(value).__name__}")

    match = _HHMM.match(value.strip())
    if not match:
        raise InvalidTimeFormat(f"Invalid time '{value}', expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTimeFormat(f"Time '{value}' is out of range")
    return time(hour, minute)


def format_clock_time(value: time) -> str:
    """Format a time of day as HH:MM."""
    return f"{value.hour:02d}:{value.minute:02d}"


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def add_minutes(value: time, minutes: int) -> time:
    """
    Add a forward offset to a time of day, wrapping past midnight.

    Any offset size is carried into hours; hour 24 wraps to 0.
    """
    if minutes < 0:
        raise ValueError(f"Offset must be non-negative, got {minutes}")

    hour = value.hour
    minute = value.minute + minutes
    while minute >= 60:
        minute -= 60
        hour += 1
    return time(hour % 24, minute)
