"""Time-relative filtering and countdown labels for the live board.

Every function takes the current moment as an argument; nothing here reads the clock.
"""

import math
from datetime import datetime, time, timedelta
from typing import Iterable, Tuple, Union

from .clock import TimeLike, minutes_of_day, parse_clock_time
from .models import DepartureRow, Trip

DISPLAY_LIMIT = 10

DEPARTING_NOW = "departing now"

# relative_countdown: a departure this far in the past with an early hour is tomorrow's
COUNTDOWN_TOLERANCE = timedelta(seconds=60)
NEXT_DAY_HOUR_LIMIT = 2

# is_upcoming: just-departed trips stay listed for this many minutes
GRACE_MINUTES = 2
LATE_NIGHT_START = 23 * 60
EARLY_MORNING_END = 60


def _departure_of(value: Union[Trip, TimeLike]) -> time:
    if isinstance(value, Trip):
        return value.departure_time
    return parse_clock_time(value)


def relative_countdown(departure: Union[Trip, TimeLike], now: datetime) -> str:
    """
    Describe how long until a departure, e.g. "approximately 5 minutes".

    Args:
        departure: Trip, "HH:MM" string or time of day.
        now: Current moment.

    Returns:
        Countdown label, rounded up to whole minutes.

    Raises:
        InvalidTimeFormat: If departure is not a valid time of day.
    """
    if not isinstance(now, datetime):
        raise TypeError(f"now must be a datetime, got {type(now).__name__}")

    departure_time = _departure_of(departure)
    candidate = now.replace(
        hour=departure_time.hour, minute=departure_time.minute, second=0, microsecond=0
    )
    # Shortly after midnight entries shown late at night belong to the next day
    if candidate < now - COUNTDOWN_TOLERANCE and departure_time.hour < NEXT_DAY_HOUR_LIMIT:
        candidate += timedelta(days=1)

    minutes = math.ceil((candidate - now).total_seconds() / 60)
    if minutes <= 0:
        return DEPARTING_NOW
    unit = "minute" if minutes == 1 else "minutes"
    return f"approximately {minutes} {unit}"


def is_upcoming(departure: Union[Trip, TimeLike], now: Union[datetime, time]) -> bool:
    """Return True if the departure should still be listed at now."""
    trip_minutes = minutes_of_day(_departure_of(departure))
    now_minutes = minutes_of_day(parse_clock_time(now))

    # Must run before the departed check, which knows nothing about the day boundary
    if now_minutes > LATE_NIGHT_START and trip_minutes < EARLY_MORNING_END:
        return True
    if trip_minutes < now_minutes and now_minutes - trip_minutes > GRACE_MINUTES:
        return False
    return True


def select_displayed(
    trips: Iterable[Trip], now: Union[datetime, time], limit: int = DISPLAY_LIMIT
) -> Tuple[Trip, ...]:
    """Keep upcoming trips in their given order, at most limit of them."""
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    displayed = []
    for trip in trips:
        if len(displayed) >= limit:
            break
        if is_upcoming(trip, now):
            displayed.append(trip)
    return tuple(displayed)


def build_rows(trips: Iterable[Trip], now: datetime, limit: int = DISPLAY_LIMIT) -> Tuple[DepartureRow, ...]:
    """Select the displayed trips and attach countdowns; the first row is the next departure."""
    return tuple(
        DepartureRow(trip=trip, countdown=relative_countdown(trip, now), is_next=index == 0)
        for index, trip in enumerate(select_displayed(trips, now, limit))
    )
