"""Static timetable for the A1 -> A8 / A9 segment and its expansion into trips."""

import logging
from collections import Counter
from datetime import date, datetime, time
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .clock import add_minutes, format_clock_time
from .models import Line, Trip, TripType

logger = logging.getLogger(__name__)

LINE = Line(
    name="Airport MRT A1",
    origin="A1 Taipei Main Station",
    station_b="A8 Chang Gung Memorial Hospital",
    station_c="A9 Linkou",
)

E = TripType.EXPRESS
C = TripType.COMMUTER

Pattern = Tuple[Tuple[int, TripType], ...]

FIRST_HOUR_PATTERN: Pattern = ((30, E),)

STANDARD_PATTERN: Pattern = (
    (0, E), (8, C), (15, E), (23, C),
    (30, E), (38, C), (45, E), (53, C),
)

# Standard pattern plus two extra commuter runs
PEAK_PATTERN: Pattern = tuple(sorted(STANDARD_PATTERN + ((19, C), (34, C)), key=lambda entry: entry[0]))

FINAL_HOUR_PATTERN: Pattern = ((0, E), (8, C), (23, C), (38, C))

FIRST_HOUR = 5
PEAK_HOUR = 18
FINAL_HOUR = 23
STANDARD_HOURS = tuple(h for h in range(FIRST_HOUR + 1, FINAL_HOUR) if h != PEAK_HOUR)


def _build_hourly_patterns() -> Mapping[int, Pattern]:
    patterns = {FIRST_HOUR: FIRST_HOUR_PATTERN}
    for hour in STANDARD_HOURS:
        patterns[hour] = STANDARD_PATTERN
    patterns[PEAK_HOUR] = PEAK_PATTERN
    patterns[FINAL_HOUR] = FINAL_HOUR_PATTERN
    return MappingProxyType(dict(sorted(patterns.items())))


HOURLY_PATTERNS = _build_hourly_patterns()


def _trip_ids(entries: Sequence[Tuple[int, int, TripType]]) -> List[str]:
    """Build ids from HHMM, adding a type suffix only where minutes collide."""
    base_ids = [f"{hour:02d}{minute:02d}" for hour, minute, _ in entries]
    counts = Counter(base_ids)
    return [
        f"{base}-{trip_type.value[0]}" if counts[base] > 1 else base
        for base, (_, _, trip_type) in zip(base_ids, entries)
    ]


def _build_trip(trip_id: str, hour: int, minute: int, trip_type: TripType, line: Line) -> Trip:
    departure = time(hour, minute)
    is_express = trip_type is TripType.EXPRESS
    return Trip(
        trip_id=trip_id,
        trip_type=trip_type,
        departure_time=departure,
        arrival_time_station_b=add_minutes(departure, trip_type.offset_station_b),
        arrival_time_station_c=add_minutes(departure, trip_type.offset_station_c),
        requires_transfer=is_express,
        notes=f"Transfer at {line.station_b}" if is_express else None,
    )


def expand_patterns(
    patterns: Mapping[int, Iterable[Tuple[int, TripType]]], line: Line = LINE
) -> Tuple[Trip, ...]:
    """
    Expand an hour -> [(minute, type), ...] table into trips.

    Args:
        patterns: Departure minutes and types keyed by hour (0-23).
        line: Line whose transfer station is named in express trip notes.

    Returns:
        Trips ordered by departure time.

    Raises:
        ValueError: On an out-of-range or repeated entry.
    """
    entries = sorted(
        ((hour, minute, trip_type) for hour, pattern in patterns.items() for minute, trip_type in pattern),
        key=lambda entry: (entry[0], entry[1]),
    )
    for hour, minute, _ in entries:
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError(f"Invalid pattern entry {hour}:{minute}")
    repeated = [entry for entry, count in Counter(entries).items() if count > 1]
    if repeated:
        hour, minute, trip_type = repeated[0]
        raise ValueError(f"Repeated pattern entry {hour:02d}:{minute:02d} {trip_type.value}")

    ids = _trip_ids(entries)
    return tuple(
        _build_trip(trip_id, hour, minute, trip_type, line)
        for trip_id, (hour, minute, trip_type) in zip(ids, entries)
    )


def generate_schedule(
    reference_date: Optional[Union[date, datetime]] = None, line: Line = LINE
) -> Tuple[Trip, ...]:
    """
    Generate the full day's trips for the operating day containing reference_date.

    The same pattern runs every day, so reference_date does not change the result.
    """
    reference_date = reference_date or date.today()
    trips = expand_patterns(HOURLY_PATTERNS, line)
    if trips:
        logger.debug(
            f"Generated {len(trips)} trips for {reference_date:%Y-%m-%d} "
            f"({format_clock_time(trips[0].departure_time)}-{format_clock_time(trips[-1].departure_time)})"
        )
    return trips
