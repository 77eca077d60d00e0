"""Data models for the departure board."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Optional, Tuple


class TripType(Enum):
    """Service type of a trip, with its downstream travel offsets in minutes."""

    EXPRESS = "EXPRESS"
    COMMUTER = "COMMUTER"

    @property
    def offset_station_b(self) -> int:
        return 21 if self is TripType.EXPRESS else 26

    @property
    def offset_station_c(self) -> int:
        # Express riders change trains at station B for the last leg
        return 26 if self is TripType.EXPRESS else 33

    @property
    def label(self) -> str:
        return "Express" if self is TripType.EXPRESS else "Commuter"


@dataclass(frozen=True)
class Line:
    """The line segment shown on the board."""
    name: str
    origin: str
    station_b: str
    station_c: str

    @property
    def station_b_code(self) -> str:
        """Leading token of the station name, e.g. "A8"."""
        return self.station_b.split()[0]

    @property
    def station_c_code(self) -> str:
        return self.station_c.split()[0]


@dataclass(frozen=True)
class Trip:
    """Represents one scheduled departure from the origin station."""
    trip_id: str
    trip_type: TripType
    departure_time: time
    arrival_time_station_b: time
    arrival_time_station_c: Optional[time]  # None when the trip never reaches station C
    requires_transfer: bool
    notes: Optional[str] = None

    @property
    def stops_at_station_c(self) -> bool:
        return not self.requires_transfer


@dataclass(frozen=True)
class DepartureRow:
    """A trip as shown on the live board."""
    trip: Trip
    countdown: str
    is_next: bool = False


@dataclass(frozen=True)
class BoardData:
    """Complete snapshot of the board at one moment."""
    line: Line
    rows: Tuple[DepartureRow, ...]
    generated_for: date  # operating day the trips were generated for
    last_updated: datetime

    @property
    def service_ended(self) -> bool:
        return not self.rows

    @property
    def next_departure(self) -> Optional[DepartureRow]:
        return self.rows[0] if self.rows else None
