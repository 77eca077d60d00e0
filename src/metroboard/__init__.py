"""metroboard - Live departure board for the Airport MRT A1 -> A8 / A9 segment."""

__version__ = "0.1.0"

from .models import Line, Trip, TripType, DepartureRow, BoardData
from .exceptions import InvalidTimeFormat
from .timetable import generate_schedule
from .live_view import relative_countdown, is_upcoming, select_displayed
from .board import DepartureBoard

__all__ = [
    "DepartureBoard",
    "generate_schedule",
    "relative_countdown",
    "is_upcoming",
    "select_displayed",
    "InvalidTimeFormat",
    "Line",
    "Trip",
    "TripType",
    "DepartureRow",
    "BoardData",
]
