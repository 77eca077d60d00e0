"""Main DepartureBoard class."""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple, Union

from .clock import format_clock_time
from .config import Settings, settings as default_settings
from .live_view import build_rows
from .models import BoardData, Line, Trip
from .timetable import LINE, generate_schedule

logger = logging.getLogger(__name__)


class DepartureBoard:
    """
    Live departure board for the A1 -> A8 / A9 segment.

    This class provides methods to:
    - Load (and force-reload) the day's generated timetable
    - Get a snapshot of the upcoming departures with countdowns
    - Render a snapshot as plain text lines
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.now,
        load_schedule: bool = True,
        line: Line = LINE,
    ):
        """
        Initialize the board.

        Args:
            settings: Board settings. Defaults to the environment-derived settings.
            clock: Returns the current moment; only used when a caller omits `now`.
            load_schedule: If True, generate the timetable on init. If False, must call load().
            line: Line segment shown in the header.
        """
        self.settings = settings or default_settings
        self.clock = clock
        self.line = line
        self._trips: Tuple[Trip, ...] = ()
        self._generated_for: Optional[date] = None

        if load_schedule:
            self.load()

    @property
    def trips(self) -> Tuple[Trip, ...]:
        return self._trips

    @property
    def generated_for(self) -> Optional[date]:
        """Operating day of the loaded trips, or None before the first load."""
        return self._generated_for

    def load(self, reference_date: Optional[Union[date, datetime]] = None) -> Tuple[Trip, ...]:
        """
        Generate the timetable and replace the current trip list.

        Args:
            reference_date: Day to generate for. Defaults to the clock's current date.

        Returns:
            The newly loaded trips.
        """
        reference = reference_date or self.clock()
        operating_day = reference.date() if isinstance(reference, datetime) else reference
        try:
            trips = generate_schedule(operating_day, self.line)
        except Exception as e:
            logger.error(f"Failed to generate schedule for {operating_day}: {e}")
            raise

        self._trips = trips
        self._generated_for = operating_day
        logger.info(f"Loaded {len(trips)} trips for {operating_day:%Y-%m-%d}")
        return trips

    def get_board_data(self, now: Optional[datetime] = None) -> BoardData:
        """
        Get the board as it should look at `now`.

        Args:
            now: Current moment. Defaults to the board's clock.

        Returns:
            BoardData with at most settings.display_limit rows.
        """
        if now is None:
            now = self.clock()
        if self._generated_for is None:
            raise RuntimeError("Schedule not loaded; call load() first")

        rows = build_rows(self._trips, now, self.settings.display_limit)
        logger.debug(f"{len(rows)} of {len(self._trips)} trips displayed at {now:%H:%M:%S}")

        return BoardData(
            line=self.line,
            rows=rows,
            generated_for=self._generated_for,
            last_updated=now,
        )

    @staticmethod
    def render_lines(board_data: BoardData) -> List[str]:
        """
        Format a snapshot for a text display.

        Args:
            board_data: Snapshot from get_board_data().

        Returns:
            Header lines followed by one line per departure.
        """
        line = board_data.line
        lines = [
            f"{line.name}  {board_data.last_updated:%H:%M}",
            f"To {line.station_b} / {line.station_c}",
        ]

        if board_data.service_ended:
            lines.append("Operations have ended for today (last train has departed)")
            return lines

        for row in board_data.rows:
            trip = row.trip
            arrival_c = format_clock_time(trip.arrival_time_station_c) if trip.arrival_time_station_c else "-"
            transfer = f" (transfer at {line.station_b_code})" if trip.requires_transfer else ""
            marker = ">" if row.is_next else " "
            lines.append(
                f"{marker} {trip.trip_type.label:<8s} "
                f"{format_clock_time(trip.departure_time)}  "
                f"{line.station_b_code} {format_clock_time(trip.arrival_time_station_b)}  "
                f"{line.station_c_code} {arrival_c}{transfer}  "
                f"{row.countdown}"
            )
        return lines
