"""Tests for the live view filter and countdown labels."""

import unittest
from datetime import date, datetime, time
import sys
from pathlib import Path

# Add src to path so we can import metroboard
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from metroboard.exceptions import InvalidTimeFormat
from metroboard.live_view import (
    DEPARTING_NOW,
    DISPLAY_LIMIT,
    build_rows,
    is_upcoming,
    relative_countdown,
    select_displayed,
)
from metroboard.models import TripType
from metroboard.timetable import expand_patterns, generate_schedule


def _at(hour, minute, second=0, day=14):
    return datetime(2025, 3, day, hour, minute, second)


class TestRelativeCountdown(unittest.TestCase):
    """Test countdown labels."""

    def test_rounds_partial_minute_up(self):
        """Test that partial minutes round up."""
        self.assertEqual(relative_countdown("05:30", _at(5, 29, 31)), "approximately 1 minute")
        self.assertEqual(relative_countdown("05:30", _at(5, 29, 59)), "approximately 1 minute")
        self.assertEqual(relative_countdown("05:30", _at(5, 28, 59)), "approximately 2 minutes")

    def test_departing_now_at_zero(self):
        """Test the departing-now label at exactly zero seconds."""
        self.assertEqual(relative_countdown("05:30", _at(5, 30, 0)), DEPARTING_NOW)

    def test_departing_now_shortly_after(self):
        """Test the departing-now label once the departure has passed."""
        self.assertEqual(relative_countdown("05:30", _at(5, 30, 40)), DEPARTING_NOW)
        self.assertEqual(relative_countdown("18:00", _at(18, 5)), DEPARTING_NOW)

    def test_whole_minutes(self):
        """Test a countdown of whole minutes."""
        self.assertEqual(relative_countdown("18:00", _at(17, 45)), "approximately 15 minutes")

    def test_after_midnight_entry_late_at_night(self):
        """Test that early entries count toward tomorrow late at night."""
        self.assertEqual(relative_countdown("00:15", _at(23, 50)), "approximately 25 minutes")
        self.assertEqual(relative_countdown("01:05", _at(23, 50)), "approximately 75 minutes")

    def test_no_next_day_for_hour_two_and_later(self):
        """Test that entries from 02:00 on are never moved to tomorrow."""
        self.assertEqual(relative_countdown("02:00", _at(23, 50)), DEPARTING_NOW)

    def test_no_next_day_within_tolerance(self):
        """Test that an entry under a minute past stays on today."""
        # 30 seconds past is still "now", not tomorrow
        self.assertEqual(relative_countdown("00:15", _at(0, 15, 30)), DEPARTING_NOW)

    def test_after_midnight_entry_same_day(self):
        """Test an early entry viewed shortly after midnight."""
        self.assertEqual(relative_countdown("01:30", _at(0, 50)), "approximately 40 minutes")

    def test_accepts_trip_and_time(self):
        """Test that trips and time values are accepted."""
        trip = generate_schedule(date(2025, 3, 14))[0]
        self.assertEqual(relative_countdown(trip, _at(5, 20)), "approximately 10 minutes")
        self.assertEqual(relative_countdown(time(5, 30), _at(5, 20)), "approximately 10 minutes")

    def test_invalid_departure(self):
        """Test error handling for a malformed departure time."""
        for value in ["25:00", "soon", "", 530]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidTimeFormat):
                    relative_countdown(value, _at(12, 0))

    def test_now_must_be_datetime(self):
        """Test that a bare time is rejected for now."""
        with self.assertRaises(TypeError):
            relative_countdown("12:00", time(11, 0))


class TestIsUpcoming(unittest.TestCase):
    """Test the upcoming filter rules."""

    def test_next_day_entry_late_at_night(self):
        """Test that first-hour entries are kept after 23:00."""
        self.assertTrue(is_upcoming("00:15", _at(23, 50)))
        self.assertTrue(is_upcoming("00:59", time(23, 1)))

    def test_next_day_rule_only_after_2300(self):
        """Test that the late-night exception starts after 23:00."""
        self.assertFalse(is_upcoming("00:15", _at(23, 0)))
        self.assertFalse(is_upcoming("00:15", _at(22, 59)))

    def test_next_day_rule_only_first_hour(self):
        """Test that the late-night exception covers only the first hour."""
        self.assertFalse(is_upcoming("01:00", _at(23, 50)))

    def test_departed_beyond_grace(self):
        """Test that departures older than the grace period are dropped."""
        self.assertFalse(is_upcoming("18:00", _at(18, 5)))
        self.assertFalse(is_upcoming("18:00", _at(18, 3)))

    def test_within_grace(self):
        """Test that departures within the grace period are kept."""
        self.assertTrue(is_upcoming("18:00", _at(18, 1)))
        self.assertTrue(is_upcoming("18:00", _at(18, 2)))
        self.assertTrue(is_upcoming("18:00", _at(18, 2, 59)))

    def test_future(self):
        """Test that future departures are kept."""
        self.assertTrue(is_upcoming("18:00", _at(17, 59)))
        self.assertTrue(is_upcoming("18:00", _at(18, 0)))

    def test_invalid_departure(self):
        """Test error handling for a malformed departure in the filter."""
        with self.assertRaises(InvalidTimeFormat):
            is_upcoming("18-00", _at(18, 0))

    def test_invalid_now(self):
        """Test error handling for a malformed current time."""
        with self.assertRaises(InvalidTimeFormat):
            is_upcoming("18:00", "later")


class TestSelectDisplayed(unittest.TestCase):
    """Test choosing which trips are shown."""

    def setUp(self):
        """Set up test fixtures."""
        self.trips = generate_schedule(date(2025, 3, 14))

    def test_limit_and_order(self):
        """Test the ten-trip cap and ascending order."""
        displayed = select_displayed(self.trips, _at(6, 0))
        self.assertEqual(len(displayed), DISPLAY_LIMIT)
        self.assertEqual(displayed[0].trip_id, "0600")
        departures = [t.departure_time for t in displayed]
        self.assertEqual(departures, sorted(departures))
        self.assertEqual(list(displayed), list(self.trips[1:11]))

    def test_before_service(self):
        """Test the board before the first departure."""
        displayed = select_displayed(self.trips, _at(4, 0))
        self.assertEqual(displayed[0].trip_id, "0530")
        self.assertEqual(len(displayed), 10)

    def test_never_more_than_limit(self):
        """Test the cap at every hour of the day."""
        for hour in range(24):
            with self.subTest(hour=hour):
                self.assertLessEqual(len(select_displayed(self.trips, _at(hour, 30))), 10)

    def test_custom_limit(self):
        """Test smaller limits, including zero."""
        self.assertEqual(len(select_displayed(self.trips, _at(12, 0), limit=3)), 3)
        self.assertEqual(select_displayed(self.trips, _at(12, 0), limit=0), ())

    def test_negative_limit(self):
        """Test that a negative limit is rejected."""
        with self.assertRaises(ValueError):
            select_displayed(self.trips, _at(12, 0), limit=-1)

    def test_empty_input(self):
        """Test that no trips gives no rows."""
        self.assertEqual(select_displayed([], _at(12, 0)), ())

    def test_end_of_day(self):
        """Test the last departure leaving the board."""
        # 23:38 is still within grace at 23:39, gone at 23:45
        displayed = select_displayed(self.trips, _at(23, 39))
        self.assertEqual([t.trip_id for t in displayed], ["2338"])
        self.assertEqual(select_displayed(self.trips, _at(23, 45)), ())

    def test_late_night_includes_first_hour_of_next_day(self):
        """Test the next day's first hour shown late at night."""
        trips = expand_patterns({
            0: ((15, TripType.COMMUTER),),
            1: ((10, TripType.COMMUTER),),
            23: ((0, TripType.EXPRESS), (48, TripType.COMMUTER), (55, TripType.COMMUTER)),
        })
        displayed = select_displayed(trips, _at(23, 50))
        self.assertEqual([t.trip_id for t in displayed], ["0015", "2348", "2355"])


class TestBuildRows(unittest.TestCase):
    """Test rows with countdown labels."""

    def test_first_row_is_next(self):
        """Test countdown labels and the next-departure flag."""
        trips = generate_schedule(date(2025, 3, 14))
        rows = build_rows(trips, _at(18, 17, 30), limit=3)
        self.assertEqual([r.trip.trip_id for r in rows], ["1815", "1819", "1823"])
        self.assertEqual([r.is_next for r in rows], [True, False, False])
        self.assertEqual(rows[0].countdown, DEPARTING_NOW)
        self.assertEqual(rows[1].countdown, "approximately 2 minutes")
        self.assertEqual(rows[2].countdown, "approximately 6 minutes")

    def test_no_rows(self):
        """Test that no trips gives no rows."""
        self.assertEqual(build_rows([], _at(12, 0)), ())


if __name__ == "__main__":
    unittest.main()
