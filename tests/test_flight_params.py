import sys
import unittest
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from flight_params import FlightQuery, ValidationError, format_date, resolve_date, validate_params


class ValidateParamsTests(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(validate_params(), FlightQuery("today", "domestic", None))
        self.assertEqual(validate_params("", " ", None), FlightQuery("today", "domestic", None))

    def test_normalizes_case(self):
        query = validate_params("Tomorrow", "INTERNATIONAL", "Departure")
        self.assertEqual(query, FlightQuery("tomorrow", "international", "departure"))

    def test_invalid_flight_type(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_params("today", "domestic2")
        self.assertIn("Invalid flight type", str(ctx.exception))

    def test_invalid_date(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_params("next_week", "domestic")
        self.assertIn("day_after_tomorrow", str(ctx.exception))

    def test_invalid_direction(self):
        with self.assertRaises(ValidationError):
            validate_params("today", "domestic", "sideways")


class DateTests(unittest.TestCase):
    def test_offsets(self):
        today = date(2026, 12, 31)
        self.assertEqual(resolve_date("today", today), date(2026, 12, 31))
        self.assertEqual(resolve_date("yesterday", today), date(2026, 12, 30))
        self.assertEqual(resolve_date("tomorrow", today), date(2027, 1, 1))
        self.assertEqual(resolve_date("day_after_tomorrow", today), date(2027, 1, 2))

    def test_unknown_label(self):
        with self.assertRaises(ValidationError):
            resolve_date("someday")

    def test_format(self):
        self.assertEqual(format_date(date(2026, 3, 4)), "2026/03/04")
        self.assertEqual(format_date(date(2026, 3, 4), sep="-"), "2026-03-04")


if __name__ == "__main__":
    unittest.main()
