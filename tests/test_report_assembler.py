import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from contracts.flight import Flight
from flight_aggregator import aggregate_flights
from report_assembler import SAMPLE_SIZE, assemble_report
from shared_utils import APP_VERSION


class ReportAssemblerTests(unittest.TestCase):
    def setUp(self):
        self.flights = [Flight(scheduled_time=f"{h:02d}:00", airline=f"airline {h}") for h in (5, 3, 9, 1, 7, 2, 4)]
        self.aggregate = aggregate_flights(self.flights)
        self.now = datetime(2026, 10, 19, 1, 2, 3, tzinfo=timezone.utc)

    def test_report_shape(self):
        report = assemble_report(
            "2026/10/19", "domestic", None, len(self.flights), self.flights, self.aggregate, now=self.now
        )
        self.assertEqual(report["date"], "2026/10/19")
        self.assertEqual(report["flight_type"], "domestic")
        self.assertNotIn("flight_direction", report)
        self.assertEqual(report["total_flights"], 7)
        self.assertEqual(len(report["flight_count"]), 24)
        self.assertEqual(set(report["flight_statuses"]), {"on_time", "cancelled", "delayed"})
        self.assertIn("max_flights", report["peak_hours"])
        self.assertIn("lowest_flights", report["peak_hours"])
        self.assertEqual(report["origins"], [])
        self.assertNotIn("locations", report)
        self.assertEqual(report["metadata"], {"processed_at": "2026-10-19T01:02:03+00:00", "version": APP_VERSION})

    def test_sample_keeps_source_order(self):
        report = assemble_report(
            "2026/10/19", "domestic", "arrival", len(self.flights), self.flights, self.aggregate, now=self.now
        )
        self.assertEqual(report["flight_direction"], "arrival")
        self.assertEqual(len(report["sample_flights"]), SAMPLE_SIZE)
        self.assertEqual(
            [f["scheduledTime"] for f in report["sample_flights"]],
            ["05:00", "03:00", "09:00", "01:00", "07:00"],
        )
        self.assertEqual(
            set(report["sample_flights"][0]),
            {"scheduledTime", "status", "airline", "flightNumber", "location", "terminal", "rawStatus"},
        )

    def test_processed_at_defaults_to_now(self):
        report = assemble_report("2026/10/19", "international", None, 0, [], aggregate_flights([]))
        self.assertTrue(report["metadata"]["processed_at"])
        self.assertEqual(report["sample_flights"], [])


if __name__ == "__main__":
    unittest.main()
