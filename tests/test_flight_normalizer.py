import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from contracts.flight import ApiFlightRecord, FlightStatus, ScrapedFlightRecord, Terminal
from flight_normalizer import normalize_flight, normalize_flights, terminal_for_airline


class TerminalRuleTests(unittest.TestCase):
    def test_qantas_is_t3(self):
        self.assertEqual(terminal_for_airline("Qantas Airways"), Terminal.T3)
        self.assertEqual(terminal_for_airline("QANTAS"), Terminal.T3)

    def test_others_are_t2(self):
        self.assertEqual(terminal_for_airline("Jetstar"), Terminal.T2)
        self.assertEqual(terminal_for_airline(""), Terminal.T2)


class NormalizeScrapedTests(unittest.TestCase):
    def test_empty_record(self):
        flight = normalize_flight(ScrapedFlightRecord())
        self.assertEqual(flight.status, FlightStatus.ON_TIME)
        self.assertEqual(flight.terminal, Terminal.T2)
        self.assertEqual(flight.airline, "")
        self.assertEqual(flight.flight_number, "")
        self.assertEqual(flight.location, "")
        self.assertEqual(flight.scheduled_time, "")
        self.assertEqual(flight.raw_status, "Unknown")

    def test_full_record(self):
        flight = normalize_flight(
            ScrapedFlightRecord(
                scheduled_time=" 09:15 ",
                flight_number="QF 400",
                origin="Melbourne",
                airline="Qantas Airways",
                status_text="Delayed",
                status_classes=["status", "amber"],
            )
        )
        self.assertEqual(flight.scheduled_time, "09:15")
        self.assertEqual(flight.airline, "qantas airways")
        self.assertEqual(flight.terminal, Terminal.T3)
        self.assertEqual(flight.status, FlightStatus.DELAYED)
        self.assertEqual(flight.raw_status, "Delayed")

    def test_red_badge_is_cancelled(self):
        flight = normalize_flight(ScrapedFlightRecord(status_text="See airline", status_classes=["red"]))
        self.assertEqual(flight.status, FlightStatus.CANCELLED)

    def test_delayed_time_marker(self):
        flight = normalize_flight(ScrapedFlightRecord(status_text="Landed", has_delayed_time=True))
        self.assertEqual(flight.status, FlightStatus.DELAYED)


class NormalizeApiTests(unittest.TestCase):
    def test_empty_dict(self):
        flight = normalize_flight({})
        self.assertEqual(flight.status, FlightStatus.ON_TIME)
        self.assertEqual(flight.terminal, Terminal.T2)
        self.assertEqual(
            (flight.airline, flight.flight_number, flight.location, flight.scheduled_time),
            ("", "", "", ""),
        )

    def test_arrays_are_joined(self):
        flight = normalize_flight(
            {
                "id": "abc",
                "scheduledTime": "14:05",
                "estimatedTime": "14:05",
                "status": "Landed",
                "statusColor": "green",
                "airline": "Jetstar",
                "airlineCode": "JQ",
                "flightNumbers": ["JQ501", "EK5501", ""],
                "origins": ["Melbourne", "Dubai"],
            }
        )
        self.assertEqual(flight.flight_number, "JQ501, EK5501")
        self.assertEqual(flight.location, "Melbourne, Dubai")
        self.assertEqual(flight.airline, "jetstar")
        self.assertEqual(flight.terminal, Terminal.T2)
        self.assertEqual(flight.status, FlightStatus.ON_TIME)

    def test_destinations_used_for_departures(self):
        flight = normalize_flight({"destinations": ["Perth"]})
        self.assertEqual(flight.location, "Perth")

    def test_estimate_differs_is_delayed(self):
        flight = normalize_flight({"scheduledTime": "09:15", "estimatedTime": "09:50", "status": "Scheduled"})
        self.assertEqual(flight.status, FlightStatus.DELAYED)

    def test_red_color_is_cancelled(self):
        flight = normalize_flight(ApiFlightRecord(status="Diverted", status_color="red"))
        self.assertEqual(flight.status, FlightStatus.CANCELLED)

    def test_null_values_tolerated(self):
        flight = normalize_flight({"airline": None, "flightNumbers": None, "origins": "Hobart", "status": None})
        self.assertEqual(flight.airline, "")
        self.assertEqual(flight.flight_number, "")
        self.assertEqual(flight.location, "Hobart")
        self.assertEqual(flight.raw_status, "Unknown")


class NormalizeBatchTests(unittest.TestCase):
    def test_bad_records_are_skipped(self):
        records = [
            {"scheduledTime": "06:00", "airline": "Qantas"},
            "not a record",
            None,
            ScrapedFlightRecord(scheduled_time="07:00", airline="Virgin Australia"),
        ]
        with self.assertLogs("flight_normalizer", level="WARNING"):
            flights = normalize_flights(records)
        self.assertEqual([f.scheduled_time for f in flights], ["06:00", "07:00"])

    def test_order_is_preserved(self):
        records = [{"scheduledTime": t} for t in ("23:00", "01:00", "12:00")]
        self.assertEqual([f.scheduled_time for f in normalize_flights(records)], ["23:00", "01:00", "12:00"])


if __name__ == "__main__":
    unittest.main()
