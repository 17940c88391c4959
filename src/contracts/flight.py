#!/usr/bin/env python3
"""
Contracts for raw and canonical flight records.

Raw records come in two shapes: text scraped from the public flights page
(`ScrapedFlightRecord`) and JSON items from the schedule API
(`ApiFlightRecord`). Both normalize into the same canonical `Flight`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


class FlightStatus:
    ON_TIME = "on_time"
    DELAYED = "delayed"
    CANCELLED = "cancelled"

    ALL = (ON_TIME, CANCELLED, DELAYED)


class Terminal:
    T2 = "T2"
    T3 = "T3"


class Severity:
    """Visual status markers used by the source (red / amber badges)."""

    HIGH = "high"
    MEDIUM = "medium"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [_text(v) for v in value if _text(v)]
    single = _text(value)
    return [single] if single else []


@dataclass
class ScrapedFlightRecord:
    scheduled_time: str = ""
    flight_number: str = ""
    origin: str = ""
    airline: str = ""
    status_text: Optional[str] = None
    status_classes: List[str] = field(default_factory=list)
    has_delayed_time: bool = False


@dataclass
class ApiFlightRecord:
    id: str = ""
    scheduled_time: str = ""
    estimated_time: str = ""
    status: Optional[str] = None
    status_color: str = ""
    airline: str = ""
    airline_code: str = ""
    flight_numbers: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiFlightRecord":
        if not isinstance(data, dict):
            raise TypeError(f"flight item must be an object, got {type(data).__name__}")
        locations = data.get("origins")
        if locations is None:
            locations = data.get("destinations")
        if locations is None:
            locations = data.get("locations")
        status = data.get("status")
        return cls(
            id=_text(data.get("id")),
            scheduled_time=_text(data.get("scheduledTime")),
            estimated_time=_text(data.get("estimatedTime")),
            status=None if status is None else _text(status),
            status_color=_text(data.get("statusColor")),
            airline=_text(data.get("airline")),
            airline_code=_text(data.get("airlineCode")),
            flight_numbers=_text_list(data.get("flightNumbers")),
            locations=_text_list(locations),
        )


RawFlightRecord = Union[ScrapedFlightRecord, ApiFlightRecord]


@dataclass(frozen=True)
class Flight:
    scheduled_time: str = ""
    status: str = FlightStatus.ON_TIME
    airline: str = ""
    flight_number: str = ""
    location: str = ""
    terminal: str = Terminal.T2
    raw_status: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheduledTime": self.scheduled_time,
            "status": self.status,
            "airline": self.airline,
            "flightNumber": self.flight_number,
            "location": self.location,
            "terminal": self.terminal,
            "rawStatus": self.raw_status,
        }


@dataclass
class HourBucket:
    T2: int = 0
    T3: int = 0
    total: int = 0

    def add(self, terminal: str) -> None:
        if terminal == Terminal.T3:
            self.T3 += 1
        else:
            self.T2 += 1
        self.total += 1

    def to_dict(self) -> Dict[str, int]:
        return {"T2": self.T2, "T3": self.T3, "total": self.total}


def hour_label(hour: int) -> str:
    return f"{hour}-{hour + 1}"
