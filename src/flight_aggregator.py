#!/usr/bin/env python3
"""
Aggregation of canonical flights into status, terminal and hourly summaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from contracts.flight import Flight, FlightStatus, HourBucket, hour_label


HOURS_PER_DAY = 24


@dataclass
class HourCount:
    hour: int = 0
    count: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {"hour": hour_label(self.hour), "count": self.count}


@dataclass
class AggregateResult:
    status_counts: Dict[str, int] = field(default_factory=lambda: {s: 0 for s in FlightStatus.ALL})
    airlines: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)
    hour_buckets: List[HourBucket] = field(
        default_factory=lambda: [HourBucket() for _ in range(HOURS_PER_DAY)]
    )
    peak: HourCount = field(default_factory=HourCount)
    trough: HourCount = field(default_factory=HourCount)
    unparsed_count: int = 0

    def flight_count(self) -> Dict[str, Dict[str, int]]:
        return {hour_label(h): bucket.to_dict() for h, bucket in enumerate(self.hour_buckets)}

    def peak_hours(self) -> Dict[str, Dict[str, object]]:
        return {
            "max_flights": self.peak.to_dict(),
            "lowest_flights": self.trough.to_dict(),
        }


def parse_hour(scheduled_time: Optional[str]) -> Optional[int]:
    """Hour of an "HH:MM" time, or None when the text carries no usable hour."""
    if not scheduled_time:
        return None
    token = scheduled_time.split(":", 1)[0].strip()
    if not (token.isascii() and token.isdigit()):
        return None
    hour = int(token)
    if hour >= HOURS_PER_DAY:
        return None
    return hour


def _unique(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    out: List[str] = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def _peak_and_trough(buckets: List[HourBucket]) -> tuple[HourCount, HourCount]:
    # Strict comparisons keep the earliest hour on ties; empty hours never count as the trough.
    peak = HourCount()
    trough: Optional[HourCount] = None
    for hour, bucket in enumerate(buckets):
        if bucket.total > peak.count:
            peak = HourCount(hour, bucket.total)
        if bucket.total > 0 and (trough is None or bucket.total < trough.count):
            trough = HourCount(hour, bucket.total)
    return peak, trough or HourCount()


def aggregate_flights(flights: Iterable[Flight]) -> AggregateResult:
    """Tally statuses, unique airlines/locations and the 24-hour terminal histogram."""
    flights = list(flights)
    result = AggregateResult()

    for flight in flights:
        if flight.status in result.status_counts:
            result.status_counts[flight.status] += 1
        else:
            result.status_counts[FlightStatus.ON_TIME] += 1

        hour = parse_hour(flight.scheduled_time)
        if hour is None:
            result.unparsed_count += 1
            continue
        result.hour_buckets[hour].add(flight.terminal)

    result.airlines = _unique(f.airline for f in flights)
    result.locations = _unique(f.location for f in flights)
    result.peak, result.trough = _peak_and_trough(result.hour_buckets)
    return result
