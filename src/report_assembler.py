#!/usr/bin/env python3
"""
Assembly of the flight summary response payload.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from contracts.flight import Flight
from flight_aggregator import AggregateResult
from shared_utils import AIRPORT_NAME, APP_VERSION


SAMPLE_SIZE = 5


def assemble_report(
    date: str,
    flight_type: str,
    flight_direction: Optional[str],
    total_flights: int,
    flights: Sequence[Flight],
    aggregate: AggregateResult,
    *,
    airport: str = AIRPORT_NAME,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Compose the report. `sample_flights` keeps the normalizer's order."""
    processed_at = (now or datetime.now(timezone.utc)).isoformat()
    sample: List[Dict[str, Any]] = [f.to_dict() for f in list(flights)[:SAMPLE_SIZE]]

    report: Dict[str, Any] = {
        "airport": airport,
        "date": date,
        "flight_type": flight_type,
    }
    if flight_direction:
        report["flight_direction"] = flight_direction
    report.update(
        {
            "total_flights": total_flights,
            "flight_count": aggregate.flight_count(),
            "flight_statuses": dict(aggregate.status_counts),
            "peak_hours": aggregate.peak_hours(),
            "airlines": list(aggregate.airlines),
            "origins": list(aggregate.locations),
            "sample_flights": sample,
            "metadata": {
                "processed_at": processed_at,
                "version": APP_VERSION,
            },
        }
    )
    return report
