#!/usr/bin/env python3
"""
Normalization of raw flight records into canonical `Flight` values.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Union

from contracts.flight import (
    ApiFlightRecord,
    Flight,
    RawFlightRecord,
    ScrapedFlightRecord,
    Terminal,
)
from status_classifier import (
    classify_status,
    estimated_differs,
    severity_from_classes,
    severity_from_color,
)

logger = logging.getLogger(__name__)

UNKNOWN_STATUS = "Unknown"
T3_AIRLINE_MARKER = "qantas"


def terminal_for_airline(airline: str) -> str:
    return Terminal.T3 if T3_AIRLINE_MARKER in (airline or "").lower() else Terminal.T2


def _join(values: Iterable[str]) -> str:
    return ", ".join(v.strip() for v in values if v and v.strip())


def _from_scraped(record: ScrapedFlightRecord) -> Flight:
    airline = (record.airline or "").strip().lower()
    status = classify_status(
        record.status_text,
        severity_from_classes(record.status_classes),
        record.has_delayed_time,
    )
    raw_status = UNKNOWN_STATUS if record.status_text is None else record.status_text.strip()
    return Flight(
        scheduled_time=(record.scheduled_time or "").strip(),
        status=status,
        airline=airline,
        flight_number=(record.flight_number or "").strip(),
        location=(record.origin or "").strip(),
        terminal=terminal_for_airline(airline),
        raw_status=raw_status,
    )


def _from_api(record: ApiFlightRecord) -> Flight:
    airline = (record.airline or "").strip().lower()
    status = classify_status(
        record.status,
        severity_from_color(record.status_color),
        estimated_differs(record.scheduled_time, record.estimated_time),
    )
    return Flight(
        scheduled_time=(record.scheduled_time or "").strip(),
        status=status,
        airline=airline,
        flight_number=_join(record.flight_numbers or []),
        location=_join(record.locations or []),
        terminal=terminal_for_airline(airline),
        raw_status=UNKNOWN_STATUS if record.status is None else record.status.strip(),
    )


def normalize_flight(record: Union[RawFlightRecord, Dict[str, Any]]) -> Flight:
    """Normalize one raw record. Plain dicts are read as schedule API items."""
    if isinstance(record, dict):
        record = ApiFlightRecord.from_dict(record)
    if isinstance(record, ScrapedFlightRecord):
        return _from_scraped(record)
    if isinstance(record, ApiFlightRecord):
        return _from_api(record)
    raise TypeError(f"unsupported flight record type: {type(record).__name__}")


def normalize_flights(records: Iterable[Union[RawFlightRecord, Dict[str, Any]]]) -> List[Flight]:
    """Normalize a batch, skipping records that fail. Source order is kept."""
    flights: List[Flight] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            flights.append(normalize_flight(record))
        except Exception as exc:
            skipped += 1
            logger.warning("Skipping flight record %d: %s", index, exc)
    if skipped:
        logger.info("Normalized %d flight records, skipped %d", len(flights), skipped)
    return flights
