#!/usr/bin/env python3
"""
Flight summary pipeline: validate, fetch, normalize, aggregate, assemble.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional

from flight_aggregator import aggregate_flights
from flight_normalizer import normalize_flights
from flight_params import format_date, validate_params
from report_assembler import assemble_report

logger = logging.getLogger(__name__)


class FlightSummaryService:
    """Builds one report per call; nothing is shared between calls except the source."""

    def __init__(self, source):
        self.source = source

    def summarize(
        self,
        date_label: Optional[str] = None,
        flight_type: Optional[str] = None,
        flight_direction: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        query = validate_params(date_label, flight_type, flight_direction)
        target = query.target_date(today)
        logger.info(
            "Processing request for %s (%s), flight type: %s, direction: %s",
            query.date_label,
            target.isoformat(),
            query.flight_type,
            query.flight_direction or "-",
        )

        raw_records = self.source.fetch_raw_flights(target, query.flight_type, query.flight_direction)
        flights = normalize_flights(raw_records)
        aggregate = aggregate_flights(flights)

        logger.info("Status distribution: %s", aggregate.status_counts)
        logger.info("Total flights found: %d", len(flights))

        return assemble_report(
            format_date(target),
            query.flight_type,
            query.flight_direction,
            len(flights),
            flights,
            aggregate,
        )
