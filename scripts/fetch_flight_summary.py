#!/usr/bin/env python3
"""
Fetch one day of flights and print (or save) the summary report.

Runs the same pipeline as GET /api/flights without starting the server.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from flight_params import VALID_DATES, VALID_DIRECTIONS, VALID_FLIGHT_TYPES, ValidationError  # noqa: E402
from flight_service import FlightSummaryService  # noqa: E402
from flight_source import (  # noqa: E402
    DEFAULT_API_URL,
    DEFAULT_PAGE_URL,
    AcquisitionError,
    ApiFlightSource,
    PageFlightSource,
)
from shared_utils import env_float  # noqa: E402

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    ap.add_argument("--date", default="today", choices=VALID_DATES)
    ap.add_argument("--flight-type", default="domestic", choices=VALID_FLIGHT_TYPES)
    ap.add_argument("--flight-direction", default=None, choices=VALID_DIRECTIONS)
    ap.add_argument("--source", default="api", choices=("api", "page"))
    ap.add_argument("--url", default=None, help="Override the source URL")
    ap.add_argument("--timeout", type=float, default=env_float("FLIGHT_FETCH_TIMEOUT_SECONDS", 60.0))
    ap.add_argument("--out", type=Path, default=None, help="Write the report JSON here")
    ap.add_argument("--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.source == "page":
        source = PageFlightSource(args.url or DEFAULT_PAGE_URL, args.timeout)
    else:
        source = ApiFlightSource(args.url or DEFAULT_API_URL, args.timeout)

    try:
        report = FlightSummaryService(source).summarize(args.date, args.flight_type, args.flight_direction)
    except ValidationError as exc:
        logger.error("Invalid parameters: %s", exc)
        return 2
    except AcquisitionError as exc:
        logger.error("Failed to fetch flight data: %s", exc)
        return 1

    rendered = json.dumps(report, indent=2)
    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(rendered, encoding="utf-8")
        logger.info("Wrote report to %s", args.out)
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
