#!/usr/bin/env python3
"""Flask API server for the flight summary backend."""

import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from flight_params import ValidationError
from flight_service import FlightSummaryService
from flight_source import AcquisitionError, build_source_from_env
from shared_utils import APP_VERSION, env_bool, env_int, env_str, utc_now

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, origins=[os.getenv("ALLOWED_ORIGIN", "*")])

# Each /api/flights hit is one upstream fetch; cap it per client address.
RATE_LIMIT = env_str("RATE_LIMIT", "100 per 15 minutes")
limiter = Limiter(
    get_remote_address,
    app=app,
    storage_uri=env_str("RATE_LIMIT_STORAGE_URI", "memory://"),
    headers_enabled=True,
)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}

service = None


def get_service() -> FlightSummaryService:
    """Lazily build the service so health checks never touch the data source."""
    global service
    if service is None:
        source = build_source_from_env()
        logger.info("Flight summary service ready (source=%s)", type(source).__name__)
        service = FlightSummaryService(source)
    return service


@app.errorhandler(429)
def rate_limited(exc):
    return jsonify({
        "error": "Too many requests",
        "message": f"Rate limit exceeded ({exc.description}). Try again later.",
        "timestamp": utc_now(),
    }), 429


@app.after_request
def add_security_headers(response):
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.route('/api/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "timestamp": utc_now(), "version": APP_VERSION})


@app.route('/api/flights', methods=['GET'])
@limiter.limit(RATE_LIMIT)
def flights():
    """
    Hourly/terminal/status summary for one day of flights.

    Query parameters:
        date: today | yesterday | tomorrow | day_after_tomorrow (default today)
        flightType: domestic | international (default domestic)
        flightDirection: arrival | departure (optional)
    """
    try:
        report = get_service().summarize(
            request.args.get("date"),
            request.args.get("flightType"),
            request.args.get("flightDirection"),
        )
        return jsonify(report)
    except ValidationError as exc:
        return jsonify({
            "error": "Invalid request parameters",
            "message": str(exc),
            "timestamp": utc_now(),
        }), 400
    except AcquisitionError as exc:
        logger.error("Flight data acquisition failed: %s", exc)
        return jsonify({
            "error": "Failed to fetch flight data",
            "message": str(exc),
            "timestamp": utc_now(),
        }), 500
    except Exception as exc:
        logger.exception("Error in flights endpoint")
        return jsonify({
            "error": "Failed to fetch flight data",
            "message": str(exc),
            "timestamp": utc_now(),
        }), 500


if __name__ == '__main__':
    logging.basicConfig(
        level=env_str("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("FLIGHT SUMMARY API SERVER")
    print("=" * 60)
    print("Endpoints:")
    print("  GET  /api/health   - Health check")
    print("  GET  /api/flights  - Flight summary (date, flightType, flightDirection)")
    print("=" * 60)

    app.run(
        host='0.0.0.0',
        port=env_int("PORT", 5000),
        debug=env_bool("FLASK_DEBUG", False),
    )
