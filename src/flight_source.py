#!/usr/bin/env python3
"""
Raw flight data sources.

Two acquisition paths supply raw records for one (date, flight type,
direction) request:

- `ApiFlightSource` calls the schedule JSON API and returns its `flightData`
  items as plain dicts.
- `PageFlightSource` loads the public flights page and scrapes each flight
  card into a `ScrapedFlightRecord`.

`timeout_seconds` bounds the whole fetch (connect, headers and body), not just
each socket read. Timeouts, transport failures and malformed payloads raise
`AcquisitionError`; nothing is retried here. Each fetch opens its own HTTP
session, so concurrent requests share no connection or cookie state.
"""

from __future__ import annotations

import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

import requests
from bs4 import BeautifulSoup

from contracts.flight import ScrapedFlightRecord
from flight_params import ValidationError
from shared_utils import env_float, env_str

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://www.sydneyairport.com.au/_a/flights/"
DEFAULT_PAGE_URL = "https://www.sydneyairport.com.au/flights/"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_DIRECTION = "arrival"
CHUNK_SIZE = 1024

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

CARD_SELECTOR = ".flight-card"
SCHEDULED_TIME_SELECTOR = ".middle-pane .times .latest-time div"
FLIGHT_NUMBER_SELECTOR = ".flight-number"
LOCATION_SELECTOR = ".origin-destination"
STATUS_SELECTOR = ".status-container .status"
DELAYED_TIME_SELECTOR = ".delayed-time-small"
AIRLINE_SELECTOR = ".airline-logo span.with-image"


class AcquisitionError(RuntimeError):
    """Raw flight data could not be fetched or was malformed."""


def coerce_date(value: Union[date, str]) -> date:
    """Accept a date, or a "YYYY-MM-DD" / "YYYY/MM/DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in ("%Y-%m-%d", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValidationError(f"Invalid flight date {value!r}. Use YYYY-MM-DD or YYYY/MM/DD.")


@dataclass
class FetchedBody:
    content: bytes
    encoding: Optional[str] = None

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding or "utf-8", errors="replace")


class _HttpFlightSource:
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        # Only injected by tests; real fetches open a session per call.
        self.session = session

    def _timeout_error(self) -> AcquisitionError:
        return AcquisitionError(f"Timed out after {self.timeout_seconds:g}s waiting for flight data")

    def _get(self, params: Dict[str, str], headers: Optional[Dict[str, str]] = None) -> FetchedBody:
        """GET base_url, giving up once `timeout_seconds` of wall-clock time has passed."""
        deadline = time.monotonic() + self.timeout_seconds
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(self._download, params, headers, deadline)
            try:
                return future.result(timeout=self.timeout_seconds)
            except FuturesTimeoutError as exc:
                raise self._timeout_error() from exc
        finally:
            # The worker notices the deadline on its next chunk and closes the response.
            executor.shutdown(wait=False, cancel_futures=True)

    def _download(
        self,
        params: Dict[str, str],
        headers: Optional[Dict[str, str]],
        deadline: float,
    ) -> FetchedBody:
        if self.session is not None:
            return self._download_with(self.session, params, headers, deadline)
        with requests.Session() as session:
            return self._download_with(session, params, headers, deadline)

    def _download_with(
        self,
        session: requests.Session,
        params: Dict[str, str],
        headers: Optional[Dict[str, str]],
        deadline: float,
    ) -> FetchedBody:
        try:
            response = session.get(
                self.base_url,
                params=params,
                headers=headers,
                timeout=self.timeout_seconds,
                stream=True,
            )
            try:
                response.raise_for_status()
                chunks: List[bytes] = []
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if time.monotonic() > deadline:
                        raise self._timeout_error()
                    chunks.append(chunk)
                return FetchedBody(b"".join(chunks), response.encoding)
            finally:
                response.close()
        except requests.exceptions.Timeout as exc:
            raise self._timeout_error() from exc
        except requests.exceptions.RequestException as exc:
            raise AcquisitionError(f"Flight data source unavailable: {exc}") from exc


class ApiFlightSource(_HttpFlightSource):
    def __init__(self, base_url: str = DEFAULT_API_URL, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS, session=None):
        super().__init__(base_url, timeout_seconds, session)

    def fetch_raw_flights(
        self,
        flight_date: Union[date, str],
        flight_type: str,
        flight_direction: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        target = coerce_date(flight_date)
        direction = flight_direction or DEFAULT_DIRECTION
        logger.info("Fetching %s %s flights for %s from API", flight_type, direction, target.isoformat())

        body = self._get(
            {
                "date": target.isoformat(),
                "flightType": flight_type,
                "direction": direction,
            },
            headers={"Accept": "application/json"},
        )
        try:
            payload = json.loads(body.content)
        except ValueError as exc:
            raise AcquisitionError("Flight data source returned invalid JSON") from exc

        flight_data = payload.get("flightData") if isinstance(payload, dict) else None
        if not isinstance(flight_data, list):
            raise AcquisitionError("Flight data payload is missing the 'flightData' list")

        reported = payload.get("totalFlightCount")
        if isinstance(reported, int) and reported != len(flight_data):
            logger.warning(
                "totalFlightCount=%s but flightData has %d items", reported, len(flight_data)
            )
        return flight_data


def parse_flight_cards(html: str) -> List[ScrapedFlightRecord]:
    """Scrape every flight card on a flights page."""
    soup = BeautifulSoup(html, "lxml")
    records: List[ScrapedFlightRecord] = []
    for card in soup.select(CARD_SELECTOR):
        status_el = card.select_one(STATUS_SELECTOR)
        records.append(
            ScrapedFlightRecord(
                scheduled_time=_card_text(card, SCHEDULED_TIME_SELECTOR),
                flight_number=_card_text(card, FLIGHT_NUMBER_SELECTOR),
                origin=_card_text(card, LOCATION_SELECTOR),
                airline=_card_text(card, AIRLINE_SELECTOR),
                status_text=_element_text(status_el) if status_el is not None else None,
                status_classes=list(status_el.get("class") or []) if status_el is not None else [],
                has_delayed_time=card.select_one(DELAYED_TIME_SELECTOR) is not None,
            )
        )
    return records


def _element_text(element) -> str:
    # Nested spans keep a single space between them.
    return element.get_text(" ", strip=True)


def _card_text(card, selector: str) -> str:
    element = card.select_one(selector)
    return _element_text(element) if element is not None else ""


class PageFlightSource(_HttpFlightSource):
    def __init__(self, base_url: str = DEFAULT_PAGE_URL, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS, session=None):
        super().__init__(base_url, timeout_seconds, session)

    def fetch_raw_flights(
        self,
        flight_date: Union[date, str],
        flight_type: str,
        flight_direction: Optional[str] = None,
    ) -> List[ScrapedFlightRecord]:
        target = coerce_date(flight_date)
        direction = flight_direction or DEFAULT_DIRECTION
        logger.info("Fetching %s %s flights for %s from page", flight_type, direction, target.isoformat())

        body = self._get(
            {
                "query": "",
                "flightType": direction,
                "terminalType": flight_type,
                "date": target.strftime("%Y/%m/%d"),
                "sortColumn": "scheduled_time",
                "ascending": "true",
                "showAll": "true",
            },
            headers={"User-Agent": USER_AGENT},
        )
        records = parse_flight_cards(body.text)
        if not records:
            raise AcquisitionError("No flight cards found on the flights page")
        return records


def build_source_from_env():
    """Build the configured raw data source (FLIGHT_SOURCE=api|page)."""
    kind = env_str("FLIGHT_SOURCE", "api").lower()
    timeout_seconds = env_float("FLIGHT_FETCH_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    if kind == "page":
        return PageFlightSource(env_str("FLIGHT_PAGE_URL", DEFAULT_PAGE_URL), timeout_seconds)
    if kind != "api":
        logger.warning("Unknown FLIGHT_SOURCE=%s; using api", kind)
    return ApiFlightSource(env_str("FLIGHT_API_URL", DEFAULT_API_URL), timeout_seconds)
