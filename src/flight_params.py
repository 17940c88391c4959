#!/usr/bin/env python3
"""
Validation of flight summary request parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional


DATE_OFFSETS = {
    "today": 0,
    "yesterday": -1,
    "tomorrow": 1,
    "day_after_tomorrow": 2,
}
VALID_DATES = tuple(DATE_OFFSETS)
VALID_FLIGHT_TYPES = ("domestic", "international")
VALID_DIRECTIONS = ("arrival", "departure")

DEFAULT_DATE = "today"
DEFAULT_FLIGHT_TYPE = "domestic"


class ValidationError(ValueError):
    """Request parameters outside the accepted values."""


def _quoted(values) -> str:
    quoted = [f'"{v}"' for v in values]
    if len(quoted) <= 2:
        return " or ".join(quoted)
    return ", ".join(quoted[:-1]) + f", or {quoted[-1]}"


def _clean(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def resolve_date(label: str, today: Optional[date] = None) -> date:
    """Calendar date for a relative date label."""
    try:
        offset = DATE_OFFSETS[label]
    except KeyError:
        raise ValidationError(f"Invalid date. Use {_quoted(VALID_DATES)}.") from None
    return (today or date.today()) + timedelta(days=offset)


def format_date(value: date, sep: str = "/") -> str:
    return value.strftime(f"%Y{sep}%m{sep}%d")


@dataclass(frozen=True)
class FlightQuery:
    date_label: str = DEFAULT_DATE
    flight_type: str = DEFAULT_FLIGHT_TYPE
    flight_direction: Optional[str] = None

    def target_date(self, today: Optional[date] = None) -> date:
        return resolve_date(self.date_label, today)


def validate_params(
    date_label: Optional[str] = None,
    flight_type: Optional[str] = None,
    flight_direction: Optional[str] = None,
) -> FlightQuery:
    """Validate raw query parameters; blanks fall back to the defaults."""
    date_value = _clean(date_label) or DEFAULT_DATE
    type_value = _clean(flight_type) or DEFAULT_FLIGHT_TYPE
    direction_value = _clean(flight_direction) or None

    if type_value not in VALID_FLIGHT_TYPES:
        raise ValidationError(f"Invalid flight type. Use {_quoted(VALID_FLIGHT_TYPES)}.")
    if date_value not in DATE_OFFSETS:
        raise ValidationError(f"Invalid date. Use {_quoted(VALID_DATES)}.")
    if direction_value is not None and direction_value not in VALID_DIRECTIONS:
        raise ValidationError(f"Invalid flight direction. Use {_quoted(VALID_DIRECTIONS)}.")

    return FlightQuery(date_value, type_value, direction_value)
