#!/usr/bin/env python3
"""
Flight status classification.

Maps free-text status labels plus the source's visual severity markers onto
one of on_time / delayed / cancelled. The delay heuristics (amber badges,
estimated time differing from scheduled time) are best-effort: gate changes
or re-timed departures can be counted as delays.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from contracts.flight import FlightStatus, Severity


ESTIMATE_PLACEHOLDERS = {"", "-", "--", "tba", "tbc", "n/a"}

_HIGH_COLORS = {"red"}
_MEDIUM_COLORS = {"amber", "orange", "yellow"}


def _lower(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def classify_status(
    raw_status: Optional[str],
    severity: Optional[str] = None,
    delay_hint: bool = False,
) -> str:
    """Classify a status; first matching rule wins, default on_time."""
    text = _lower(raw_status)
    if "cancel" in text or severity == Severity.HIGH:
        return FlightStatus.CANCELLED
    if "delay" in text or severity == Severity.MEDIUM or bool(delay_hint):
        return FlightStatus.DELAYED
    return FlightStatus.ON_TIME


def severity_from_classes(classes: Optional[Iterable[str]]) -> Optional[str]:
    """Severity from the CSS classes on a scraped status badge."""
    names = {_lower(c) for c in (classes or [])}
    if "red" in names:
        return Severity.HIGH
    if "amber" in names:
        return Severity.MEDIUM
    return None


def severity_from_color(color: Optional[str]) -> Optional[str]:
    """Severity from the API's statusColor field."""
    value = _lower(color)
    if value in _HIGH_COLORS:
        return Severity.HIGH
    if value in _MEDIUM_COLORS:
        return Severity.MEDIUM
    return None


def estimated_differs(scheduled: Optional[str], estimated: Optional[str]) -> bool:
    """True when a real estimate exists and it is not the scheduled time."""
    est = _lower(estimated)
    if est in ESTIMATE_PLACEHOLDERS:
        return False
    return "".join(est.split()) != "".join(_lower(scheduled).split())
