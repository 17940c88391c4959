#!/usr/bin/env python3
"""
Shared utilities for the flight summary backend.

Configuration helpers, constants, and time helpers used by the API server,
the raw data sources, and the report assembler.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Service constants
# ---------------------------------------------------------------------------
APP_VERSION = "1.1"
AIRPORT_NAME = os.getenv("AIRPORT_NAME", "Sydney Airport")

# ---------------------------------------------------------------------------
# Environment helpers
# ---------------------------------------------------------------------------

def env_bool(name: str, default: bool) -> bool:
    """Read a boolean from an environment variable."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Read an int from an environment variable."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    """Read a float from an environment variable."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_str(name: str, default: str) -> str:
    """Read a stripped string from an environment variable, falling back on blank."""
    raw = (os.getenv(name) or "").strip()
    return raw or default


# ---------------------------------------------------------------------------
# Time helpers
# ---------------------------------------------------------------------------

def utc_now() -> str:
    """ISO-formatted UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
