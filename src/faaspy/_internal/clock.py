"""Timestamps and process uptime."""

import time
from datetime import UTC, datetime

_STARTED = time.monotonic()


def uptime() -> float:
    """Seconds since faaspy was imported (approximates process uptime)."""
    return time.monotonic() - _STARTED


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and ``Z``."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
