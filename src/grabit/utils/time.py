"""Canonical time utilities.

All timestamps written by the project (event log lines) use the
canonical instant string: YYYY-MM-DDTHH:MM:SSZ (seconds-only, UTC).
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as tz-aware datetime."""
    return datetime.now(UTC)


def format_ts_utc_z(dt: datetime) -> str:
    """Format a datetime as canonical UTC instant string (YYYY-MM-DDTHH:MM:SSZ).

    Converts any aware datetime to UTC before formatting.

    Args:
        dt: Datetime to format. Must be timezone-aware.

    Returns:
        Canonical instant string (exactly 20 characters).

    Raises:
        ValueError: If dt is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(f"Cannot format naive datetime {dt}. Provide timezone context.")

    return dt.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def now_ts_utc_z() -> str:
    """Return current UTC time as canonical instant string."""
    return format_ts_utc_z(utc_now())
