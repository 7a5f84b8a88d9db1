"""Utility functions for time handling.

Timestamps are UTC and timezone-aware and are persisted as ISO-8601 strings
via iso_now(). Care dates are whole calendar days: they are stored as
``YYYY-MM-DD`` text and never carry a time-of-day component.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

DISPLAY_DATE_FORMAT = "%d/%m/%Y"


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def iso_now(*, timespec: str | None = None) -> str:
    """Return current UTC time as an ISO8601 string (timezone-aware)."""
    now = utc_now()
    if timespec:
        return now.isoformat(timespec=timespec)
    return now.isoformat()


def local_now() -> datetime:
    """Return the current local wall-clock time as an aware datetime."""
    return datetime.now().astimezone()


def coerce_datetime(value: Any) -> datetime | None:
    """
    Coerce value to datetime, returning None on failure.

    Args:
        value: String or datetime to coerce

    Returns:
        Datetime in timezone.utc or None if invalid
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw.replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    else:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed


def coerce_date(value: Any) -> date | None:
    """
    Coerce a storage or request value to a calendar date.

    Accepts ``date`` objects, ``datetime`` objects (the date part is kept as-is,
    no timezone shift) and ISO strings, either ``YYYY-MM-DD`` or a full
    timestamp. Returns None for anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            return None
    return None


def format_display_date(value: Any) -> str:
    """Render a care date as ``dd/mm/YYYY``; empty string when unparseable."""
    parsed = coerce_date(value)
    if parsed is None:
        return ""
    return parsed.strftime(DISPLAY_DATE_FORMAT)
