"""
Care schedule arithmetic.

Pure calendar-day functions. Nothing here reads the clock: callers pass the
base date or "today" explicitly.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from app.domain.care_types import CareType, interval_for
from app.utils.time import coerce_date


def next_due_date(care_type: CareType | str, base_date: date) -> date:
    """Date on which a care of ``care_type`` performed on ``base_date`` is due again."""
    return base_date + interval_for(care_type)


def days_until(due_date: date, today: date) -> int:
    """Signed whole days from ``today`` to ``due_date`` (negative when overdue)."""
    return (due_date - today).days


def parse_care_date(value: Any) -> date | None:
    """Parse a care/due date as it comes back from storage or a request."""
    return coerce_date(value)
