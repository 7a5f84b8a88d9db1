"""
Urgency Classifier
==================

Turns the signed day difference between a due date and today into a
priority bucket plus the labels shown next to a pending care.

    days_remaining < 0   -> HIGH   "Overdue"    "N day(s) overdue"
    days_remaining == 0  -> MEDIUM "Due today"  "Due today"
    days_remaining > 0   -> LOW    "Upcoming"   "In N day(s)"

The mapping is defined for every integer, so callers never need a fallback.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from app.domain.care_schedule import days_until
from app.enums.common import CareStatus, Priority

_BADGES: dict[Priority, str] = {
    Priority.HIGH: "bg-red-100 text-red-800",
    Priority.MEDIUM: "bg-orange-100 text-orange-800",
    Priority.LOW: "bg-blue-100 text-blue-800",
}


@dataclass(frozen=True, slots=True)
class UrgencyClassification:
    priority: Priority
    status_label: str
    days_text: str
    days_remaining: int

    @property
    def badge(self) -> str:
        return badge_for(self.priority)

    def to_dict(self) -> dict[str, object]:
        return {
            "priority": self.priority.value,
            "status": self.status_label,
            "days_text": self.days_text,
            "days_remaining": self.days_remaining,
            "badge_color": self.badge,
        }


def classify_days(days_remaining: int) -> UrgencyClassification:
    """Classify a signed day count."""
    if days_remaining < 0:
        return UrgencyClassification(
            priority=Priority.HIGH,
            status_label=CareStatus.OVERDUE.value,
            days_text=f"{abs(days_remaining)} day(s) overdue",
            days_remaining=days_remaining,
        )
    if days_remaining == 0:
        return UrgencyClassification(
            priority=Priority.MEDIUM,
            status_label=CareStatus.DUE_TODAY.value,
            days_text="Due today",
            days_remaining=0,
        )
    return UrgencyClassification(
        priority=Priority.LOW,
        status_label=CareStatus.UPCOMING.value,
        days_text=f"In {days_remaining} day(s)",
        days_remaining=days_remaining,
    )


def classify(due_date: date, today: date) -> UrgencyClassification:
    """Classify a due date relative to ``today``."""
    return classify_days(days_until(due_date, today))


def badge_for(priority: Priority) -> str:
    """CSS utility classes the web client uses for the priority badge."""
    return _BADGES[priority]


def timeline_label(days_ahead: int) -> str:
    """Label for an entry of the upcoming-care timeline."""
    if days_ahead == 0:
        return "Today"
    if days_ahead == 1:
        return "Tomorrow"
    return f"In {days_ahead} days"


def time_ago_text(hours_ago: float) -> str:
    """Elapsed-time text for the activity feed."""
    if hours_ago < 1:
        return "Just now"
    if hours_ago < 24:
        hours = int(hours_ago)
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    days = math.floor(hours_ago / 24)
    return "1 day ago" if days == 1 else f"{days} days ago"
