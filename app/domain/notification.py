"""
Notification Domain
===================

Notifications are derived values: they are rebuilt on every request from the
current plant and care state and are never persisted. ``NotificationBuilder``
owns the wording of every notification and the merge ordering used by the
combined feed.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Sequence

from app.enums.common import NotificationType, PlantIssue, Priority
from app.utils.time import utc_now

MAX_NAMED_PLANTS = 2


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:13]}"


@dataclass(slots=True)
class Notification:
    """A single entry of a notification list."""

    id: str
    type: NotificationType
    title: str
    message: str
    priority: Priority = Priority.MEDIUM
    created_at: datetime = field(default_factory=utc_now)
    is_read: bool = False
    action_url: str | None = None
    time_label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "priority": self.priority.value,
            "created_at": self.created_at.isoformat(),
            "is_read": self.is_read,
            "action_url": self.action_url,
            "time": self.time_label,
        }


def distinct_names(names: Iterable[str | None], limit: int = MAX_NAMED_PLANTS) -> list[str]:
    """First ``limit`` distinct, non-empty names in input order."""
    seen: list[str] = []
    for name in names:
        if name and name not in seen:
            seen.append(name)
        if len(seen) >= limit:
            break
    return seen


def _with_plant_names(message: str, names: Sequence[str]) -> str:
    if not names:
        return message
    return f"{message} in: {', '.join(names)}"


class NotificationBuilder:
    """Factory for every notification the application shows."""

    # ---- care signals (severity-ordered feed) -------------------------

    def overdue_cares(self, cares: Sequence[dict[str, Any]], *, now: datetime) -> Notification:
        names = distinct_names(c.get("plant_name") for c in cares)
        return Notification(
            id=_new_id("care"),
            type=NotificationType.URGENT,
            title="Overdue care",
            message=_with_plant_names(f"{len(cares)} overdue care(s)", names),
            priority=Priority.HIGH,
            created_at=now,
            action_url="/api/cares/pending",
            time_label="Urgent",
        )

    def cares_due_today(self, cares: Sequence[dict[str, Any]], *, now: datetime) -> Notification:
        names = distinct_names(c.get("plant_name") for c in cares)
        return Notification(
            id=_new_id("care"),
            type=NotificationType.WARNING,
            title="Care due today",
            message=_with_plant_names(f"{len(cares)} care(s) due today", names),
            priority=Priority.MEDIUM,
            created_at=now,
            action_url="/api/cares/pending",
            time_label="Today",
        )

    def latest_activity(self, activity: dict[str, Any], *, occurred_at: datetime) -> Notification:
        return Notification(
            id=_new_id("care"),
            type=NotificationType.INFO,
            title="Latest activity",
            message=activity.get("description", ""),
            priority=Priority.LOW,
            created_at=occurred_at,
            action_url="/api/cares/recent",
            time_label=activity.get("time", ""),
        )

    # ---- plant signals ------------------------------------------------

    def plants_without_care(self, count: int, *, now: datetime) -> Notification:
        return Notification(
            id=_new_id("plant"),
            type=NotificationType.WARNING,
            title="Plants without care",
            message=f"{count} plant(s) have never received care",
            priority=Priority.MEDIUM,
            created_at=now,
            action_url="/api/plants",
            time_label="Attention",
        )

    def plants_with_overdue_care(self, count: int, *, now: datetime) -> Notification:
        return Notification(
            id=_new_id("plant"),
            type=NotificationType.URGENT,
            title="Plants with overdue care",
            message=f"{count} plant(s) with overdue care",
            priority=Priority.HIGH,
            created_at=now,
            action_url="/api/cares/pending",
            time_label="Urgent",
        )

    def recently_added_plants(self, plants: Sequence[dict[str, Any]], *, added_at: datetime) -> Notification:
        names = distinct_names(p.get("name") for p in plants)
        message = f"New plants: {', '.join(names)}"
        if len(plants) > MAX_NAMED_PLANTS:
            message += f" and {len(plants) - MAX_NAMED_PLANTS} more"
        return Notification(
            id=_new_id("plant"),
            type=NotificationType.INFO,
            title="Recently added plants",
            message=message,
            priority=Priority.LOW,
            created_at=added_at,
            action_url="/api/plants",
            time_label="Recent",
        )

    # ---- per-entity notifications ------------------------------------

    def create_plant_notification(
        self,
        plant_name: str,
        issue: PlantIssue | str,
        priority: Priority = Priority.MEDIUM,
        *,
        now: datetime | None = None,
    ) -> Notification:
        messages = {
            PlantIssue.WATERING: "needs water urgently!",
            PlantIssue.HEALTH: "is showing health problems.",
            PlantIssue.MAINTENANCE: "needs maintenance.",
        }
        try:
            message = messages[PlantIssue(issue)]
        except ValueError:
            message = "needs attention."
        return Notification(
            id=_new_id("plant"),
            type=NotificationType.PLANT_ALERT,
            title=f"Attention: {plant_name}",
            message=f"{plant_name} {message}",
            priority=priority,
            created_at=now or utc_now(),
        )

    def create_care_notification(
        self,
        plant_name: str,
        care_type: str,
        days_overdue: int = 0,
        *,
        now: datetime | None = None,
        action_url: str | None = None,
    ) -> Notification:
        if days_overdue > 0:
            priority = Priority.HIGH
            message = f"{care_type} overdue by {days_overdue} day(s)"
        else:
            priority = Priority.MEDIUM
            message = f"{care_type} needs to be done"
        return Notification(
            id=_new_id("care"),
            type=NotificationType.CARE_REMINDER,
            title=f"Pending care: {plant_name}",
            message=message,
            priority=priority,
            created_at=now or utc_now(),
            action_url=action_url,
        )

    # ---- ordering -----------------------------------------------------

    @staticmethod
    def merge_and_sort(*groups: Iterable[Notification]) -> list[Notification]:
        """Concatenate groups and order newest first; ties keep input order."""
        merged = [notification for group in groups for notification in group]
        merged.sort(key=lambda n: n.created_at, reverse=True)
        return merged
