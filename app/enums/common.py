"""
Common Enumerations
====================

Application-wide enums shared by the domain, services and API layers.
"""

from enum import Enum


class Priority(str, Enum):
    """
    Urgency bucket of a pending care record.
    Used by: urgency classifier, notifications, dashboard
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value


class CareStatus(str, Enum):
    """Human status label paired with each urgency bucket."""

    OVERDUE = "Overdue"
    DUE_TODAY = "Due today"
    UPCOMING = "Upcoming"

    def __str__(self) -> str:
        return self.value


class NotificationType(str, Enum):
    """
    Notification categories.

    ``URGENT``/``WARNING``/``INFO`` are the dashboard signal types;
    ``PLANT_ALERT`` and ``CARE_REMINDER`` come from the per-entity builders.
    """

    URGENT = "urgent"
    WARNING = "warning"
    INFO = "info"
    PLANT_ALERT = "plant_alert"
    CARE_REMINDER = "care_reminder"

    def __str__(self) -> str:
        return self.value


class PlantIssue(str, Enum):
    """Reasons a single plant can raise an alert."""

    WATERING = "watering"
    HEALTH = "health"
    MAINTENANCE = "maintenance"

    def __str__(self) -> str:
        return self.value
