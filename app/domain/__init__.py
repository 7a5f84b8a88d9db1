"""
Domain Package
==============
Care scheduling rules and the value objects derived from plant and care
records: care types, due-date arithmetic, urgency classification,
notifications and the dashboard read model.

Nothing here touches storage. Date arithmetic takes "today" as an argument;
the only clock read is the default ``Notification.created_at``.
"""

from .care_schedule import days_until, next_due_date, parse_care_date
from .care_types import CareType, describe_activity, icon_for, interval_for
from .dashboard import DashboardData, SummaryStatistics
from .notification import Notification, NotificationBuilder
from .urgency import UrgencyClassification, classify, classify_days

__all__ = [
    # Care types
    "CareType",
    "describe_activity",
    "icon_for",
    "interval_for",
    # Scheduling
    "days_until",
    "next_due_date",
    "parse_care_date",
    # Urgency
    "UrgencyClassification",
    "classify",
    "classify_days",
    # Notifications
    "Notification",
    "NotificationBuilder",
    # Dashboard
    "DashboardData",
    "SummaryStatistics",
]
