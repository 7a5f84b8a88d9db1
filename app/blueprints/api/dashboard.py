"""Dashboard API
===================
"""
import logging

from flask import Blueprint, Response

from app.blueprints.api._common import (
    get_dashboard_service,
    get_notification_service,
    get_user_id,
    success as _success,
)
from app.security.auth import api_login_required
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

# Create blueprint for dashboard API
dashboard_api = Blueprint('dashboard_api', __name__)


@dashboard_api.get("")
@api_login_required
@safe_route("Failed to load dashboard")
def get_dashboard() -> Response:
    """Summary stats, pending cares, notifications and recent activity."""
    data = get_dashboard_service().get_dashboard_data(get_user_id())
    return _success(data.to_dict())


@dashboard_api.get("/notifications")
@api_login_required
@safe_route("Failed to load notifications")
def get_notifications() -> Response:
    """Severity-ordered notifications (overdue, due today, latest activity)."""
    svc = get_notification_service()
    notifications = svc.serialize(svc.build_notifications(get_user_id()))
    return _success({"notifications": notifications, "count": len(notifications)})


@dashboard_api.get("/notifications/feed")
@api_login_required
@safe_route("Failed to load notification feed")
def get_notification_feed() -> Response:
    """Plant and care notifications merged, newest first."""
    svc = get_notification_service()
    feed = svc.get_user_notifications(get_user_id())
    return _success(
        {
            "notifications": svc.serialize(feed),
            "count": len(feed),
            "unread_count": svc.count_unread(feed),
        }
    )


@dashboard_api.get("/notifications/reminders")
@api_login_required
@safe_route("Failed to load care reminders")
def get_care_reminders() -> Response:
    svc = get_notification_service()
    reminders = svc.serialize(svc.care_reminders(get_user_id()))
    return _success({"notifications": reminders, "count": len(reminders)})
