"""
Notification Service
====================

Derives the notification lists shown on the dashboard from the current care
and plant state. Nothing is persisted: every call recomputes the lists.

Two orderings are exposed on purpose:
- ``build_notifications``: severity first (overdue, due today, latest
  activity), never re-sorted.
- ``get_user_notifications``: plant-level and care-level notifications
  merged and sorted newest first.

Author: LeafCare Team
Date: January 2026
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.domain.care_schedule import parse_care_date
from app.domain.notification import Notification, NotificationBuilder
from app.enums.common import Priority
from app.services.application.care_service import CareService, activity_started_at
from app.utils.time import coerce_datetime
from infrastructure.database.repositories.plants import PENDING_WINDOW_DAYS, PlantRepository

logger = logging.getLogger(__name__)

RECENT_PLANTS_LIMIT = 3


class NotificationService:
    """Synthesizes care and plant notifications for a user."""

    def __init__(
        self,
        care_service: CareService,
        plant_repo: PlantRepository,
        builder: Optional[NotificationBuilder] = None,
    ) -> None:
        self.care_service = care_service
        self.plant_repo = plant_repo
        self.builder = builder or NotificationBuilder()

    # ------------------------------------------------------------------
    # Severity-ordered feed
    # ------------------------------------------------------------------

    def build_notifications(self, user_id: int) -> List[Notification]:
        """
        At most one notification per signal, in fixed order:

        1. overdue cares (urgent)
        2. cares due today (warning)
        3. the latest care event (info)

        A user with nothing pending and no history gets an empty list.
        """
        now = self.care_service.now()
        pending = self.care_service.find_pending_with_details(user_id, today=now.date())

        notifications: List[Notification] = []
        overdue = [c for c in pending if c["priority"] == Priority.HIGH.value]
        if overdue:
            notifications.append(self.builder.overdue_cares(overdue, now=now))

        due_today = [c for c in pending if c["priority"] == Priority.MEDIUM.value]
        if due_today:
            notifications.append(self.builder.cares_due_today(due_today, now=now))

        latest = self.care_service.find_recent_activity(user_id, limit=1, now=now)
        if latest:
            activity = latest[0]
            care_date = parse_care_date(activity.get("care_date"))
            occurred_at = activity_started_at(care_date, now) if care_date else now
            notifications.append(self.builder.latest_activity(activity, occurred_at=occurred_at))

        return notifications

    # ------------------------------------------------------------------
    # Plant-level signals
    # ------------------------------------------------------------------

    def plant_notifications(self, user_id: int) -> List[Notification]:
        """Never-cared-for plants, plants with overdue care and recently added plants."""
        now = self.care_service.now()
        today = now.date()
        notifications: List[Notification] = []

        without_care = self.plant_repo.get_plants_without_care(user_id)
        if without_care:
            notifications.append(self.builder.plants_without_care(len(without_care), now=now))

        pending_plants = self.plant_repo.get_plants_with_pending_care(
            user_id, today=today, horizon_days=PENDING_WINDOW_DAYS
        )
        overdue_count = sum(1 for p in pending_plants if self._is_overdue(p.get("next_care_date"), today))
        if overdue_count:
            notifications.append(self.builder.plants_with_overdue_care(overdue_count, now=now))

        recent = self.plant_repo.get_recently_added_plants(user_id, RECENT_PLANTS_LIMIT)
        if recent:
            added_at = coerce_datetime(recent[0].get("created_at")) or now
            notifications.append(self.builder.recently_added_plants(recent, added_at=added_at))

        return notifications

    @staticmethod
    def _is_overdue(value: Any, today) -> bool:
        due = parse_care_date(value)
        return due is not None and due < today

    # ------------------------------------------------------------------
    # Merged feed
    # ------------------------------------------------------------------

    def get_user_notifications(self, user_id: int) -> List[Notification]:
        """Plant and care notifications together, newest first."""
        return NotificationBuilder.merge_and_sort(
            self.plant_notifications(user_id),
            self.build_notifications(user_id),
        )

    @staticmethod
    def count_unread(notifications: List[Notification]) -> int:
        return sum(1 for n in notifications if not n.is_read)

    def get_unread_notification_count(self, user_id: int) -> int:
        return self.count_unread(self.get_user_notifications(user_id))

    def care_reminders(self, user_id: int) -> List[Notification]:
        """One reminder per overdue or due-today care, most urgent first."""
        now = self.care_service.now()
        reminders: List[Notification] = []
        for care in self.care_service.find_pending_with_details(user_id, today=now.date()):
            if care["priority"] == Priority.LOW.value:
                continue
            reminders.append(
                self.builder.create_care_notification(
                    care.get("plant_name") or "",
                    care.get("care_type") or "",
                    days_overdue=max(0, -int(care["days_remaining"])),
                    now=now,
                    action_url=f"/api/cares/{care['care_id']}/complete",
                )
            )
        return reminders

    @staticmethod
    def serialize(notifications: List[Notification]) -> List[Dict[str, Any]]:
        return [n.to_dict() for n in notifications]
