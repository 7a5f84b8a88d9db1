"""Dashboard Aggregation Service
================================

Combines the care, plant and notification services into the dashboard
payload. The dashboard is never partial: if any part fails, the caller gets
``DashboardData.empty()``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from app.domain.dashboard import DashboardData, SummaryStatistics
from app.services.application.care_service import CareService
from app.services.application.notifications_service import NotificationService
from infrastructure.database.repositories.plants import (
    HEALTHY_WINDOW_DAYS,
    PENDING_WINDOW_DAYS,
    PlantRepository,
)

logger = logging.getLogger(__name__)

DASHBOARD_ACTIVITY_LIMIT = 5


class DashboardService:
    """Aggregate dashboard data for one user."""

    def __init__(
        self,
        care_service: CareService,
        plant_repo: PlantRepository,
        notification_service: NotificationService,
        *,
        activity_limit: int = DASHBOARD_ACTIVITY_LIMIT,
        healthy_window_days: int = HEALTHY_WINDOW_DAYS,
    ) -> None:
        self.care_service = care_service
        self.plant_repo = plant_repo
        self.notification_service = notification_service
        self.activity_limit = activity_limit
        self.healthy_window_days = healthy_window_days

    # ------------------------------------------------------------------
    # Public API – one method per dashboard endpoint
    # ------------------------------------------------------------------

    def get_dashboard_data(self, user_id: int) -> DashboardData:
        """Summary counters, pending cares, notifications and recent activity."""
        try:
            now = self.care_service.now()
            today = now.date()
            return DashboardData(
                summary_stats=self.get_summary_stats(user_id, today=today),
                pending_cares=self.care_service.find_pending_for_user(user_id, today=today),
                notifications=self.notification_service.build_notifications(user_id),
                recent_activities=self.care_service.find_recent_activity(
                    user_id, limit=self.activity_limit, now=now
                ),
            )
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Dashboard aggregation failed for user %s: %s", user_id, exc, exc_info=True)
            return DashboardData.empty()

    def get_summary_stats(self, user_id: int, today: date | None = None) -> SummaryStatistics:
        today = today or self.care_service.today()
        return SummaryStatistics(
            total_plants=self.plant_repo.count_plants_by_user(user_id),
            pending_care_count=self.care_service.count_pending_as_of(user_id, today=today),
            healthy_plants_count=self.plant_repo.get_healthy_plants_count(
                user_id, today=today, window_days=self.healthy_window_days
            ),
            locations_count=self.plant_repo.get_total_locations(user_id),
        )

    def get_garden_stats(self, user_id: int) -> dict[str, Any]:
        """Plant totals, plants with care due in the next 7 days, locations and species."""
        today = self.care_service.today()
        pending_plants = self.plant_repo.get_plants_with_pending_care(
            user_id, today=today, horizon_days=PENDING_WINDOW_DAYS
        )
        return {
            "total_plants": self.plant_repo.count_plants_by_user(user_id),
            "pending_care": len(pending_plants),
            "plants_due_today_or_earlier": self.plant_repo.count_plants_with_due_care(user_id, today=today),
            "plants_by_location": self.plant_repo.get_plants_by_location_stats(user_id),
            "top_species": self.plant_repo.get_top_species(user_id),
        }
