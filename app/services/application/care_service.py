"""
Care Service
============
Application-level service for care records.

The repository returns plain rows; this service turns them into the views the
API and the dashboard show (urgency, icons, display dates, timeline and
elapsed-time labels) and owns the "today" used by every date-dependent query.

Responsibilities:
- Care CRUD scoped to the requesting user
- Pending / upcoming / recent views
- Completing a care (one atomic repository call)
- Care statistics
"""
from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Callable, Dict, List, Optional

from app.domain.care_schedule import days_until, parse_care_date
from app.domain.care_types import describe_activity, icon_for
from app.domain.urgency import classify_days, time_ago_text, timeline_label
from app.utils.time import format_display_date, local_now
from infrastructure.database.repositories.cares import CareRepository
from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)

DEFAULT_PENDING_HORIZON_DAYS = 7
NOTIFICATION_HORIZON_DAYS = 3
DEFAULT_UPCOMING_DAYS = 7
DEFAULT_ACTIVITY_LIMIT = 10


def activity_started_at(care_date: date, now: datetime) -> datetime:
    """Care dates carry no time of day: an activity counts from midnight."""
    return datetime.combine(care_date, time.min, tzinfo=now.tzinfo)


class CareService:
    """Care records and their derived views for one user at a time."""

    def __init__(
        self,
        care_repo: CareRepository,
        *,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = local_now,
        pending_horizon_days: int = DEFAULT_PENDING_HORIZON_DAYS,
    ) -> None:
        self.care_repo = care_repo
        self.audit_logger = audit_logger
        self._clock = clock
        self.pending_horizon_days = pending_horizon_days

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def now(self) -> datetime:
        current = self._clock()
        # Naive clock values are taken as local time.
        return current if current.tzinfo is not None else current.astimezone()

    def today(self) -> date:
        return self.now().date()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create_care(
        self,
        user_id: int,
        plant_id: int,
        care_type: Any,
        care_date: Any,
        observations: str = "",
        schedule_next: bool = True,
    ) -> bool:
        return self.care_repo.create_care(
            user_id,
            plant_id,
            care_type,
            care_date,
            observations,
            schedule_next=schedule_next,
        )

    def update_care(
        self,
        care_id: int,
        user_id: int,
        care_type: Any,
        care_date: Any,
        observations: str = "",
        schedule_next: bool = True,
    ) -> bool:
        return self.care_repo.update_care(
            care_id,
            user_id,
            care_type,
            care_date,
            observations,
            schedule_next=schedule_next,
        )

    def delete_care(self, care_id: int, user_id: int) -> bool:
        deleted = self.care_repo.delete_care(care_id, user_id)
        if self.audit_logger:
            self.audit_logger.log_event(
                actor=str(user_id),
                action="delete",
                resource=f"care:{care_id}",
                outcome="success" if deleted else "failed",
            )
        return deleted

    def complete_care(
        self,
        care_id: int,
        user_id: int,
        note: str = "",
        today: Optional[date] = None,
    ) -> bool:
        """Mark a care as done; False when it is missing, foreign or the write failed."""
        return self.care_repo.complete_care(care_id, user_id, today=today or self.today(), note=note)

    def get_care(self, care_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        row = self.care_repo.get_care(care_id, user_id)
        return self._record_view(row) if row else None

    def find_by_plant(self, plant_id: int, user_id: int) -> List[Dict[str, Any]]:
        return [self._record_view(r) for r in self.care_repo.find_by_plant(plant_id, user_id)]

    def find_by_user(self, user_id: int) -> List[Dict[str, Any]]:
        return [self._record_view(r) for r in self.care_repo.find_by_user(user_id)]

    # ------------------------------------------------------------------
    # Scheduling views
    # ------------------------------------------------------------------

    def find_pending_for_user(
        self,
        user_id: int,
        horizon_days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """
        Cares due within ``horizon_days`` (default 7), overdue ones first,
        then those due today, then upcoming; earliest due date first inside
        each group.
        """
        today = today or self.today()
        horizon = self.pending_horizon_days if horizon_days is None else max(0, horizon_days)
        rows = self.care_repo.find_pending(user_id, today=today, horizon_days=horizon)
        views = []
        for row in rows:
            view = self._pending_view(row, today)
            if view is not None:
                views.append(view)
        return views

    def find_pending_with_details(self, user_id: int, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Short-horizon pending list read by the notification feed."""
        return self.find_pending_for_user(user_id, NOTIFICATION_HORIZON_DAYS, today)

    def count_pending_as_of(self, user_id: int, today: Optional[date] = None) -> int:
        return self.care_repo.count_pending_as_of(user_id, today=today or self.today())

    def find_upcoming(
        self,
        user_id: int,
        days_ahead: int = DEFAULT_UPCOMING_DAYS,
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        today = today or self.today()
        rows = self.care_repo.find_upcoming(user_id, today=today, days_ahead=max(0, days_ahead))
        upcoming = []
        for row in rows:
            due = parse_care_date(row.get("next_maintenance_date"))
            if due is None:
                continue
            days = days_until(due, today)
            upcoming.append(
                {
                    **row,
                    "icon": icon_for(row.get("care_type")),
                    "formatted_date": format_display_date(due),
                    "days_until": days,
                    "timeline": timeline_label(days),
                }
            )
        return upcoming

    def find_recent_activity(
        self,
        user_id: int,
        limit: int = DEFAULT_ACTIVITY_LIMIT,
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """Most recent care events with a description and an elapsed-time label."""
        now = now or self.now()
        activities = []
        for row in self.care_repo.find_recent(user_id, limit):
            care_date = parse_care_date(row.get("care_date"))
            if care_date is None:
                logger.warning("Skipping care %s with unreadable care_date %r", row.get("id"), row.get("care_date"))
                continue
            elapsed = now - activity_started_at(care_date, now)
            hours_ago = max(0, int(elapsed.total_seconds() // 3600))
            activities.append(
                {
                    **row,
                    "description": describe_activity(row.get("care_type"), row.get("plant_name")),
                    "time": time_ago_text(hours_ago),
                    "hours_ago": hours_ago,
                    "icon": icon_for(row.get("care_type")),
                    "formatted_date": format_display_date(care_date),
                }
            )
        return activities

    def get_care_stats(self, user_id: int, today: Optional[date] = None) -> Dict[str, Any]:
        stats = self.care_repo.get_stats(user_id, today=today or self.today())
        for entry in stats.get("type_distribution", []):
            entry["icon"] = icon_for(entry.get("care_type"))
        return stats

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @staticmethod
    def _record_view(row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **row,
            "icon": icon_for(row.get("care_type")),
            "formatted_date": format_display_date(row.get("care_date")),
            "formatted_next_date": format_display_date(row.get("next_maintenance_date")),
        }

    @staticmethod
    def _pending_view(row: Dict[str, Any], today: date) -> Optional[Dict[str, Any]]:
        due = parse_care_date(row.get("next_maintenance_date"))
        if due is None:
            logger.warning(
                "Skipping care %s with unreadable next_maintenance_date %r",
                row.get("care_id"),
                row.get("next_maintenance_date"),
            )
            return None
        urgency = classify_days(days_until(due, today))
        return {
            "care_id": row.get("care_id"),
            "care_type": row.get("care_type"),
            "icon": icon_for(row.get("care_type")),
            "next_maintenance_date": due.isoformat(),
            "formatted_date": format_display_date(due),
            "days_remaining": urgency.days_remaining,
            "priority": urgency.priority.value,
            "status": urgency.status_label,
            "days_text": urgency.days_text,
            "badge_color": urgency.badge,
            "plant_id": row.get("plant_id"),
            "plant_name": row.get("plant_name"),
            "species": row.get("species"),
            "location": row.get("location"),
            "observations": row.get("observations") or "",
        }
