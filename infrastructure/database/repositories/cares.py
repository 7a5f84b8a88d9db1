"""
Care Repository
===============

SQL for care records. Every query reaches ``cares`` through ``plants`` so the
owning user is always part of the filter. Rows come back as plain dicts; the
view fields (urgency, icons, labels) are added by ``CareService``.

Dates are ``YYYY-MM-DD`` text and "today" is always a parameter: nothing in
here reads the clock or uses SQLite's ``date('now')``.

Failure contract (see ``infrastructure.database.decorators``):
- reads return ``[]`` / ``None`` / ``0`` / a zeroed dict on storage errors
- writes return ``False``

Author: LeafCare Team
Date: January 2026
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from app.domain.care_schedule import next_due_date
from app.domain.care_types import CareType
from app.utils.time import coerce_date, format_display_date
from infrastructure.database.decorators import read_guard, write_guard
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.database.utils import row_to_dict

logger = logging.getLogger(__name__)

STATS_WINDOW_DAYS = 30
STATS_RECENT_DAYS = 7


def completion_note(today: date, note: str = "") -> str:
    """Text appended to ``observations`` when a care is marked as done."""
    text = f"\n\nCompleted on {format_display_date(today)}"
    note = (note or "").strip()
    if note:
        text += f": {note}"
    return text


def _empty_stats() -> Dict[str, Any]:
    return {
        "total_cares": 0,
        "plants_cared": 0,
        "cares_last_week": 0,
        "avg_cares_per_day": 0.0,
        "type_distribution": [],
    }


# Overdue first, then due today, then upcoming; ascending due date inside each group.
_PENDING_ORDER = """
    ORDER BY
        CASE
            WHEN c.next_maintenance_date < :today THEN 1
            WHEN c.next_maintenance_date = :today THEN 2
            ELSE 3
        END,
        c.next_maintenance_date ASC,
        c.id ASC
"""


class CareRepository:
    """Repository for care records (CareService exclusive)."""

    def __init__(self, backend: SQLiteDatabaseHandler) -> None:
        self._backend = backend

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    @staticmethod
    def _plant_owned(db, plant_id: int, user_id: int) -> bool:
        row = db.execute(
            "SELECT 1 FROM plants WHERE id = ? AND user_id = ?",
            (plant_id, user_id),
        ).fetchone()
        return row is not None

    @staticmethod
    def _care_owned(db, care_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        row = db.execute(
            """
            SELECT c.id, c.care_type, c.observations
            FROM cares c
            INNER JOIN plants p ON p.id = c.plant_id
            WHERE c.id = ? AND p.user_id = ?
            """,
            (care_id, user_id),
        ).fetchone()
        return row_to_dict(row) if row else None

    @staticmethod
    def _derive_due(care_type: CareType, care_date: date, schedule_next: bool) -> Optional[str]:
        if not schedule_next:
            return None
        return next_due_date(care_type, care_date).isoformat()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @write_guard
    def create_care(
        self,
        user_id: int,
        plant_id: int,
        care_type: Any,
        care_date: Any,
        observations: str = "",
        *,
        schedule_next: bool = True,
    ) -> bool:
        """
        Record a care event for a plant owned by ``user_id``.

        ``care_type`` is canonicalised (unknown values fall back to watering)
        and ``next_maintenance_date`` is derived from it and ``care_date``.

        Returns:
            True when the row was inserted; False when the plant is not owned
            by the user, the date is invalid or the insert failed.
        """
        performed_on = coerce_date(care_date)
        if performed_on is None:
            logger.warning("create_care rejected: invalid care_date %r", care_date)
            return False
        canonical = CareType.canonicalize(care_type)

        with self._backend.connection() as db:
            if not self._plant_owned(db, plant_id, user_id):
                logger.warning("create_care rejected: plant %s not owned by user %s", plant_id, user_id)
                return False
            db.execute(
                """
                INSERT INTO cares (plant_id, care_type, care_date, observations, next_maintenance_date)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    plant_id,
                    canonical.value,
                    performed_on.isoformat(),
                    observations or "",
                    self._derive_due(canonical, performed_on, schedule_next),
                ),
            )
        logger.info("Care %s recorded for plant %s (user %s)", canonical.value, plant_id, user_id)
        return True

    @write_guard
    def update_care(
        self,
        care_id: int,
        user_id: int,
        care_type: Any,
        care_date: Any,
        observations: str = "",
        *,
        schedule_next: bool = True,
    ) -> bool:
        """Replace type, date and observations; the due date is re-derived."""
        performed_on = coerce_date(care_date)
        if performed_on is None:
            logger.warning("update_care rejected: invalid care_date %r", care_date)
            return False
        canonical = CareType.canonicalize(care_type)

        with self._backend.connection() as db:
            if self._care_owned(db, care_id, user_id) is None:
                logger.warning("update_care rejected: care %s not found for user %s", care_id, user_id)
                return False
            cursor = db.execute(
                """
                UPDATE cares
                SET care_type = ?, care_date = ?, observations = ?, next_maintenance_date = ?
                WHERE id = ?
                """,
                (
                    canonical.value,
                    performed_on.isoformat(),
                    observations or "",
                    self._derive_due(canonical, performed_on, schedule_next),
                    care_id,
                ),
            )
            return cursor.rowcount == 1

    @write_guard
    def delete_care(self, care_id: int, user_id: int) -> bool:
        with self._backend.connection() as db:
            cursor = db.execute(
                """
                DELETE FROM cares
                WHERE id = ?
                  AND plant_id IN (SELECT id FROM plants WHERE user_id = ?)
                """,
                (care_id, user_id),
            )
            if cursor.rowcount != 1:
                logger.warning("delete_care: care %s not found for user %s", care_id, user_id)
                return False
            return True

    @write_guard
    def complete_care(self, care_id: int, user_id: int, *, today: date, note: str = "") -> bool:
        """
        Mark a care as done today.

        The ownership check and the update of ``care_date``, ``observations``
        and ``next_maintenance_date`` happen in a single transaction, so no
        reader sees the new date paired with the old due date. A missing or
        foreign care changes nothing and returns False.
        """
        with self._backend.transaction() as db:
            care = self._care_owned(db, care_id, user_id)
            if care is None:
                logger.warning("complete_care: care %s not found for user %s", care_id, user_id)
                return False
            db.execute(
                """
                UPDATE cares
                SET care_date = ?,
                    observations = COALESCE(observations, '') || ?,
                    next_maintenance_date = ?
                WHERE id = ?
                """,
                (
                    today.isoformat(),
                    completion_note(today, note),
                    next_due_date(care["care_type"], today).isoformat(),
                    care_id,
                ),
            )
        logger.info("Care %s completed by user %s", care_id, user_id)
        return True

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @read_guard(None)
    def get_care(self, care_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        with self._backend.connection() as db:
            row = db.execute(
                """
                SELECT c.*, p.name AS plant_name
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE c.id = ? AND p.user_id = ?
                """,
                (care_id, user_id),
            ).fetchone()
            return row_to_dict(row) if row else None

    @read_guard(list)
    def find_by_plant(self, plant_id: int, user_id: int) -> List[Dict[str, Any]]:
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT c.*
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE c.plant_id = ? AND p.user_id = ?
                ORDER BY c.care_date DESC, c.id DESC
                """,
                (plant_id, user_id),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(list)
    def find_by_user(self, user_id: int) -> List[Dict[str, Any]]:
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT c.*, p.name AS plant_name
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE p.user_id = ?
                ORDER BY c.care_date DESC, c.id DESC
                """,
                (user_id,),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    # ------------------------------------------------------------------
    # Scheduling queries
    # ------------------------------------------------------------------

    @read_guard(list)
    def find_pending(self, user_id: int, *, today: date, horizon_days: int) -> List[Dict[str, Any]]:
        """Cares due on or before ``today + horizon_days``, overdue first."""
        params = {
            "user_id": user_id,
            "today": today.isoformat(),
            "horizon": (today + timedelta(days=horizon_days)).isoformat(),
        }
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT
                    c.id AS care_id,
                    c.care_type,
                    c.care_date,
                    c.next_maintenance_date,
                    c.observations,
                    p.id AS plant_id,
                    p.name AS plant_name,
                    p.species,
                    p.location
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE p.user_id = :user_id
                  AND c.next_maintenance_date IS NOT NULL
                  AND c.next_maintenance_date <= :horizon
                """
                + _PENDING_ORDER,
                params,
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(0)
    def count_pending_as_of(self, user_id: int, *, today: date) -> int:
        """Number of care records due on or before ``today``."""
        with self._backend.connection() as db:
            row = db.execute(
                """
                SELECT COUNT(*) AS count
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE p.user_id = ?
                  AND c.next_maintenance_date IS NOT NULL
                  AND c.next_maintenance_date <= ?
                """,
                (user_id, today.isoformat()),
            ).fetchone()
            return int(row["count"]) if row else 0

    @read_guard(list)
    def find_upcoming(self, user_id: int, *, today: date, days_ahead: int) -> List[Dict[str, Any]]:
        """Cares due between ``today`` and ``today + days_ahead`` inclusive."""
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT
                    c.id AS care_id,
                    c.care_type,
                    c.next_maintenance_date,
                    p.id AS plant_id,
                    p.name AS plant_name,
                    p.location
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE p.user_id = ?
                  AND c.next_maintenance_date IS NOT NULL
                  AND c.next_maintenance_date BETWEEN ? AND ?
                ORDER BY c.next_maintenance_date ASC, c.id ASC
                """,
                (user_id, today.isoformat(), (today + timedelta(days=days_ahead)).isoformat()),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(list)
    def find_recent(self, user_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        """Most recent care events, newest ``care_date`` first."""
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT
                    c.id,
                    c.care_type,
                    c.care_date,
                    c.observations,
                    c.next_maintenance_date,
                    p.id AS plant_id,
                    p.name AS plant_name,
                    p.species
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE p.user_id = ?
                ORDER BY c.care_date DESC, c.id DESC
                LIMIT ?
                """,
                (user_id, max(0, int(limit))),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(_empty_stats)
    def get_stats(self, user_id: int, *, today: date) -> Dict[str, Any]:
        """Activity over the last 30 days plus the per-type distribution."""
        window_start = (today - timedelta(days=STATS_WINDOW_DAYS)).isoformat()
        week_start = (today - timedelta(days=STATS_RECENT_DAYS)).isoformat()
        with self._backend.connection() as db:
            totals = db.execute(
                """
                SELECT
                    COUNT(*) AS total_cares,
                    COUNT(DISTINCT c.plant_id) AS plants_cared,
                    COALESCE(SUM(CASE WHEN c.care_date >= ? THEN 1 ELSE 0 END), 0) AS cares_last_week
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE p.user_id = ? AND c.care_date >= ?
                """,
                (week_start, user_id, window_start),
            ).fetchone()
            distribution = db.execute(
                """
                SELECT c.care_type, COUNT(*) AS count
                FROM cares c
                INNER JOIN plants p ON p.id = c.plant_id
                WHERE p.user_id = ? AND c.care_date >= ?
                GROUP BY c.care_type
                ORDER BY count DESC, c.care_type ASC
                """,
                (user_id, window_start),
            ).fetchall()

        total = int(totals["total_cares"] or 0)
        return {
            "total_cares": total,
            "plants_cared": int(totals["plants_cared"] or 0),
            "cares_last_week": int(totals["cares_last_week"] or 0),
            "avg_cares_per_day": round(total / STATS_WINDOW_DAYS, 1),
            "type_distribution": [row_to_dict(r) for r in distribution],
        }
