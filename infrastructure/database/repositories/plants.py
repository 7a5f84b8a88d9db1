"""
Plant Repository
================

Repository for plant operations.
Clear ownership: PlantRepository is used by PlantService and, for the
plant-level counters, by NotificationService and DashboardService.

Responsibilities:
- Plant CRUD operations scoped to the owning user
- Garden counters (totals, locations, healthy plants)
- Plant-level care signals (never cared for, pending care, recently added)

Author: LeafCare Team
Date: January 2026
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from infrastructure.database.decorators import insert_guard, read_guard, write_guard
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.database.utils import row_to_dict

logger = logging.getLogger(__name__)

# A plant counts as healthy when it was cared for within this many days
# or has no care history at all.
HEALTHY_WINDOW_DAYS = 15
# Plant-level pending-care window used by the garden stats and plant signals.
PENDING_WINDOW_DAYS = 7
TOP_SPECIES_LIMIT = 5

_PLANT_COLUMNS = "id, user_id, name, species, acquisition_date, location, created_at"


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class PlantRepository:
    """Repository for plant operations."""

    def __init__(self, backend: SQLiteDatabaseHandler) -> None:
        self._backend = backend

    # Plant CRUD Operations ----------------------------------------------------
    @insert_guard
    def create_plant(
        self,
        user_id: int,
        *,
        name: str,
        species: str = "",
        acquisition_date: Optional[date] = None,
        location: str = "",
    ) -> Optional[int]:
        """
        Create a new plant.

        Args:
            user_id: Owner of the plant
            name: Display name
            species: Free-text species
            acquisition_date: Date the plant was acquired
            location: Free-text location ("Living room", "Balcony")

        Returns:
            The new plant id, or None on failure.
        """
        with self._backend.connection() as db:
            cursor = db.execute(
                """
                INSERT INTO plants (user_id, name, species, acquisition_date, location)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user_id, name.strip(), (species or "").strip(), _iso(acquisition_date), (location or "").strip()),
            )
            plant_id = cursor.lastrowid
        logger.info("Plant %s created for user %s", plant_id, user_id)
        return plant_id

    @read_guard(None)
    def get_plant(self, plant_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        """Plant owned by ``user_id``; None when missing or owned by someone else."""
        with self._backend.connection() as db:
            row = db.execute(
                f"SELECT {_PLANT_COLUMNS} FROM plants WHERE id = ? AND user_id = ?",
                (plant_id, user_id),
            ).fetchone()
            return row_to_dict(row) if row else None

    @read_guard(list)
    def get_plants_by_user(self, user_id: int) -> List[Dict[str, Any]]:
        with self._backend.connection() as db:
            rows = db.execute(
                f"SELECT {_PLANT_COLUMNS} FROM plants WHERE user_id = ? ORDER BY name ASC, id ASC",
                (user_id,),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(list)
    def get_plants_by_location(self, user_id: int, location: str) -> List[Dict[str, Any]]:
        """Plants whose location contains ``location`` (case-insensitive)."""
        with self._backend.connection() as db:
            rows = db.execute(
                f"""
                SELECT {_PLANT_COLUMNS} FROM plants
                WHERE user_id = ? AND location LIKE ?
                ORDER BY name ASC, id ASC
                """,
                (user_id, f"%{location.strip()}%"),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @write_guard
    def update_plant(
        self,
        plant_id: int,
        user_id: int,
        *,
        name: str,
        species: str = "",
        acquisition_date: Optional[date] = None,
        location: str = "",
    ) -> bool:
        with self._backend.connection() as db:
            cursor = db.execute(
                """
                UPDATE plants
                SET name = ?, species = ?, acquisition_date = ?, location = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    name.strip(),
                    (species or "").strip(),
                    _iso(acquisition_date),
                    (location or "").strip(),
                    plant_id,
                    user_id,
                ),
            )
            if cursor.rowcount != 1:
                logger.warning("update_plant: plant %s not found for user %s", plant_id, user_id)
                return False
            return True

    @write_guard
    def delete_plant(self, plant_id: int, user_id: int) -> bool:
        """Delete a plant; its care records go with it (ON DELETE CASCADE)."""
        with self._backend.connection() as db:
            cursor = db.execute(
                "DELETE FROM plants WHERE id = ? AND user_id = ?",
                (plant_id, user_id),
            )
            if cursor.rowcount != 1:
                logger.warning("delete_plant: plant %s not found for user %s", plant_id, user_id)
                return False
            return True

    # Garden counters ----------------------------------------------------------
    @read_guard(0)
    def count_plants_by_user(self, user_id: int) -> int:
        with self._backend.connection() as db:
            row = db.execute(
                "SELECT COUNT(*) AS total FROM plants WHERE user_id = ?",
                (user_id,),
            ).fetchone()
            return int(row["total"]) if row else 0

    @read_guard(0)
    def get_total_locations(self, user_id: int) -> int:
        """Distinct non-empty locations."""
        with self._backend.connection() as db:
            row = db.execute(
                """
                SELECT COUNT(DISTINCT location) AS count
                FROM plants
                WHERE user_id = ? AND location IS NOT NULL AND location != ''
                """,
                (user_id,),
            ).fetchone()
            return int(row["count"]) if row else 0

    @read_guard(0)
    def get_healthy_plants_count(
        self,
        user_id: int,
        *,
        today: date,
        window_days: int = HEALTHY_WINDOW_DAYS,
    ) -> int:
        """Plants cared for within ``window_days`` or never cared for at all."""
        since = (today - timedelta(days=window_days)).isoformat()
        with self._backend.connection() as db:
            row = db.execute(
                """
                SELECT COUNT(DISTINCT p.id) AS count
                FROM plants p
                LEFT JOIN cares c ON c.plant_id = p.id
                WHERE p.user_id = ?
                  AND (c.care_date >= ? OR c.id IS NULL)
                """,
                (user_id, since),
            ).fetchone()
            return int(row["count"]) if row else 0

    @read_guard(0)
    def count_plants_with_due_care(self, user_id: int, *, today: date) -> int:
        """Plants with at least one care due on or before ``today``."""
        with self._backend.connection() as db:
            row = db.execute(
                """
                SELECT COUNT(DISTINCT p.id) AS count
                FROM plants p
                INNER JOIN cares c ON c.plant_id = p.id
                WHERE p.user_id = ?
                  AND c.next_maintenance_date IS NOT NULL
                  AND c.next_maintenance_date <= ?
                """,
                (user_id, today.isoformat()),
            ).fetchone()
            return int(row["count"]) if row else 0

    # Plant-level care signals -------------------------------------------------
    @read_guard(list)
    def get_plants_without_care(self, user_id: int) -> List[Dict[str, Any]]:
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT p.id, p.user_id, p.name, p.species, p.acquisition_date, p.location, p.created_at
                FROM plants p
                LEFT JOIN cares c ON c.plant_id = p.id
                WHERE p.user_id = ? AND c.id IS NULL
                ORDER BY p.name ASC, p.id ASC
                """,
                (user_id,),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(list)
    def get_plants_with_pending_care(
        self,
        user_id: int,
        *,
        today: date,
        horizon_days: int = PENDING_WINDOW_DAYS,
    ) -> List[Dict[str, Any]]:
        """
        One row per plant whose earliest scheduled care falls on or before
        ``today + horizon_days``, carrying that earliest date as
        ``next_care_date``. Earliest first.
        """
        horizon = (today + timedelta(days=horizon_days)).isoformat()
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT p.id, p.name, p.species, p.location,
                       MIN(c.next_maintenance_date) AS next_care_date
                FROM plants p
                INNER JOIN cares c ON c.plant_id = p.id
                WHERE p.user_id = ?
                  AND c.next_maintenance_date IS NOT NULL
                  AND c.next_maintenance_date <= ?
                GROUP BY p.id
                ORDER BY next_care_date ASC, p.id ASC
                """,
                (user_id, horizon),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(list)
    def get_recently_added_plants(self, user_id: int, limit: int = 5) -> List[Dict[str, Any]]:
        with self._backend.connection() as db:
            rows = db.execute(
                f"""
                SELECT {_PLANT_COLUMNS} FROM plants
                WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (user_id, max(0, int(limit))),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    # Garden stats -------------------------------------------------------------
    @read_guard(list)
    def get_plants_by_location_stats(self, user_id: int) -> List[Dict[str, Any]]:
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT location, COUNT(*) AS count
                FROM plants
                WHERE user_id = ?
                GROUP BY location
                ORDER BY count DESC, location ASC
                """,
                (user_id,),
            ).fetchall()
            return [row_to_dict(r) for r in rows]

    @read_guard(list)
    def get_top_species(self, user_id: int, limit: int = TOP_SPECIES_LIMIT) -> List[Dict[str, Any]]:
        with self._backend.connection() as db:
            rows = db.execute(
                """
                SELECT species, COUNT(*) AS count
                FROM plants
                WHERE user_id = ?
                GROUP BY species
                ORDER BY count DESC, species ASC
                LIMIT ?
                """,
                (user_id, max(0, int(limit))),
            ).fetchall()
            return [row_to_dict(r) for r in rows]
