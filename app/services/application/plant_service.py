"""
Plant Service
=============
Application-level service for a user's plants.

Plants are always looked up together with their owner: a plant that belongs
to somebody else is reported exactly like a plant that does not exist.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from app.utils.time import format_display_date
from infrastructure.database.repositories.plants import PlantRepository
from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)


class PlantService:
    """CRUD over plants, scoped to the requesting user."""

    def __init__(self, plant_repo: PlantRepository, *, audit_logger: Optional[AuditLogger] = None) -> None:
        if plant_repo is None:
            raise ValueError("plant_repo is required - PlantRepository must be provided")
        self.plant_repo = plant_repo
        self.audit_logger = audit_logger

    def list_plants(self, user_id: int, location: Optional[str] = None) -> List[Dict[str, Any]]:
        if location:
            rows = self.plant_repo.get_plants_by_location(user_id, location)
        else:
            rows = self.plant_repo.get_plants_by_user(user_id)
        return [self._view(r) for r in rows]

    def get_plant(self, plant_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        row = self.plant_repo.get_plant(plant_id, user_id)
        return self._view(row) if row else None

    def create_plant(
        self,
        user_id: int,
        *,
        name: str,
        species: str = "",
        acquisition_date: Optional[date] = None,
        location: str = "",
    ) -> Optional[int]:
        return self.plant_repo.create_plant(
            user_id,
            name=name,
            species=species,
            acquisition_date=acquisition_date,
            location=location,
        )

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
        return self.plant_repo.update_plant(
            plant_id,
            user_id,
            name=name,
            species=species,
            acquisition_date=acquisition_date,
            location=location,
        )

    def delete_plant(self, plant_id: int, user_id: int) -> bool:
        """Delete a plant together with its care history."""
        deleted = self.plant_repo.delete_plant(plant_id, user_id)
        if self.audit_logger:
            self.audit_logger.log_event(
                actor=str(user_id),
                action="delete",
                resource=f"plant:{plant_id}",
                outcome="success" if deleted else "failed",
            )
        return deleted

    @staticmethod
    def _view(row: Dict[str, Any]) -> Dict[str, Any]:
        return {**row, "formatted_acquisition_date": format_display_date(row.get("acquisition_date"))}
