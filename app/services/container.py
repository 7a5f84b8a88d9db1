from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from app.config import AppConfig
from app.services.application.auth_service import UserAuthManager
from app.services.application.care_service import CareService
from app.services.application.dashboard_service import DashboardService
from app.services.application.notifications_service import NotificationService
from app.services.application.plant_service import PlantService
from app.utils.time import local_now
from infrastructure.database.repositories.auth import AuthRepository
from infrastructure.database.repositories.cares import CareRepository
from infrastructure.database.repositories.plants import PlantRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    auth_repo: AuthRepository
    plant_repo: PlantRepository
    care_repo: CareRepository
    audit_logger: AuditLogger
    auth_manager: UserAuthManager
    care_service: CareService
    plant_service: PlantService
    notification_service: NotificationService
    dashboard_service: DashboardService

    @classmethod
    def build(
        cls,
        config: AppConfig,
        *,
        clock: Callable[[], datetime] = local_now,
    ) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
            clock: Source of "now" for every date-dependent view
        """
        logger.info("Building ServiceContainer...")

        audit_logger = AuditLogger(config.audit_log_path, config.log_level)
        database = SQLiteDatabaseHandler(config.database_path)
        database.init_app(None)

        auth_repo = AuthRepository(database)
        plant_repo = PlantRepository(database)
        care_repo = CareRepository(database)

        care_service = CareService(
            care_repo,
            audit_logger=audit_logger,
            clock=clock,
            pending_horizon_days=config.pending_horizon_days,
        )
        notification_service = NotificationService(care_service, plant_repo)
        container = cls(
            config=config,
            database=database,
            auth_repo=auth_repo,
            plant_repo=plant_repo,
            care_repo=care_repo,
            audit_logger=audit_logger,
            auth_manager=UserAuthManager(database, audit_logger=audit_logger, auth_repo=auth_repo),
            care_service=care_service,
            plant_service=PlantService(plant_repo, audit_logger=audit_logger),
            notification_service=notification_service,
            dashboard_service=DashboardService(
                care_service,
                plant_repo,
                notification_service,
                activity_limit=config.dashboard_activity_limit,
                healthy_window_days=config.healthy_window_days,
            ),
        )

        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        self.database.close_db()
        logger.info("ServiceContainer shutdown complete.")
