"""
Shared test fixtures for the LeafCare test suite.

Provides:
- In-memory SQLite database with all tables created
- Repository instances wired to the test database
- A fixed clock so date-dependent views are deterministic
- Service factories for the application services
- A Flask app (pytest-flask picks up the ``app`` fixture for ``client``)
- Helper utilities for seeding test data

Usage:
    def test_example(seed, care_repo, today):
        user_id = seed.create_user("alice")
        plant_id = seed.create_plant(user_id, "Fern")
        seed.create_care(plant_id, "Water", care_date=today, next_date=today)
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any
from unittest.mock import MagicMock

import pytest

from infrastructure.database.repositories.auth import AuthRepository
from infrastructure.database.repositories.cares import CareRepository
from infrastructure.database.repositories.plants import PlantRepository

# ---------------------------------------------------------------------------
# Database & Repositories
# ---------------------------------------------------------------------------
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)

FIXED_NOW = datetime(2024, 6, 15, 10, 0, 0).astimezone()


# ========================== Clock Fixtures =================================


@pytest.fixture()
def fixed_now() -> datetime:
    """Aware local datetime every service sees as "now"."""
    return FIXED_NOW


@pytest.fixture()
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture()
def clock(fixed_now):
    return lambda: fixed_now


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler():
    """In-memory SQLite database with all tables created.

    Each test gets a fresh database, no cross-test contamination.
    """
    handler = SQLiteDatabaseHandler(":memory:")
    handler.create_tables()
    yield handler


@pytest.fixture()
def db_connection(db_handler):
    """Raw sqlite3 connection for direct SQL in tests."""
    with db_handler.connection() as conn:
        yield conn


# ========================== Repository Fixtures ============================


@pytest.fixture()
def auth_repo(db_handler):
    return AuthRepository(db_handler)


@pytest.fixture()
def plant_repo(db_handler):
    """PlantRepository backed by the in-memory DB."""
    return PlantRepository(db_handler)


@pytest.fixture()
def care_repo(db_handler):
    """CareRepository backed by the in-memory DB."""
    return CareRepository(db_handler)


# ========================== Mock Service Fixtures ==========================


@pytest.fixture()
def mock_audit_logger():
    """Mock AuditLogger."""
    logger = MagicMock()
    logger.log_event = MagicMock()
    return logger


# ========================== Service Factory Fixtures =======================


@pytest.fixture()
def care_service(care_repo, clock, mock_audit_logger):
    from app.services.application.care_service import CareService

    return CareService(care_repo, audit_logger=mock_audit_logger, clock=clock)


@pytest.fixture()
def plant_service(plant_repo, mock_audit_logger):
    from app.services.application.plant_service import PlantService

    return PlantService(plant_repo, audit_logger=mock_audit_logger)


@pytest.fixture()
def notification_service(care_service, plant_repo):
    from app.services.application.notifications_service import NotificationService

    return NotificationService(care_service, plant_repo)


@pytest.fixture()
def dashboard_service(care_service, plant_repo, notification_service):
    from app.services.application.dashboard_service import DashboardService

    return DashboardService(care_service, plant_repo, notification_service)


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(tmp_path, clock):
    """Application bound to a throwaway database file and log directory."""
    from app import create_app

    flask_app = create_app(
        {
            "database_path": str(tmp_path / "leafcare.db"),
            "audit_log_path": str(tmp_path / "logs" / "audit.log"),
            "log_path": str(tmp_path / "logs" / "leafcare.log"),
            "secret_key": "test-secret",
        },
        clock=clock,
    )
    flask_app.config["TESTING"] = True
    try:
        yield flask_app
    finally:
        flask_app.config["CONTAINER"].shutdown()


@pytest.fixture()
def container(app):
    return app.config["CONTAINER"]


@pytest.fixture()
def login_as():
    """``login_as(client, user_id, username)`` puts a user in the test client's session."""

    def _login(client, user_id: int, username: str = "alice") -> None:
        with client.session_transaction() as session_obj:
            session_obj["user"] = username
            session_obj["user_id"] = user_id

    return _login


# ========================== Seed Data Helpers ==============================


class SeedData:
    """Helper to create commonly needed test data.

    Usage in tests::

        def test_something(seed, today):
            user_id = seed.create_user("alice")
            plant_id = seed.create_plant(user_id, "Fern", location="Balcony")
            seed.create_care(plant_id, "Water", care_date=today, next_date=today)
    """

    def __init__(self, db_handler: SQLiteDatabaseHandler):
        self._db = db_handler

    def create_user(self, username: str = "alice") -> int:
        """Create a user and return its ID (the hash is not a usable bcrypt hash)."""
        with self._db.connection() as conn:
            cur = conn.execute(
                "INSERT INTO users (username, password_hash) VALUES (?, ?)",
                (username, "not-a-hash"),
            )
            return cur.lastrowid

    def create_plant(
        self,
        user_id: int,
        name: str = "Fern",
        *,
        species: str = "",
        location: str = "",
        created_at: str | None = None,
    ) -> int:
        """Create a plant and return its ID."""
        with self._db.connection() as conn:
            if created_at is None:
                cur = conn.execute(
                    "INSERT INTO plants (user_id, name, species, location) VALUES (?, ?, ?, ?)",
                    (user_id, name, species, location),
                )
            else:
                cur = conn.execute(
                    "INSERT INTO plants (user_id, name, species, location, created_at) VALUES (?, ?, ?, ?, ?)",
                    (user_id, name, species, location, created_at),
                )
            return cur.lastrowid

    def create_care(
        self,
        plant_id: int,
        care_type: str = "Water",
        *,
        care_date: date | str,
        next_date: date | str | None = None,
        observations: str = "",
    ) -> int:
        """Insert a care row as-is (no canonicalisation, no derived due date)."""

        def _text(value: Any) -> Any:
            return value.isoformat() if isinstance(value, date) else value

        with self._db.connection() as conn:
            cur = conn.execute(
                """INSERT INTO cares (plant_id, care_type, care_date, observations, next_maintenance_date)
                   VALUES (?, ?, ?, ?, ?)""",
                (plant_id, care_type, _text(care_date), observations, _text(next_date)),
            )
            return cur.lastrowid

    def care_row(self, care_id: int) -> dict[str, Any] | None:
        with self._db.connection() as conn:
            row = conn.execute("SELECT * FROM cares WHERE id = ?", (care_id,)).fetchone()
            return dict(row) if row else None


@pytest.fixture()
def seed(db_handler):
    """SeedData helper for quickly populating the test database."""
    return SeedData(db_handler)


@pytest.fixture()
def days(today):
    """``days(n)`` is ``today + n`` days."""
    return lambda n: today + timedelta(days=n)
