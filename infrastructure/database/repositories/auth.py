"""
Auth Repository
===============

Repository for user accounts. Keeps the SQL behind ``UserAuthManager`` in
the infrastructure layer.

Author: LeafCare Team
Date: February 2026
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from infrastructure.database.decorators import insert_guard, read_guard
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

logger = logging.getLogger(__name__)


class AuthRepository:
    """Repository for user-authentication database operations."""

    def __init__(self, backend: SQLiteDatabaseHandler) -> None:
        """
        Args:
            backend: Database handler exposing the ``connection()`` context
                     manager (SQLiteDatabaseHandler).
        """
        self._backend = backend

    # ------------------------------------------------------------------
    # User lookup
    # ------------------------------------------------------------------

    @insert_guard
    def create_user(self, username: str, password_hash: str, email: Optional[str] = None) -> Optional[int]:
        """Create a user account. Returns the new user id, or *None*."""
        with self._backend.connection() as db:
            cursor = db.execute(
                "INSERT INTO users (username, password_hash, email) VALUES (?, ?, ?)",
                (username.strip(), password_hash, email.lower().strip() if email else None),
            )
            return cursor.lastrowid

    @read_guard(False)
    def username_exists(self, username: str) -> bool:
        with self._backend.connection() as db:
            row = db.execute(
                "SELECT 1 FROM users WHERE username = ?",
                (username.strip(),),
            ).fetchone()
            return row is not None

    @read_guard(None)
    def get_user_auth_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """Return ``{id, username, password_hash, email}`` or *None*."""
        with self._backend.connection() as db:
            row = db.execute(
                "SELECT id, username, password_hash, email FROM users WHERE username = ?",
                (username.strip(),),
            ).fetchone()
            if not row:
                return None
            return {
                "id": row["id"],
                "username": row["username"],
                "password_hash": row["password_hash"],
                "email": row["email"],
            }

    @read_guard(None)
    def get_user_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        """Return ``{id, username, email, created_at}`` or *None*."""
        with self._backend.connection() as db:
            row = db.execute(
                "SELECT id, username, email, created_at FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
            if row:
                return {
                    "id": row["id"],
                    "username": row["username"],
                    "email": row["email"],
                    "created_at": row["created_at"],
                }
            return None
