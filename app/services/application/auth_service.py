"""
User Authentication Service
===========================
Manages user accounts with bcrypt hashing and audit logging.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import bcrypt

from app.domain.exceptions import ConflictError
from infrastructure.database.repositories.auth import AuthRepository
from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)


@dataclass
class UserAuthManager:
    """
    Manages user authentication with bcrypt hashing and audit logging.
    """

    database_handler: Any
    audit_logger: Optional[AuditLogger] = None
    # Optional injection for tests/composition; lazily initialized from database_handler.
    auth_repo: Optional[AuthRepository] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.auth_repo is None and self.database_handler is not None:
            self.auth_repo = AuthRepository(self.database_handler)

    def _repo(self) -> AuthRepository:
        if self.auth_repo is None:
            raise RuntimeError("AuthRepository is not configured")
        return self.auth_repo

    def _audit(self, actor: str, action: str, outcome: str, **metadata: Any) -> None:
        if self.audit_logger:
            self.audit_logger.log_event(actor=actor, action=action, resource="user", outcome=outcome, **metadata)

    def hash_password(self, password: str) -> str:
        """Hash the provided password using bcrypt."""
        salt = bcrypt.gensalt()
        hashed_password = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed_password.decode("utf-8")

    def check_password(self, stored_password: str, provided_password: str) -> bool:
        """Validate a plaintext password against the stored hash."""
        try:
            return bcrypt.checkpw(provided_password.encode("utf-8"), stored_password.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False

    def register_user(self, username: str, password: str, email: Optional[str] = None) -> Optional[int]:
        """
        Create an account and return its id.

        Raises:
            ConflictError: the username is already taken.
        """
        if self._repo().username_exists(username):
            logger.warning("Registration refused for '%s': username taken.", username)
            self._audit(username, "register", "conflict")
            raise ConflictError("Username is already taken", detail={"username": username})

        user_id = self._repo().create_user(username, self.hash_password(password), email)
        if user_id is None:
            logger.error("Error registering user '%s': repository rejected create", username)
            self._audit(username, "register", "error", error="create_failed")
            return None

        logger.info("User '%s' registered successfully.", username)
        self._audit(username, "register", "success", user_id=user_id)
        return user_id

    def authenticate_user(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """Return ``{id, username, email}`` for valid credentials, else None."""
        user = self._repo().get_user_auth_by_username(username)
        if not user:
            logger.warning("Authentication failed for user '%s': user not found.", username)
            self._audit(username, "login", "not_found")
            return None

        if not self.check_password(user["password_hash"], password):
            logger.warning("Authentication failed for user '%s': invalid credentials.", username)
            self._audit(username, "login", "denied")
            return None

        logger.info("User '%s' authenticated successfully.", username)
        self._audit(username, "login", "success")
        return {"id": user["id"], "username": user["username"], "email": user["email"]}

    def get_user(self, user_id: int) -> Optional[Dict[str, Any]]:
        return self._repo().get_user_by_id(user_id)

    def record_logout(self, user_id: int) -> None:
        self._audit(str(user_id), "logout", "success")
