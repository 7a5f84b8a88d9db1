"""
Configuration for LeafCare
==========================
Runtime settings loaded from ``LEAFCARE_*`` environment variables.
Sets up the logging configuration as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field, fields, replace
from datetime import timedelta
from typing import Any

from app.domain.exceptions import ConfigurationError


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer.") from None


DEFAULT_SECRET_KEY = "LeafCareDevSecretKey"


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("LEAFCARE_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("LEAFCARE_SECRET_KEY", DEFAULT_SECRET_KEY))
    database_path: str = field(default_factory=lambda: os.getenv("LEAFCARE_DATABASE_PATH", "database/leafcare.db"))

    # Session Configuration
    session_lifetime_minutes: int = field(default_factory=lambda: _env_int("LEAFCARE_SESSION_LIFETIME", 60 * 24))

    # Care scheduling windows
    pending_horizon_days: int = field(default_factory=lambda: _env_int("LEAFCARE_PENDING_HORIZON_DAYS", 7))
    healthy_window_days: int = field(default_factory=lambda: _env_int("LEAFCARE_HEALTHY_WINDOW_DAYS", 15))
    dashboard_activity_limit: int = field(default_factory=lambda: _env_int("LEAFCARE_DASHBOARD_ACTIVITY_LIMIT", 5))

    DEBUG: bool = field(default_factory=lambda: _env_bool("LEAFCARE_DEBUG", False))
    audit_log_path: str = field(default_factory=lambda: os.getenv("LEAFCARE_AUDIT_LOG_PATH", "logs/audit.log"))
    log_path: str = field(default_factory=lambda: os.getenv("LEAFCARE_LOG_PATH", "logs/leafcare.log"))
    log_level: str = field(default_factory=lambda: os.getenv("LEAFCARE_LOG_LEVEL", "INFO"))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # SECURITY: Fail fast if using default secret key in production
        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ConfigurationError(
                "SECURITY ERROR: Cannot use default secret key in production!\n"
                "Set LEAFCARE_SECRET_KEY environment variable to a secure random value.\n"
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )
        for name in ("pending_horizon_days", "healthy_window_days", "dashboard_activity_limit"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")
        if self.session_lifetime_minutes <= 0:
            raise ConfigurationError("session_lifetime_minutes must be positive")

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        if not self.secret_key:
            raise ConfigurationError(
                "Missing LEAFCARE_SECRET_KEY environment variable. "
                "Production systems must set an explicit secret key."
            )

        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "DATABASE_PATH": self.database_path,
            "AUDIT_LOG_PATH": self.audit_log_path,
            "DEBUG": self.DEBUG,
            "PERMANENT_SESSION_LIFETIME": timedelta(minutes=self.session_lifetime_minutes),
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Lax",
            "JSON_SORT_KEYS": False,
        }


def setup_logging(debug: bool = False, log_path: str = "logs/leafcare.log", level: str = "INFO") -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)

    # Root logger
    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "leafcare_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "leafcare_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8 so care icons do not break Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "leafcare_console"
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    # File handler
    if not has_file and log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "leafcare_file"
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"leafcare_console", "leafcare_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    if _env_bool("LEAFCARE_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config(overrides: dict[str, Any] | None = None) -> AppConfig:
    """Load configuration from the environment, then apply ``overrides``.

    Override keys match field names case-insensitively (``"DEBUG"`` and
    ``"debug"`` both set ``AppConfig.DEBUG``). Unknown keys raise
    :class:`ConfigurationError`, and overridden values go through the same
    validation as environment values.
    """
    config = AppConfig()
    if not overrides:
        return config

    names = {f.name.lower(): f.name for f in fields(AppConfig)}
    changes = {}
    for key, value in overrides.items():
        name = names.get(key.lower())
        if name is None:
            raise ConfigurationError(f"Unknown configuration key: {key}")
        changes[name] = value
    return replace(config, **changes)
