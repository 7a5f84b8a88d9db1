"""
Blueprint Common Utilities
==========================

Shared helper functions for all API blueprints.
Import these instead of duplicating helper code in each blueprint.

Usage:
    from app.blueprints.api._common import (
        get_container, get_json, success, fail,
        get_care_service, get_user_id, ...
    )

This module centralizes:
- Service container access
- Request JSON and query parsing
- Standardized response helpers
- Common service accessors
"""
from __future__ import annotations

import logging
from typing import Optional

from flask import current_app, request

from app.domain.exceptions import AuthenticationError, ValidationError
from app.security.auth import current_user_id
from app.utils.http import error_response, success_response

logger = logging.getLogger("api._common")

# ============================================================================
# User Session Utilities
# ============================================================================


def get_user_id() -> int:
    """Get current user ID from session; every service call receives it explicitly."""
    user_id = current_user_id()
    if user_id is None:
        raise AuthenticationError("Authentication required")
    return user_id

# ============================================================================
# CONTAINER ACCESS
# ============================================================================


def get_container():
    """
    Get the service container from Flask app config.

    Returns:
        ServiceContainer: The application service container

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


# ============================================================================
# REQUEST HELPERS
# ============================================================================


def get_json() -> dict:
    """
    Get JSON request body with silent failure.

    Returns:
        dict: Parsed JSON body or empty dict if not available

    Raises:
        ValidationError: If the body is JSON but not an object
    """
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def query_int(name: str, default: int, *, minimum: int = 0, maximum: Optional[int] = None) -> int:
    """
    Read an integer query parameter.

    Raises:
        ValidationError: If the value is not an integer or is out of range
    """
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be an integer") from None
    if value < minimum or (maximum is not None and value > maximum):
        bound = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
        raise ValidationError(f"Query parameter '{name}' must be {bound}")
    return value


# ============================================================================
# RESPONSE HELPERS
# ============================================================================


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """
    Standard success response wrapper.

    Returns:
        Flask Response with format: {"ok": true, "data": ..., "error": null}
    """
    return success_response(data, status, message=message)


def fail(message: str, status: int = 400, *, details: dict | None = None):
    """
    Standard error response wrapper.

    Returns:
        Flask Response with format: {"ok": false, "data": null, "error": {...}}
    """
    return error_response(message, status, details=details)


# ============================================================================
# SERVICE ACCESSORS
# ============================================================================


def get_care_service():
    """
    Get care service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "care_service", None):
        raise RuntimeError("Care service not available")
    return container.care_service


def get_plant_service():
    """
    Get plant service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "plant_service", None):
        raise RuntimeError("Plant service not available")
    return container.plant_service


def get_notification_service():
    container = get_container()
    if not getattr(container, "notification_service", None):
        raise RuntimeError("Notification service not available")
    return container.notification_service


def get_dashboard_service():
    container = get_container()
    if not getattr(container, "dashboard_service", None):
        raise RuntimeError("Dashboard service not available")
    return container.dashboard_service
