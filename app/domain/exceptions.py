"""Centralized exception hierarchy for LeafCare.

All domain and service exceptions inherit from :class:`LeafCareError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``app/utils/http.safe_route``) maps these
to the correct HTTP status codes automatically.

Hierarchy
---------
::

    LeafCareError (base, maps to 500)
    ├── ValidationError          (400: bad input from caller)
    ├── AuthenticationError      (401: no or invalid session)
    ├── NotFoundError            (404: missing, or owned by someone else)
    ├── ConflictError            (409: duplicate / state conflict)
    └── ConfigurationError       (500: missing / invalid config)
"""

from __future__ import annotations


class LeafCareError(Exception):
    """Base exception for all LeafCare application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client unless the exception class opts in).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(LeafCareError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class AuthenticationError(LeafCareError):
    """Request is not associated with a logged-in user (HTTP 401)."""

    http_status: int = 401


class NotFoundError(LeafCareError):
    """Requested entity does not exist or is not owned by the caller (HTTP 404).

    Both cases share this type so responses do not reveal whether a record
    belonging to another user exists.
    """

    http_status: int = 404


class ConflictError(LeafCareError):
    """Operation conflicts with existing state (HTTP 409)."""

    http_status: int = 409


# ── Server errors (5xx) ──────────────────────────────────────────────


class ConfigurationError(LeafCareError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500
