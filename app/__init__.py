from __future__ import annotations

import atexit
import logging
from datetime import datetime
from typing import Any, Callable

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.cares import cares_api
from app.blueprints.api.dashboard import dashboard_api
from app.blueprints.api.plants import plants_api
from app.blueprints.auth.routes import auth_bp
from app.config import load_config, setup_logging
from app.domain.exceptions import LeafCareError
from app.utils.http import error_response, safe_error


def create_app(
    config_overrides: dict[str, Any] | None = None,
    *,
    clock: Callable[[], datetime] | None = None,
) -> Flask:
    config = load_config(config_overrides)

    # Configure logging early so container startup is visible in the terminal and leafcare.log.
    setup_logging(debug=config.DEBUG, log_path=config.log_path, level=config.log_level)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from app.services.container import ServiceContainer

    if clock is None:
        container = ServiceContainer.build(config)
    else:
        container = ServiceContainer.build(config, clock=clock)
    flask_app.config["CONTAINER"] = container

    # Each request gets a fresh connection; close it on teardown.
    flask_app.teardown_appcontext(container.database.close_db)
    atexit.register(container.shutdown)

    # Global JSON error handler: catches any unhandled exception on /api/
    # and /auth/ routes and returns a generic message instead of leaking
    # stack traces. Domain exceptions carry their own ``http_status``.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith(("/api/", "/auth/")):
            raise exc

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, LeafCareError):
            status = exc.http_status
            if status >= 500:
                return safe_error(exc, status, context=type(exc).__name__)
            # 4xx: surface the message; it was written for the caller.
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    @flask_app.errorhandler(413)
    def _handle_too_large(_exc):
        return error_response("Request payload too large", 413)

    flask_app.register_blueprint(auth_bp, url_prefix="/auth")
    flask_app.register_blueprint(plants_api, url_prefix="/api/plants")
    flask_app.register_blueprint(cares_api, url_prefix="/api/cares")
    flask_app.register_blueprint(dashboard_api, url_prefix="/api/dashboard")

    for bp_name in flask_app.blueprints:
        logging.info(" Registered blueprint: %s", bp_name)

    logging.getLogger(__name__).info("LeafCare application initialized successfully.")
    return flask_app


__all__ = ["create_app"]
