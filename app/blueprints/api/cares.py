"""Cares API
==========

Care records of the current user: CRUD, completion and the scheduling views
(pending, upcoming, recent activity, stats).
"""
from __future__ import annotations

import logging

from flask import Blueprint, Response

from app.blueprints.api._common import (
    fail as _fail,
    get_care_service,
    get_json,
    get_plant_service,
    get_user_id,
    query_int,
    success as _success,
)
from app.domain.exceptions import NotFoundError
from app.schemas import CompleteCareRequest, CreateCareRequest, UpdateCareRequest
from app.security.auth import api_login_required
from app.utils.http import error_response, safe_route

logger = logging.getLogger(__name__)

cares_api = Blueprint("cares_api", __name__)

SAVE_FAILED = "Could not save care record. Please try again."
MAX_WINDOW_DAYS = 365
MAX_RECENT_LIMIT = 100


@cares_api.errorhandler(405)
def method_not_allowed(error):
    return error_response("Method not allowed", 405)


@cares_api.get("")
@api_login_required
@safe_route("Failed to list cares")
def list_cares() -> Response:
    cares = get_care_service().find_by_user(get_user_id())
    return _success({"cares": cares, "count": len(cares)})


@cares_api.post("")
@api_login_required
@safe_route("Failed to record care")
def create_care() -> Response:
    user_id = get_user_id()
    body = CreateCareRequest(**get_json())
    if not get_plant_service().get_plant(body.plant_id, user_id):
        raise NotFoundError(f"Plant {body.plant_id} not found")
    created = get_care_service().create_care(
        user_id,
        body.plant_id,
        body.care_type,
        body.care_date,
        body.observations,
        schedule_next=body.schedule_next,
    )
    if not created:
        return _fail(SAVE_FAILED, 500)
    return _success(None, 201, message="Care recorded")


# --- Scheduling views --------------------------------------------------------


@cares_api.get("/pending")
@api_login_required
@safe_route("Failed to load pending cares")
def pending_cares() -> Response:
    """Overdue first, then due today, then upcoming within ``?horizon=`` days."""
    svc = get_care_service()
    horizon = query_int("horizon", svc.pending_horizon_days, maximum=MAX_WINDOW_DAYS)
    cares = svc.find_pending_for_user(get_user_id(), horizon)
    return _success({"cares": cares, "count": len(cares), "horizon_days": horizon})


@cares_api.get("/upcoming")
@api_login_required
@safe_route("Failed to load upcoming cares")
def upcoming_cares() -> Response:
    days = query_int("days", 7, maximum=MAX_WINDOW_DAYS)
    cares = get_care_service().find_upcoming(get_user_id(), days)
    return _success({"cares": cares, "count": len(cares), "days_ahead": days})


@cares_api.get("/recent")
@api_login_required
@safe_route("Failed to load recent activity")
def recent_activity() -> Response:
    limit = query_int("limit", 10, minimum=1, maximum=MAX_RECENT_LIMIT)
    activities = get_care_service().find_recent_activity(get_user_id(), limit)
    return _success({"activities": activities, "count": len(activities)})


@cares_api.get("/stats")
@api_login_required
@safe_route("Failed to load care stats")
def care_stats() -> Response:
    return _success(get_care_service().get_care_stats(get_user_id()))


# --- Single care ---------------------------------------------------------------


@cares_api.get("/<int:care_id>")
@api_login_required
@safe_route("Failed to get care")
def get_care(care_id: int) -> Response:
    care = get_care_service().get_care(care_id, get_user_id())
    if not care:
        return _fail(f"Care {care_id} not found", 404)
    return _success(care)


@cares_api.put("/<int:care_id>")
@api_login_required
@safe_route("Failed to update care")
def update_care(care_id: int) -> Response:
    user_id = get_user_id()
    body = UpdateCareRequest(**get_json())
    svc = get_care_service()
    if not svc.get_care(care_id, user_id):
        return _fail(f"Care {care_id} not found", 404)
    updated = svc.update_care(
        care_id,
        user_id,
        body.care_type,
        body.care_date,
        body.observations,
        schedule_next=body.schedule_next,
    )
    if not updated:
        return _fail(SAVE_FAILED, 500)
    return _success(svc.get_care(care_id, user_id))


@cares_api.delete("/<int:care_id>")
@api_login_required
@safe_route("Failed to delete care")
def delete_care(care_id: int) -> Response:
    if not get_care_service().delete_care(care_id, get_user_id()):
        return _fail(f"Care {care_id} not found", 404)
    return _success({"id": care_id}, message="Care deleted")


@cares_api.post("/<int:care_id>/complete")
@api_login_required
@safe_route("Failed to complete care")
def complete_care(care_id: int) -> Response:
    """Mark a care as done today and schedule its next occurrence."""
    user_id = get_user_id()
    body = CompleteCareRequest(**get_json())
    svc = get_care_service()
    if not svc.complete_care(care_id, user_id, body.note):
        # Missing, foreign and failed writes all look the same to the caller.
        return _fail(f"Care {care_id} not found", 404)
    return _success(svc.get_care(care_id, user_id), message="Care completed")
