"""
Plant CRUD Operations
=====================

Endpoints for creating, reading, updating, and deleting the current user's
plants. A plant owned by another user answers 404, like a missing one.
"""

from __future__ import annotations

import logging

from flask import Response, request

from app.blueprints.api._common import (
    fail as _fail,
    get_care_service as _care_service,
    get_dashboard_service as _dashboard_service,
    get_json,
    get_plant_service as _plant_service,
    get_user_id,
    success as _success,
)
from app.schemas import CreatePlantRequest, UpdatePlantRequest
from app.security.auth import api_login_required
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.crud")


# ============================================================================
# PLANT CRUD OPERATIONS
# ============================================================================


@plants_api.get("")
@api_login_required
@safe_route("Failed to list plants")
def list_plants() -> Response:
    """List the user's plants, optionally filtered by ``?location=``."""
    plants = _plant_service().list_plants(get_user_id(), request.args.get("location"))
    return _success({"plants": plants, "count": len(plants)})


@plants_api.post("")
@api_login_required
@safe_route("Failed to add plant")
def create_plant() -> Response:
    user_id = get_user_id()
    body = CreatePlantRequest.model_validate(get_json(), context={"today": _care_service().today()})

    plant_id = _plant_service().create_plant(
        user_id,
        name=body.name,
        species=body.species,
        acquisition_date=body.acquisition_date,
        location=body.location,
    )
    if plant_id is None:
        logger.error("Failed to create plant for user %s", user_id)
        return _fail("Could not save plant. Please try again.", 500)

    return _success(_plant_service().get_plant(plant_id, user_id), 201)


@plants_api.get("/stats")
@api_login_required
@safe_route("Failed to load garden stats")
def garden_stats() -> Response:
    return _success(_dashboard_service().get_garden_stats(get_user_id()))


@plants_api.get("/<int:plant_id>")
@api_login_required
@safe_route("Failed to get plant")
def get_plant(plant_id: int) -> Response:
    plant = _plant_service().get_plant(plant_id, get_user_id())
    if not plant:
        return _fail(f"Plant {plant_id} not found", 404)
    return _success(plant)


@plants_api.put("/<int:plant_id>")
@api_login_required
@safe_route("Failed to update plant")
def update_plant(plant_id: int) -> Response:
    user_id = get_user_id()
    body = UpdatePlantRequest.model_validate(get_json(), context={"today": _care_service().today()})

    if not _plant_service().get_plant(plant_id, user_id):
        return _fail(f"Plant {plant_id} not found", 404)

    updated = _plant_service().update_plant(
        plant_id,
        user_id,
        name=body.name,
        species=body.species,
        acquisition_date=body.acquisition_date,
        location=body.location,
    )
    if not updated:
        return _fail("Could not save plant. Please try again.", 500)
    return _success(_plant_service().get_plant(plant_id, user_id))


@plants_api.delete("/<int:plant_id>")
@api_login_required
@safe_route("Failed to delete plant")
def delete_plant(plant_id: int) -> Response:
    user_id = get_user_id()
    if not _plant_service().get_plant(plant_id, user_id):
        return _fail(f"Plant {plant_id} not found", 404)
    if not _plant_service().delete_plant(plant_id, user_id):
        return _fail("Could not delete plant. Please try again.", 500)
    return _success({"id": plant_id}, message="Plant deleted")


@plants_api.get("/<int:plant_id>/cares")
@api_login_required
@safe_route("Failed to list plant cares")
def list_plant_cares(plant_id: int) -> Response:
    """Care history of one plant, newest first."""
    user_id = get_user_id()
    plant = _plant_service().get_plant(plant_id, user_id)
    if not plant:
        return _fail(f"Plant {plant_id} not found", 404)
    cares = _care_service().find_by_plant(plant_id, user_id)
    return _success({"plant": plant, "cares": cares, "count": len(cares)})
