"""
Schemas Module
==============

This module provides Pydantic models for request/response validation.
Schemas ensure data integrity and provide automatic validation.
"""

from app.schemas.auth import LoginRequest, RegisterRequest
from app.schemas.cares import CompleteCareRequest, CreateCareRequest, UpdateCareRequest
from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.plants import CreatePlantRequest, UpdatePlantRequest

__all__ = [
    # Common
    "SuccessResponse",
    "ErrorResponse",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    # Plants
    "CreatePlantRequest",
    "UpdatePlantRequest",
    # Cares
    "CreateCareRequest",
    "UpdateCareRequest",
    "CompleteCareRequest",
]
