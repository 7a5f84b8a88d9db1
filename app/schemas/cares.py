"""
Care Schemas
============

Request schemas for care endpoints.

``care_type`` is deliberately lenient: any value is accepted here and
canonicalised by the care type registry, with unknown values falling back
to watering.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class CareDetails(BaseModel):
    """Fields shared by create and update."""

    care_type: Any = Field(default=None, description="Care type, e.g. Water, Fertilize, Prune, Repot, CleanLeaves")
    care_date: date = Field(..., description="Date the care was performed (YYYY-MM-DD)")
    observations: str = Field(default="", max_length=2000, description="Free-text notes")
    schedule_next: bool = Field(default=True, description="Schedule the next occurrence of this care")


class CreateCareRequest(CareDetails):
    """Request schema for recording a care event."""

    plant_id: int = Field(..., gt=0, description="Plant ID")


class UpdateCareRequest(CareDetails):
    """Request schema for updating a care event."""


class CompleteCareRequest(BaseModel):
    """Request schema for marking a care as done today."""

    note: str = Field(default="", max_length=500, description="Optional completion note")
