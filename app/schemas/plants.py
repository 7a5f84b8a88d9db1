"""
Plant Schemas
=============

Request schemas for plant endpoints.
"""

from datetime import date

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class CreatePlantRequest(BaseModel):
    """Request schema for creating a plant."""

    name: str = Field(..., min_length=1, max_length=100, description="Plant name")
    species: str = Field(default="", max_length=100, description="Species (free text)")
    acquisition_date: date | None = Field(default=None, description="Date the plant was acquired (YYYY-MM-DD)")
    location: str = Field(default="", max_length=100, description="Where the plant lives")

    @field_validator("name", "species", "location", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("acquisition_date")
    @classmethod
    def not_in_future(cls, v: date | None, info: ValidationInfo) -> date | None:
        # Callers pass the application clock's date as context["today"].
        today = (info.context or {}).get("today") or date.today()
        if v is not None and v > today:
            raise ValueError("acquisition_date cannot be in the future")
        return v


class UpdatePlantRequest(CreatePlantRequest):
    """Request schema for updating a plant (full replacement)."""
