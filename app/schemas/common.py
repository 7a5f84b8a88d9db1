"""
Common Schemas
==============

Shared Pydantic models describing the response envelope.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success response format"""

    ok: bool = Field(default=True, description="Request success status")
    data: T = Field(..., description="Response data")
    error: None = Field(default=None, description="Always null on success")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": True,
                "data": {"id": 1, "name": "Fern"},
                "error": None,
            }
        }
    )


class ErrorBody(BaseModel):
    message: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Standard error response format"""

    ok: bool = Field(default=False, description="Request success status")
    data: Any | None = Field(default=None, description="Data (null on error)")
    error: ErrorBody = Field(..., description="Error message and timestamp")
    message: str = Field(..., description="Error message")
