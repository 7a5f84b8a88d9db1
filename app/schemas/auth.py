"""
Auth Schemas
============

Request schemas for account endpoints.
"""

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


class RegisterRequest(BaseModel):
    """Request schema for creating an account."""

    username: str = Field(..., min_length=3, max_length=50, description="Unique user name")
    password: str = Field(..., min_length=8, max_length=128, description="Plain password, stored as a bcrypt hash")
    email: str | None = Field(default=None, max_length=254, description="Optional e-mail address")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("username must have at least 3 characters")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("email is not a valid address")
        return v
