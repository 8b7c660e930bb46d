"""Pydantic schemas for user operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.auth.schemas import SessionToken
from app.core.constants import (
    MAX_PASSWORD_LENGTH,
    MAX_TEAM_NAME_LENGTH,
    MAX_USER_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from app.core.utils.text import sanitize_input


class UserSummary(BaseModel):
    """Minimal user projection safe to embed in other resources."""

    id: UUID
    name: str | None = None
    email: EmailStr

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    """Schema for the authenticated user's own profile."""

    created_at: datetime
    updated_at: datetime


# ============================================================
# Authentication Schemas
# ============================================================


class RegisterRequest(BaseModel):
    """Sign-up payload. Creates the user and a team they own."""

    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    name: str | None = Field(None, min_length=1, max_length=MAX_USER_NAME_LENGTH)
    team_name: str | None = Field(None, min_length=1, max_length=MAX_TEAM_NAME_LENGTH)

    @field_validator("name", "team_name", mode="before")
    @classmethod
    def strip_markup(cls, v: object) -> object:
        """Display names are stored as plain text."""
        return sanitize_input(v)


class LoginRequest(BaseModel):
    """Sign-in payload."""

    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class AuthResponse(SessionToken):
    """Session token plus the signed-in user."""

    user: UserResponse
