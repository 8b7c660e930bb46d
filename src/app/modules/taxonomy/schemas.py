"""Pydantic schemas for categories and tags."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import MAX_TAXONOMY_NAME_LENGTH, MIN_TAXONOMY_NAME_LENGTH
from app.core.utils.text import sanitize_input


class NamedEntityCreate(BaseModel):
    """Payload for creating a category or tag."""

    name: str = Field(
        ..., min_length=MIN_TAXONOMY_NAME_LENGTH, max_length=MAX_TAXONOMY_NAME_LENGTH
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_markup(cls, v: object) -> object:
        return sanitize_input(v)


class CategoryResponse(BaseModel):
    id: UUID
    team_id: UUID
    name: str
    slug: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TagResponse(BaseModel):
    id: UUID
    team_id: UUID
    name: str
    slug: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryCreateResponse(BaseModel):
    success: bool = True
    category: CategoryResponse


class TagCreateResponse(BaseModel):
    success: bool = True
    tag: TagResponse
