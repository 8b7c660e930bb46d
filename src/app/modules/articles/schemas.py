"""Pydantic schemas for articles.

Request schemas carry the validation contract (lengths, status values).
Free-text fields are stripped of markup before the length checks run.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import (
    MAX_EXCERPT_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_CONTENT_LENGTH,
    MIN_TITLE_LENGTH,
)
from app.core.utils.text import sanitize_input
from app.modules.articles.models import ArticleStatus
from app.modules.taxonomy.schemas import CategoryResponse, TagResponse
from app.modules.users.schemas import UserSummary


# ============================================================
# Requests
# ============================================================


class ArticleCreate(BaseModel):
    """Payload for creating an article in ``team_id``."""

    title: str = Field(..., min_length=MIN_TITLE_LENGTH, max_length=MAX_TITLE_LENGTH)
    content: str = Field(..., min_length=MIN_CONTENT_LENGTH)
    excerpt: str | None = Field(None, max_length=MAX_EXCERPT_LENGTH)
    status: ArticleStatus = ArticleStatus.DRAFT
    tag_ids: list[UUID] | None = None
    category_ids: list[UUID] | None = None
    team_id: UUID

    @field_validator("title", "content", "excerpt", mode="before")
    @classmethod
    def strip_markup(cls, v: object) -> object:
        """Sanitize free text before the length constraints apply."""
        return sanitize_input(v)


class ArticleUpdate(BaseModel):
    """Partial update. ``None`` means "leave unchanged".

    For ``tag_ids`` and ``category_ids`` an empty list is not the same as
    ``None``: an empty list removes every association, ``None`` keeps them.
    """

    title: str | None = Field(None, min_length=MIN_TITLE_LENGTH, max_length=MAX_TITLE_LENGTH)
    content: str | None = Field(None, min_length=MIN_CONTENT_LENGTH)
    excerpt: str | None = Field(None, max_length=MAX_EXCERPT_LENGTH)
    status: ArticleStatus | None = None
    tag_ids: list[UUID] | None = None
    category_ids: list[UUID] | None = None

    @field_validator("title", "content", "excerpt", mode="before")
    @classmethod
    def strip_markup(cls, v: object) -> object:
        """Sanitize free text before the length constraints apply."""
        return sanitize_input(v)


# ============================================================
# Responses
# ============================================================


class ArticleResponse(BaseModel):
    """A persisted article row."""

    id: UUID
    team_id: UUID
    author_id: UUID
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    status: ArticleStatus
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ArticleListItem(BaseModel):
    """Row of the team article list with the author's name denormalized."""

    id: UUID
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    status: ArticleStatus
    author_id: UUID
    author_name: str | None = None
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None


class ArticleDetail(ArticleResponse):
    """The full article aggregate: row, author projection and associations."""

    author: UserSummary | None = None
    tags: list[TagResponse] = []
    categories: list[CategoryResponse] = []


class SuccessResponse(BaseModel):
    success: bool = True


class ArticleCreateResponse(SuccessResponse):
    article: ArticleResponse
