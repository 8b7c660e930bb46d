"""Article database models and association tables."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import MAX_EXCERPT_LENGTH, MAX_STATUS_LENGTH, MAX_TITLE_LENGTH
from app.core.database.base import Base, TeamMixin, TimestampMixin, UUIDMixin


class ArticleStatus(StrEnum):
    """Publication state of an article."""

    DRAFT = "draft"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"


class Article(Base, UUIDMixin, TimestampMixin, TeamMixin):
    """A piece of team content.

    ``team_id`` and ``author_id`` are fixed at creation. ``published_at`` is
    set on the first transition into ``published`` and never cleared, so it
    is non-null exactly when the article has ever been published.
    """

    __tablename__ = "articles"
    __table_args__ = (
        Index("ix_articles_team_id_updated_at", "team_id", "updated_at"),
        Index("ix_articles_team_id_slug", "team_id", "slug"),
    )

    author_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(String(MAX_EXCERPT_LENGTH), nullable=True)
    status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        nullable=False,
        default=ArticleStatus.DRAFT,
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def is_public(self) -> bool:
        """Published articles are readable without a session."""
        return self.status == ArticleStatus.PUBLISHED

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug={self.slug}, status={self.status})>"


class ArticleTag(Base):
    """Join row linking an article to a tag. Owned by the article."""

    __tablename__ = "article_tags"

    article_id: Mapped[UUID] = mapped_column(
        ForeignKey("articles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[UUID] = mapped_column(
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )


class ArticleCategory(Base):
    """Join row linking an article to a category. Owned by the article."""

    __tablename__ = "article_categories"

    article_id: Mapped[UUID] = mapped_column(
        ForeignKey("articles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
