"""Category and tag database models.

Both are plain named entities scoped to a team. Names are not unique
within a team.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import MAX_TAXONOMY_NAME_LENGTH
from app.core.database.base import Base, CreatedAtMixin, TeamMixin, UUIDMixin


class Category(Base, UUIDMixin, CreatedAtMixin, TeamMixin):
    """A team-scoped article category."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(MAX_TAXONOMY_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(String(MAX_TAXONOMY_NAME_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name}, team_id={self.team_id})>"


class Tag(Base, UUIDMixin, CreatedAtMixin, TeamMixin):
    """A team-scoped article tag."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(MAX_TAXONOMY_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(String(MAX_TAXONOMY_NAME_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name}, team_id={self.team_id})>"
