"""Category and tag repositories."""

from collections.abc import Iterable
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import select

from app.api.dependencies import DBSession
from app.core.utils.text import generate_slug
from app.modules.taxonomy.models import Category, Tag


T = TypeVar("T", Category, Tag)


class _NamedEntityRepository(Generic[T]):
    """Shared CRUD for team-scoped named entities."""

    model: type[T]

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_for_team(self, team_id: UUID) -> list[T]:
        """All entities of a team, alphabetically."""
        stmt = (
            select(self.model)
            .where(self.model.team_id == team_id)
            .order_by(self.model.name, self.model.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, name: str, team_id: UUID) -> T:
        """Create an entity, deriving its slug from the name.

        Duplicate names within a team are accepted.
        """
        entity = self.model(name=name, slug=generate_slug(name), team_id=team_id)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def existing_ids(self, ids: Iterable[UUID], team_id: UUID) -> set[UUID]:
        """The subset of ``ids`` that belong to ``team_id``."""
        wanted = set(ids)
        if not wanted:
            return set()
        stmt = select(self.model.id).where(
            self.model.id.in_(wanted),
            self.model.team_id == team_id,
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())


class CategoryRepository(_NamedEntityRepository[Category]):
    """Repository for categories."""

    model = Category


class TagRepository(_NamedEntityRepository[Tag]):
    """Repository for tags."""

    model = Tag
