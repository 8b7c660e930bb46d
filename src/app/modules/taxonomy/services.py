"""Category and tag service."""

from typing import Annotated

import structlog
from fastapi import Depends

from app.api.dependencies import DBSession
from app.modules.activity.models import ActivityType
from app.modules.activity.repos import ActivityLogRepository
from app.modules.taxonomy.models import Category, Tag
from app.modules.taxonomy.repos import CategoryRepository, TagRepository
from app.modules.teams.repos import TeamRepository
from app.modules.teams.services import TeamService
from app.modules.users.models import User


logger = structlog.get_logger()


class TaxonomyService:
    """Lists and creates categories and tags in the caller's team."""

    def __init__(self, db: DBSession) -> None:
        self.categories = CategoryRepository(db)
        self.tags = TagRepository(db)
        self.teams = TeamService(TeamRepository(db))
        self.activity = ActivityLogRepository(db)

    async def list_categories(self, user: User) -> list[Category]:
        team = await self.teams.require_team_for_user(user.id)
        return await self.categories.list_for_team(team.id)

    async def list_tags(self, user: User) -> list[Tag]:
        team = await self.teams.require_team_for_user(user.id)
        return await self.tags.list_for_team(team.id)

    async def create_category(
        self, name: str, user: User, ip_address: str | None = None
    ) -> Category:
        """Create a category in the caller's team.

        Raises:
            ForbiddenError: If the caller belongs to no team
        """
        team = await self.teams.require_team_for_user(user.id)
        category = await self.categories.create(name, team.id)
        await self.activity.record(
            team.id, user.id, ActivityType.CREATE_CATEGORY, ip_address
        )
        logger.info(
            "category_created",
            category_id=str(category.id),
            team_id=str(team.id),
        )
        return category

    async def create_tag(
        self, name: str, user: User, ip_address: str | None = None
    ) -> Tag:
        """Create a tag in the caller's team.

        Raises:
            ForbiddenError: If the caller belongs to no team
        """
        team = await self.teams.require_team_for_user(user.id)
        tag = await self.tags.create(name, team.id)
        await self.activity.record(team.id, user.id, ActivityType.CREATE_TAG, ip_address)
        logger.info("tag_created", tag_id=str(tag.id), team_id=str(team.id))
        return tag


# Type alias for dependency injection
TaxonomySvc = Annotated[TaxonomyService, Depends(TaxonomyService)]
