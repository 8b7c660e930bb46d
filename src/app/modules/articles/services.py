"""Article service.

Every operation follows the same order: resolve the session (done by the
route dependency), load the target, then authorize. Missing targets are
reported before permission failures.
"""

from collections.abc import Iterable
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from app.api.dependencies import DBSession
from app.core.errors import NotFoundError, ValidationError
from app.core.permissions.checker import AccessChecker, AccessDecision, enforce
from app.modules.activity.models import ActivityType
from app.modules.activity.repos import ActivityLogRepository
from app.modules.articles.models import Article
from app.modules.articles.repos import ArticleRepository
from app.modules.articles.schemas import (
    ArticleCreate,
    ArticleDetail,
    ArticleListItem,
    ArticleUpdate,
)
from app.modules.taxonomy.repos import CategoryRepository, TagRepository
from app.modules.teams.repos import TeamRepository
from app.modules.teams.services import TeamService
from app.modules.users.models import User


logger = structlog.get_logger()


class ArticleService:
    """Business logic for articles."""

    def __init__(self, db: DBSession) -> None:
        self.articles = ArticleRepository(db)
        self.categories = CategoryRepository(db)
        self.tags = TagRepository(db)
        self.activity = ActivityLogRepository(db)
        team_repo = TeamRepository(db)
        self.teams = TeamService(team_repo)
        self.access = AccessChecker(team_repo)

    async def _get_or_404(self, article_id: UUID) -> Article:
        article = await self.articles.get_by_id(article_id)
        if article is None:
            raise NotFoundError(
                "Article not found",
                resource="article",
                resource_id=str(article_id),
            )
        return article

    async def _check_associations(
        self,
        team_id: UUID,
        tag_ids: Iterable[UUID] | None,
        category_ids: Iterable[UUID] | None,
    ) -> None:
        """Reject tag or category ids that are not in ``team_id``.

        Raises:
            ValidationError: Listing every unknown id per field
        """
        errors = []
        if tag_ids:
            wanted = set(tag_ids)
            unknown = wanted - await self.tags.existing_ids(wanted, team_id)
            if unknown:
                errors.append(
                    {
                        "field": "tag_ids",
                        "message": "Unknown tags: "
                        + ", ".join(sorted(str(i) for i in unknown)),
                    }
                )
        if category_ids:
            wanted = set(category_ids)
            unknown = wanted - await self.categories.existing_ids(wanted, team_id)
            if unknown:
                errors.append(
                    {
                        "field": "category_ids",
                        "message": "Unknown categories: "
                        + ", ".join(sorted(str(i) for i in unknown)),
                    }
                )
        if errors:
            raise ValidationError("Invalid article associations", errors=errors)

    # ============================================================
    # Reads
    # ============================================================

    async def list_for_user_team(self, user: User) -> list[ArticleListItem]:
        """Articles of the caller's team, most recently updated first.

        Raises:
            ForbiddenError: If the caller belongs to no team
        """
        team = await self.teams.require_team_for_user(user.id)
        return await self.articles.list_for_team(team.id)

    async def get_article(self, article_id: UUID, user: User | None) -> ArticleDetail:
        """The article aggregate, subject to the read policy.

        Raises:
            NotFoundError: If the article does not exist
            UnauthorizedError: If it is not public and there is no session
            ForbiddenError: If the caller is not a member of its team
        """
        article = await self._get_or_404(article_id)
        enforce(await self.access.can_read(article, user), "read")
        return await self.articles.get_detail(article)

    async def find_visible_article(
        self, article_id: UUID, user: User | None
    ) -> ArticleDetail | None:
        """Like ``get_article`` but collapses every failure into None."""
        article = await self.articles.get_by_id(article_id)
        if article is None:
            return None
        if await self.access.can_read(article, user) is not AccessDecision.ALLOW:
            return None
        return await self.articles.get_detail(article)

    # ============================================================
    # Writes
    # ============================================================

    async def require_writable(
        self, article_id: UUID, user: User, action: str = "update"
    ) -> Article:
        """Load an article the caller may modify.

        Raises:
            NotFoundError: If the article does not exist
            ForbiddenError: If the caller is neither the team owner nor the author
        """
        article = await self._get_or_404(article_id)
        enforce(await self.access.can_write(article, user), action)
        return article

    async def create_article(
        self, data: ArticleCreate, user: User, ip_address: str | None = None
    ) -> Article:
        """Create an article in ``data.team_id`` authored by ``user``.

        Raises:
            ForbiddenError: If the caller is not a member of the target team
            ValidationError: If a tag or category id is not in the team
        """
        enforce(await self.access.can_create(data.team_id, user), "create")
        await self._check_associations(data.team_id, data.tag_ids, data.category_ids)

        article = await self.articles.create(data, author_id=user.id, team_id=data.team_id)

        await self.activity.record(
            data.team_id, user.id, ActivityType.CREATE_ARTICLE, ip_address
        )
        logger.info(
            "article_created",
            article_id=str(article.id),
            team_id=str(article.team_id),
            status=article.status,
        )
        return article

    async def update_article(
        self,
        article_id: UUID,
        data: ArticleUpdate,
        user: User,
        ip_address: str | None = None,
    ) -> Article:
        """Apply a partial update, subject to the write policy.

        Raises:
            NotFoundError: If the article does not exist
            ForbiddenError: If the caller is neither the team owner nor the author
            ValidationError: If a tag or category id is not in the article's team
        """
        article = await self.require_writable(article_id, user, "update")
        await self._check_associations(article.team_id, data.tag_ids, data.category_ids)

        updated = await self.articles.update(article.id, data)
        if updated is None:
            raise NotFoundError(
                "Article not found",
                resource="article",
                resource_id=str(article_id),
            )

        await self.activity.record(
            updated.team_id, user.id, ActivityType.UPDATE_ARTICLE, ip_address
        )
        logger.info(
            "article_updated",
            article_id=str(updated.id),
            status=updated.status,
        )
        return updated

    async def delete_article(
        self, article_id: UUID, user: User, ip_address: str | None = None
    ) -> None:
        """Hard-delete an article, subject to the write policy.

        Raises:
            NotFoundError: If the article does not exist
            ForbiddenError: If the caller is neither the team owner nor the author
        """
        article = await self.require_writable(article_id, user, "delete")

        team_id = article.team_id
        await self.articles.delete(article.id)
        await self.activity.record(
            team_id, user.id, ActivityType.DELETE_ARTICLE, ip_address
        )
        logger.info("article_deleted", article_id=str(article_id), team_id=str(team_id))


# Type alias for dependency injection
ArticleSvc = Annotated[ArticleService, Depends(ArticleService)]
