"""Article repository.

Owns slug derivation, excerpt defaulting, the publish timestamp rule and
the association replacement semantics. Authorization happens one layer up.
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, select

from app.api.dependencies import DBSession
from app.core.constants import MAX_EXCERPT_LENGTH
from app.core.database import utcnow
from app.core.utils.text import generate_slug, truncate
from app.modules.articles.models import (
    Article,
    ArticleCategory,
    ArticleStatus,
    ArticleTag,
)
from app.modules.articles.schemas import (
    ArticleCreate,
    ArticleDetail,
    ArticleListItem,
    ArticleUpdate,
)
from app.modules.taxonomy.models import Category, Tag
from app.modules.taxonomy.schemas import CategoryResponse, TagResponse
from app.modules.users.models import User
from app.modules.users.schemas import UserSummary


def _unique(ids: Iterable[UUID]) -> list[UUID]:
    return list(dict.fromkeys(ids))


class ArticleRepository:
    """Repository for Article database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    # ============================================================
    # Reads
    # ============================================================

    async def get_by_id(self, article_id: UUID) -> Article | None:
        """Load an article row with no authorization applied."""
        result = await self.session.execute(
            select(Article).where(Article.id == article_id)
        )
        return result.scalar_one_or_none()

    async def list_for_team(self, team_id: UUID) -> list[ArticleListItem]:
        """A team's articles, most recently updated first, with author names."""
        stmt = (
            select(
                Article.id,
                Article.title,
                Article.slug,
                Article.content,
                Article.excerpt,
                Article.status,
                Article.author_id,
                User.name.label("author_name"),
                Article.created_at,
                Article.updated_at,
                Article.published_at,
            )
            .outerjoin(User, Article.author_id == User.id)
            .where(Article.team_id == team_id)
            .order_by(Article.updated_at.desc())
        )
        result = await self.session.execute(stmt)
        return [ArticleListItem.model_validate(dict(row)) for row in result.mappings()]

    async def get_tag_ids(self, article_id: UUID) -> set[UUID]:
        result = await self.session.execute(
            select(ArticleTag.tag_id).where(ArticleTag.article_id == article_id)
        )
        return set(result.scalars().all())

    async def get_category_ids(self, article_id: UUID) -> set[UUID]:
        result = await self.session.execute(
            select(ArticleCategory.category_id).where(
                ArticleCategory.article_id == article_id
            )
        )
        return set(result.scalars().all())

    async def get_detail(self, article: Article) -> ArticleDetail:
        """Assemble the aggregate: article, author projection, tags, categories."""
        author = await self.session.get(User, article.author_id)

        tags_result = await self.session.execute(
            select(Tag)
            .join(ArticleTag, ArticleTag.tag_id == Tag.id)
            .where(ArticleTag.article_id == article.id)
            .order_by(Tag.name)
        )
        categories_result = await self.session.execute(
            select(Category)
            .join(ArticleCategory, ArticleCategory.category_id == Category.id)
            .where(ArticleCategory.article_id == article.id)
            .order_by(Category.name)
        )

        detail = ArticleDetail.model_validate(article)
        detail.author = UserSummary.model_validate(author) if author else None
        detail.tags = [TagResponse.model_validate(t) for t in tags_result.scalars()]
        detail.categories = [
            CategoryResponse.model_validate(c) for c in categories_result.scalars()
        ]
        return detail

    # ============================================================
    # Writes
    # ============================================================

    async def create(
        self, data: ArticleCreate, author_id: UUID, team_id: UUID
    ) -> Article:
        """Insert an article and its associations.

        The slug is derived from the title, the excerpt defaults to the head
        of the content, and ``published_at`` is stamped only when the
        article starts out published.
        """
        article = Article(
            team_id=team_id,
            author_id=author_id,
            title=data.title,
            slug=generate_slug(data.title),
            content=data.content,
            excerpt=data.excerpt or truncate(data.content, MAX_EXCERPT_LENGTH),
            status=data.status,
            published_at=utcnow() if data.status == ArticleStatus.PUBLISHED else None,
        )
        self.session.add(article)
        await self.session.flush()

        if data.tag_ids:
            await self._insert_tags(article.id, data.tag_ids)
        if data.category_ids:
            await self._insert_categories(article.id, data.category_ids)

        await self.session.refresh(article)
        return article

    async def update(self, article_id: UUID, data: ArticleUpdate) -> Article | None:
        """Apply a partial update.

        A new title regenerates the slug. Moving into ``published`` stamps
        ``published_at`` only if it was never set. Association lists that
        are present replace the stored set, even when empty; absent lists
        leave it alone.

        Returns:
            The updated article, or None if it does not exist
        """
        article = await self.get_by_id(article_id)
        if article is None:
            return None

        if data.title:
            article.title = data.title
            article.slug = generate_slug(data.title)
        if data.content:
            article.content = data.content
        if data.excerpt:
            article.excerpt = data.excerpt
        if data.status is not None:
            if data.status == ArticleStatus.PUBLISHED and article.published_at is None:
                article.published_at = utcnow()
            article.status = data.status
        article.updated_at = utcnow()

        if data.tag_ids is not None:
            await self.replace_tags(article.id, data.tag_ids)
        if data.category_ids is not None:
            await self.replace_categories(article.id, data.category_ids)

        await self.session.flush()
        await self.session.refresh(article)
        return article

    async def delete(self, article_id: UUID) -> bool:
        """Hard-delete an article together with its join rows.

        Returns:
            True if a row was deleted
        """
        article = await self.get_by_id(article_id)
        if article is None:
            return False

        await self.session.execute(
            delete(ArticleTag).where(ArticleTag.article_id == article_id)
        )
        await self.session.execute(
            delete(ArticleCategory).where(ArticleCategory.article_id == article_id)
        )
        await self.session.delete(article)
        await self.session.flush()
        return True

    async def replace_tags(self, article_id: UUID, tag_ids: Iterable[UUID]) -> None:
        """Make ``tag_ids`` the article's complete tag set."""
        await self.session.execute(
            delete(ArticleTag).where(ArticleTag.article_id == article_id)
        )
        await self._insert_tags(article_id, tag_ids)

    async def replace_categories(
        self, article_id: UUID, category_ids: Iterable[UUID]
    ) -> None:
        """Make ``category_ids`` the article's complete category set."""
        await self.session.execute(
            delete(ArticleCategory).where(ArticleCategory.article_id == article_id)
        )
        await self._insert_categories(article_id, category_ids)

    async def _insert_tags(self, article_id: UUID, tag_ids: Iterable[UUID]) -> None:
        rows = [ArticleTag(article_id=article_id, tag_id=t) for t in _unique(tag_ids)]
        if rows:
            self.session.add_all(rows)
            await self.session.flush()

    async def _insert_categories(
        self, article_id: UUID, category_ids: Iterable[UUID]
    ) -> None:
        rows = [
            ArticleCategory(article_id=article_id, category_id=c)
            for c in _unique(category_ids)
        ]
        if rows:
            self.session.add_all(rows)
            await self.session.flush()
