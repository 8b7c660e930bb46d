"""Integration tests for ArticleRepository."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.articles.models import (
    Article,
    ArticleCategory,
    ArticleStatus,
    ArticleTag,
)
from app.modules.articles.repos import ArticleRepository
from app.modules.articles.schemas import ArticleCreate, ArticleUpdate
from app.modules.taxonomy.repos import CategoryRepository, TagRepository
from app.modules.teams.models import Team
from app.modules.users.models import User
from tests.helpers import create_user


pytestmark = pytest.mark.integration

BODY = "A body that is comfortably longer than ten characters."


def draft(team: Team, **kwargs) -> ArticleCreate:
    data = {"title": "My First Post", "content": BODY, "team_id": team.id}
    data.update(kwargs)
    return ArticleCreate(**data)


async def count_rows(db: AsyncSession, model, article_id) -> int:
    result = await db.execute(
        select(func.count()).select_from(model).where(model.article_id == article_id)
    )
    return result.scalar_one()


class TestCreate:
    """Tests for ArticleRepository.create."""

    async def test_derives_slug_and_defaults(self, db: AsyncSession, team: Team, owner: User):
        repo = ArticleRepository(db)

        article = await repo.create(
            draft(team, title="Hello, World!  2024"), owner.id, team.id
        )

        assert article.id is not None
        assert article.slug == "hello-world-2024"
        assert article.status == ArticleStatus.DRAFT
        assert article.published_at is None
        assert article.team_id == team.id
        assert article.author_id == owner.id

    async def test_excerpt_defaults_to_content_head(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)
        content = "word " * 200

        article = await repo.create(draft(team, content=content), owner.id, team.id)

        assert article.excerpt == content[:500]

    async def test_explicit_excerpt_kept(self, db: AsyncSession, team: Team, owner: User):
        repo = ArticleRepository(db)

        article = await repo.create(draft(team, excerpt="Short teaser"), owner.id, team.id)

        assert article.excerpt == "Short teaser"

    async def test_created_published_gets_timestamp(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)

        article = await repo.create(
            draft(team, status=ArticleStatus.PUBLISHED), owner.id, team.id
        )

        assert article.published_at is not None

    async def test_associations_are_written(self, db: AsyncSession, team: Team, owner: User):
        tag = await TagRepository(db).create("Python", team.id)
        category = await CategoryRepository(db).create("News", team.id)
        repo = ArticleRepository(db)

        article = await repo.create(
            draft(team, tag_ids=[tag.id, tag.id], category_ids=[category.id]),
            owner.id,
            team.id,
        )

        assert await repo.get_tag_ids(article.id) == {tag.id}
        assert await repo.get_category_ids(article.id) == {category.id}


class TestUpdate:
    """Tests for ArticleRepository.update."""

    async def test_missing_article_returns_none(self, db: AsyncSession, team: Team, owner: User):
        article = await ArticleRepository(db).create(draft(team), owner.id, team.id)
        await ArticleRepository(db).delete(article.id)

        assert await ArticleRepository(db).update(article.id, ArticleUpdate(title="New")) is None

    async def test_title_change_regenerates_slug(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)
        article = await repo.create(draft(team), owner.id, team.id)

        updated = await repo.update(article.id, ArticleUpdate(title="A Brand New Title"))

        assert updated.title == "A Brand New Title"
        assert updated.slug == "a-brand-new-title"

    async def test_absent_fields_untouched(self, db: AsyncSession, team: Team, owner: User):
        repo = ArticleRepository(db)
        article = await repo.create(draft(team, excerpt="Teaser"), owner.id, team.id)

        updated = await repo.update(article.id, ArticleUpdate(content="Completely new body text"))

        assert updated.title == "My First Post"
        assert updated.slug == "my-first-post"
        assert updated.excerpt == "Teaser"
        assert updated.content == "Completely new body text"

    async def test_first_publish_stamps_timestamp(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)
        article = await repo.create(draft(team), owner.id, team.id)

        updated = await repo.update(
            article.id, ArticleUpdate(status=ArticleStatus.PUBLISHED)
        )

        assert updated.status == ArticleStatus.PUBLISHED
        assert updated.published_at is not None

    async def test_republish_keeps_first_timestamp(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)
        article = await repo.create(
            draft(team, status=ArticleStatus.PUBLISHED), owner.id, team.id
        )
        first_published_at = article.published_at

        unpublished = await repo.update(
            article.id, ArticleUpdate(status=ArticleStatus.UNPUBLISHED)
        )
        assert unpublished.published_at == first_published_at

        republished = await repo.update(
            article.id, ArticleUpdate(status=ArticleStatus.PUBLISHED)
        )
        assert republished.published_at == first_published_at

    async def test_update_moves_updated_at_forward(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)
        article = await repo.create(draft(team), owner.id, team.id)
        before = article.updated_at

        updated = await repo.update(article.id, ArticleUpdate(title="Changed title"))

        assert updated.updated_at > before


class TestAssociationReplacement:
    """Present lists replace, empty lists clear, absent lists keep."""

    @pytest.fixture
    async def tags(self, db: AsyncSession, team: Team):
        repo = TagRepository(db)
        return [await repo.create(name, team.id) for name in ("Alpha", "Beta", "Gamma")]

    @pytest.fixture
    async def article(self, db: AsyncSession, team: Team, owner: User, tags) -> Article:
        return await ArticleRepository(db).create(
            draft(team, tag_ids=[tags[0].id, tags[1].id]), owner.id, team.id
        )

    async def test_absent_list_keeps_associations(self, db: AsyncSession, article, tags):
        repo = ArticleRepository(db)

        await repo.update(article.id, ArticleUpdate(title="Only the title"))

        assert await repo.get_tag_ids(article.id) == {tags[0].id, tags[1].id}

    async def test_empty_list_clears_associations(self, db: AsyncSession, article):
        repo = ArticleRepository(db)

        await repo.update(article.id, ArticleUpdate(tag_ids=[]))

        assert await repo.get_tag_ids(article.id) == set()

    async def test_list_replaces_associations(self, db: AsyncSession, article, tags):
        repo = ArticleRepository(db)

        await repo.update(article.id, ArticleUpdate(tag_ids=[tags[2].id]))

        assert await repo.get_tag_ids(article.id) == {tags[2].id}

    async def test_categories_follow_same_rules(
        self, db: AsyncSession, team: Team, article
    ):
        category = await CategoryRepository(db).create("News", team.id)
        repo = ArticleRepository(db)

        await repo.update(article.id, ArticleUpdate(category_ids=[category.id]))
        assert await repo.get_category_ids(article.id) == {category.id}

        await repo.update(article.id, ArticleUpdate(category_ids=[]))
        assert await repo.get_category_ids(article.id) == set()


class TestDelete:
    """Tests for ArticleRepository.delete."""

    async def test_delete_removes_article_and_join_rows(
        self, db: AsyncSession, team: Team, owner: User
    ):
        tag = await TagRepository(db).create("Python", team.id)
        category = await CategoryRepository(db).create("News", team.id)
        repo = ArticleRepository(db)
        article = await repo.create(
            draft(team, tag_ids=[tag.id], category_ids=[category.id]), owner.id, team.id
        )
        article_id = article.id

        assert await repo.delete(article_id) is True

        assert await repo.get_by_id(article_id) is None
        assert await count_rows(db, ArticleTag, article_id) == 0
        assert await count_rows(db, ArticleCategory, article_id) == 0

    async def test_delete_missing_returns_false(self, db: AsyncSession, team: Team, owner: User):
        repo = ArticleRepository(db)
        article = await repo.create(draft(team), owner.id, team.id)
        await repo.delete(article.id)

        assert await repo.delete(article.id) is False

    async def test_tags_survive_article_delete(self, db: AsyncSession, team: Team, owner: User):
        tag = await TagRepository(db).create("Python", team.id)
        repo = ArticleRepository(db)
        article = await repo.create(draft(team, tag_ids=[tag.id]), owner.id, team.id)

        await repo.delete(article.id)

        assert await TagRepository(db).existing_ids([tag.id], team.id) == {tag.id}


class TestListForTeam:
    """Tests for ArticleRepository.list_for_team."""

    async def test_most_recently_updated_first(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)
        first = await repo.create(draft(team, title="First article"), owner.id, team.id)
        second = await repo.create(draft(team, title="Second article"), owner.id, team.id)
        await repo.update(first.id, ArticleUpdate(content="Touched again later on"))

        items = await repo.list_for_team(team.id)

        assert [item.id for item in items] == [first.id, second.id]

    async def test_includes_author_name(self, db: AsyncSession, team: Team, owner: User):
        repo = ArticleRepository(db)
        await repo.create(draft(team), owner.id, team.id)

        (item,) = await repo.list_for_team(team.id)

        assert item.author_name == owner.name

    async def test_only_team_articles(
        self, db: AsyncSession, team: Team, other_team: Team, owner: User, outsider: User
    ):
        repo = ArticleRepository(db)
        mine = await repo.create(draft(team), owner.id, team.id)
        await repo.create(draft(other_team), outsider.id, other_team.id)

        items = await repo.list_for_team(team.id)

        assert [item.id for item in items] == [mine.id]

    async def test_empty_team(self, db: AsyncSession, team: Team):
        assert await ArticleRepository(db).list_for_team(team.id) == []


class TestGetDetail:
    """Tests for ArticleRepository.get_detail."""

    async def test_aggregate_includes_author_and_associations(
        self, db: AsyncSession, team: Team
    ):
        author = await create_user(db, email="writer@example.com", name="Wren Writer")
        tags = TagRepository(db)
        beta = await tags.create("Beta", team.id)
        alpha = await tags.create("Alpha", team.id)
        category = await CategoryRepository(db).create("News", team.id)
        repo = ArticleRepository(db)
        article = await repo.create(
            draft(team, tag_ids=[beta.id, alpha.id], category_ids=[category.id]),
            author.id,
            team.id,
        )

        detail = await repo.get_detail(article)

        assert detail.id == article.id
        assert detail.author.email == "writer@example.com"
        assert detail.author.name == "Wren Writer"
        assert [t.name for t in detail.tags] == ["Alpha", "Beta"]
        assert [c.id for c in detail.categories] == [category.id]

    async def test_aggregate_without_associations(
        self, db: AsyncSession, team: Team, owner: User
    ):
        repo = ArticleRepository(db)
        article = await repo.create(draft(team), owner.id, team.id)

        detail = await repo.get_detail(article)

        assert detail.tags == []
        assert detail.categories == []
