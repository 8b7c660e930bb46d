"""Article factory for tests."""

from uuid import uuid4

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from app.core.database import utcnow
from app.modules.articles.models import Article, ArticleStatus


class ArticleFactory(SQLAlchemyFactory[Article]):
    """Factory for draft articles.

    ``team_id`` and ``author_id`` must always be passed explicitly.
    """

    __model__ = Article

    @classmethod
    def title(cls) -> str:
        return f"Article {uuid4().hex[:6]}"

    @classmethod
    def slug(cls) -> str:
        return f"article-{uuid4().hex[:6]}"

    @classmethod
    def content(cls) -> str:
        return "Some body text long enough to pass validation."

    @classmethod
    def excerpt(cls) -> None:
        return None

    @classmethod
    def status(cls) -> str:
        return ArticleStatus.DRAFT

    @classmethod
    def published_at(cls) -> None:
        return None

    @classmethod
    def created_at(cls):
        return utcnow()

    @classmethod
    def updated_at(cls):
        return utcnow()
