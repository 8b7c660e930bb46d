"""Pytest configuration and shared fixtures.

Integration tests run against an in-memory SQLite database through
aiosqlite. Each test gets a fresh schema and its own transaction, which
is rolled back at the end.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import create_app

# Import all models to ensure they're registered with Base.metadata
from app.modules.activity.models import ActivityLog  # noqa: F401
from app.modules.articles.models import Article, ArticleCategory, ArticleTag  # noqa: F401
from app.modules.taxonomy.models import Category, Tag  # noqa: F401
from app.modules.teams.models import Team, TeamMember, TeamRole  # noqa: F401
from app.modules.users.models import User
from tests.helpers import add_member, create_team, create_user


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Create a test database engine with the full schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes, ensuring test isolation.
    """
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance sharing the test session."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Team and User Fixtures
# ============================================================


@pytest.fixture
async def team(db: AsyncSession) -> Team:
    """The team most tests act in."""
    return await create_team(db, name="Acme")


@pytest.fixture
async def other_team(db: AsyncSession) -> Team:
    """A second, unrelated team."""
    return await create_team(db, name="Globex")


@pytest.fixture
async def owner(db: AsyncSession, team: Team) -> User:
    """A user with the owner role in ``team``."""
    user = await create_user(db, email="owner@example.com", name="Olive Owner")
    await add_member(db, team, user, TeamRole.OWNER)
    return user


@pytest.fixture
async def member(db: AsyncSession, team: Team) -> User:
    """A user with the member role in ``team``."""
    user = await create_user(db, email="member@example.com", name="Max Member")
    await add_member(db, team, user, TeamRole.MEMBER)
    return user


@pytest.fixture
async def outsider(db: AsyncSession, other_team: Team) -> User:
    """An owner of ``other_team`` with no membership in ``team``."""
    user = await create_user(db, email="outsider@example.com", name="Otto Outsider")
    await add_member(db, other_team, user, TeamRole.OWNER)
    return user


@pytest.fixture
async def loner(db: AsyncSession) -> User:
    """A user who belongs to no team at all."""
    return await create_user(db, email="loner@example.com", name="Lou Loner")
