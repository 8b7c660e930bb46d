"""Integration tests for auth endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.auth import create_session_token, hash_password
from app.core.database import utcnow
from app.modules.activity.models import ActivityLog, ActivityType
from app.modules.teams.models import Team, TeamRole
from app.modules.teams.repos import TeamRepository
from app.modules.users.models import User
from tests.helpers import add_member, create_user, headers_for


pytestmark = pytest.mark.integration

PASSWORD = "SecurePass123!"


@pytest.fixture
async def account(db: AsyncSession, team: Team) -> User:
    """A member of ``team`` with a real password hash."""
    user = await create_user(
        db, email="login@example.com", password_hash=hash_password(PASSWORD)
    )
    await add_member(db, team, user, TeamRole.MEMBER)
    return user


class TestRegistration:
    """Tests for POST /api/v1/auth/register."""

    async def test_register_creates_user_and_owned_team(
        self, client: AsyncClient, db: AsyncSession
    ):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "newuser@example.com", "password": PASSWORD, "name": "New User"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == "newuser@example.com"
        assert data["user"]["name"] == "New User"
        assert settings.session_cookie_name in response.cookies

        user = (
            await db.execute(select(User).where(User.email == "newuser@example.com"))
        ).scalar_one()
        team = await TeamRepository(db).get_team_for_user(user.id)
        assert team.name == "newuser@example.com's Team"
        membership = await TeamRepository(db).get_membership(user.id, team.id)
        assert membership.role == TeamRole.OWNER

        actions = (
            await db.execute(
                select(ActivityLog.action).where(ActivityLog.user_id == user.id)
            )
        ).scalars().all()
        assert set(actions) == {ActivityType.SIGN_UP, ActivityType.CREATE_TEAM}

    async def test_register_with_team_name(self, client: AsyncClient, db: AsyncSession):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "email": "founder@example.com",
                "password": PASSWORD,
                "team_name": "Rocket Co",
            },
        )

        assert response.status_code == 201
        token = response.json()["access_token"]
        team = await client.get(
            "/api/v1/teams/current", headers={"Authorization": f"Bearer {token}"}
        )
        assert team.json()["name"] == "Rocket Co"

    async def test_register_duplicate_email(self, client: AsyncClient, account: User):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": account.email, "password": PASSWORD},
        )

        assert response.status_code == 409
        assert "registration_failed" in response.json()["type"]

    async def test_register_weak_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "newuser@example.com", "password": "short"},
        )

        assert response.status_code == 400

    async def test_register_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "not-an-email", "password": PASSWORD},
        )

        assert response.status_code == 400


class TestLogin:
    """Tests for POST /api/v1/auth/login."""

    async def test_login_success(
        self, client: AsyncClient, db: AsyncSession, account: User, team: Team
    ):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": account.email, "password": PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == str(account.id)
        assert settings.session_cookie_name in response.cookies

        entry = (
            await db.execute(
                select(ActivityLog).where(ActivityLog.action == ActivityType.SIGN_IN)
            )
        ).scalar_one()
        assert entry.team_id == team.id

    async def test_wrong_password(self, client: AsyncClient, account: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": account.email, "password": "WrongPass123!"},
        )

        assert response.status_code == 401
        assert "invalid_credentials" in response.json()["type"]

    async def test_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "ghost@example.com", "password": PASSWORD},
        )

        assert response.status_code == 401

    async def test_deleted_user_cannot_login(
        self, client: AsyncClient, db: AsyncSession, account: User
    ):
        account.deleted_at = utcnow()
        await db.flush()

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": account.email, "password": PASSWORD},
        )

        assert response.status_code == 401


class TestSession:
    """Tests for session resolution on GET /api/v1/auth/me."""

    async def test_me_requires_session(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == 401

    async def test_me_with_bearer_token(self, client: AsyncClient, account: User):
        response = await client.get("/api/v1/auth/me", headers=headers_for(account))

        assert response.status_code == 200
        assert response.json()["email"] == account.email

    async def test_me_with_session_cookie(self, client: AsyncClient, account: User):
        client.cookies.set(settings.session_cookie_name, create_session_token(account.id))

        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == str(account.id)

    async def test_deleted_user_session_is_anonymous(
        self, client: AsyncClient, db: AsyncSession, account: User
    ):
        headers = headers_for(account)
        account.deleted_at = utcnow()
        await db.flush()

        response = await client.get("/api/v1/auth/me", headers=headers)

        assert response.status_code == 401

    async def test_response_carries_request_id(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/auth/me", headers={"X-Request-ID": "req-123"}
        )
        assert response.headers["X-Request-ID"] == "req-123"


class TestLogout:
    """Tests for POST /api/v1/auth/logout."""

    async def test_logout_clears_cookie_and_records(
        self, client: AsyncClient, db: AsyncSession, account: User
    ):
        response = await client.post("/api/v1/auth/logout", headers=headers_for(account))

        assert response.status_code == 200
        assert response.json() == {"success": True}
        cookie_header = response.headers["set-cookie"]
        assert cookie_header.startswith(f"{settings.session_cookie_name}=")
        assert "Max-Age=0" in cookie_header

        entry = (
            await db.execute(
                select(ActivityLog).where(ActivityLog.action == ActivityType.SIGN_OUT)
            )
        ).scalar_one()
        assert entry.user_id == account.id

    async def test_anonymous_logout_is_harmless(
        self, client: AsyncClient, db: AsyncSession
    ):
        response = await client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert (await db.execute(select(ActivityLog))).scalars().all() == []
