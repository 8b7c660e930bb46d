"""Shared helpers for building test data."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth.backend import create_session_token
from app.modules.teams.models import Team, TeamMember, TeamRole
from app.modules.users.models import User
from tests.factories.team import TeamFactory
from tests.factories.user import UserFactory


async def create_user(db: AsyncSession, **kwargs) -> User:
    """Persist a user built by the factory."""
    user = UserFactory.build(**kwargs)
    db.add(user)
    await db.flush()
    return user


async def create_team(db: AsyncSession, **kwargs) -> Team:
    """Persist a team built by the factory."""
    team = TeamFactory.build(**kwargs)
    db.add(team)
    await db.flush()
    return team


async def add_member(
    db: AsyncSession, team: Team, user: User, role: str = TeamRole.MEMBER
) -> TeamMember:
    """Make ``user`` a member of ``team`` with ``role``."""
    member = TeamMember(team_id=team.id, user_id=user.id, role=role)
    db.add(member)
    await db.flush()
    return member


def headers_for(user: User) -> dict[str, str]:
    """Authorization headers carrying a valid session token for ``user``."""
    return {"Authorization": f"Bearer {create_session_token(user.id)}"}
