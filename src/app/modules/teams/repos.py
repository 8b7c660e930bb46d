"""Team repository: membership index and billing state."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.api.dependencies import DBSession
from app.core.database import utcnow
from app.modules.teams.models import Team, TeamMember
from app.modules.teams.schemas import SubscriptionUpdate


class TeamRepository:
    """Repository for Team and TeamMember database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, team: Team) -> Team:
        """Persist a new team."""
        self.session.add(team)
        await self.session.flush()
        return team

    async def add_member(self, team_id: UUID, user_id: UUID, role: str) -> TeamMember:
        """Create a membership row."""
        member = TeamMember(team_id=team_id, user_id=user_id, role=role)
        self.session.add(member)
        await self.session.flush()
        return member

    async def get_membership(self, user_id: UUID, team_id: UUID) -> TeamMember | None:
        """Exact-match membership lookup.

        This is the authorization primitive: a user may act on a team's
        resources only if this returns a row.
        """
        stmt = select(TeamMember).where(
            TeamMember.user_id == user_id,
            TeamMember.team_id == team_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_primary_membership(self, user_id: UUID) -> TeamMember | None:
        """The user's first membership by join time, or None."""
        stmt = (
            select(TeamMember)
            .where(TeamMember.user_id == user_id)
            .order_by(TeamMember.joined_at, TeamMember.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_team_for_user(self, user_id: UUID) -> Team | None:
        """Get the single team a user belongs to, with its members loaded.

        When several memberships exist, the earliest joined wins.
        """
        membership = await self.get_primary_membership(user_id)
        if membership is None:
            return None
        return await self.get_with_members(membership.team_id)

    async def get_with_members(self, team_id: UUID) -> Team | None:
        """Load a team with members and their user rows."""
        stmt = (
            select(Team)
            .where(Team.id == team_id)
            .options(selectinload(Team.members).selectinload(TeamMember.user))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_stripe_customer_id(self, customer_id: str) -> Team | None:
        """Find the team linked to a Stripe customer."""
        stmt = select(Team).where(Team.stripe_customer_id == customer_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_subscription(self, team: Team, data: SubscriptionUpdate) -> Team:
        """Overwrite the team's subscription columns."""
        team.stripe_subscription_id = data.stripe_subscription_id
        team.stripe_product_id = data.stripe_product_id
        team.plan_name = data.plan_name
        team.subscription_status = data.subscription_status
        team.updated_at = utcnow()
        await self.session.flush()
        return team


# Type alias for dependency injection
TeamRepo = Annotated[TeamRepository, Depends(TeamRepository)]
