"""Team service: membership resolution and billing sync."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from app.core.errors import ForbiddenError, NotFoundError
from app.modules.teams.models import Team
from app.modules.teams.repos import TeamRepo
from app.modules.teams.schemas import SubscriptionUpdate


logger = structlog.get_logger()


class TeamService:
    """Business logic around teams."""

    def __init__(self, repo: TeamRepo) -> None:
        self.repo = repo

    async def get_team_for_user(self, user_id: UUID) -> Team | None:
        return await self.repo.get_team_for_user(user_id)

    async def require_team_for_user(self, user_id: UUID) -> Team:
        """The caller's team.

        Raises:
            ForbiddenError: If the user belongs to no team
        """
        team = await self.repo.get_team_for_user(user_id)
        if team is None:
            raise ForbiddenError(
                "You are not a member of any team",
                error_code="no_team",
            )
        return team

    async def sync_subscription(
        self, stripe_customer_id: str, data: SubscriptionUpdate
    ) -> Team:
        """Apply a subscription change for a Stripe customer.

        Raises:
            NotFoundError: If no team is linked to the customer
        """
        team = await self.repo.get_by_stripe_customer_id(stripe_customer_id)
        if team is None:
            logger.warning(
                "team_not_found_for_customer",
                stripe_customer_id=stripe_customer_id,
            )
            raise NotFoundError(
                "Team not found for customer",
                resource="team",
                resource_id=stripe_customer_id,
            )

        team = await self.repo.update_subscription(team, data)
        logger.info(
            "team_subscription_updated",
            team_id=str(team.id),
            subscription_status=data.subscription_status,
            plan_name=data.plan_name,
        )
        return team


# Type alias for dependency injection
TeamSvc = Annotated[TeamService, Depends(TeamService)]
