"""Pydantic schemas for teams."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.modules.teams.models import TeamRole
from app.modules.users.schemas import UserSummary


class TeamMemberResponse(BaseModel):
    """A membership with the minimal user projection."""

    id: UUID
    role: TeamRole
    joined_at: datetime
    user: UserSummary

    model_config = ConfigDict(from_attributes=True)


class TeamResponse(BaseModel):
    """A team with its member list."""

    id: UUID
    name: str
    plan_name: str | None = None
    subscription_status: str | None = None
    created_at: datetime
    updated_at: datetime
    members: list[TeamMemberResponse] = []

    model_config = ConfigDict(from_attributes=True)


class SubscriptionUpdate(BaseModel):
    """Subscription state pushed by the billing provider."""

    stripe_subscription_id: str | None = None
    stripe_product_id: str | None = None
    plan_name: str | None = None
    subscription_status: str
