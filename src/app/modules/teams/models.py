"""Team and membership database models."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import (
    MAX_PLAN_NAME_LENGTH,
    MAX_ROLE_LENGTH,
    MAX_STRIPE_ID_LENGTH,
    MAX_SUBSCRIPTION_STATUS_LENGTH,
    MAX_TEAM_NAME_LENGTH,
)
from app.core.database.base import Base, TimestampMixin, UUIDMixin, utcnow
from app.modules.users.models import User


class TeamRole(StrEnum):
    """Role of a user inside a team."""

    MEMBER = "member"
    OWNER = "owner"


class Team(Base, UUIDMixin, TimestampMixin):
    """The tenant and billing unit. Owns articles, categories and tags.

    Billing columns mirror the team's Stripe state and are opaque to the
    content and authorization code.
    """

    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(
        String(MAX_TEAM_NAME_LENGTH),
        nullable=False,
    )
    stripe_customer_id: Mapped[str | None] = mapped_column(
        String(MAX_STRIPE_ID_LENGTH),
        unique=True,
        nullable=True,
    )
    stripe_subscription_id: Mapped[str | None] = mapped_column(
        String(MAX_STRIPE_ID_LENGTH),
        unique=True,
        nullable=True,
    )
    stripe_product_id: Mapped[str | None] = mapped_column(
        String(MAX_STRIPE_ID_LENGTH),
        nullable=True,
    )
    plan_name: Mapped[str | None] = mapped_column(
        String(MAX_PLAN_NAME_LENGTH),
        nullable=True,
    )
    subscription_status: Mapped[str | None] = mapped_column(
        String(MAX_SUBSCRIPTION_STATUS_LENGTH),
        nullable=True,
    )

    members: Mapped[list["TeamMember"]] = relationship(
        back_populates="team",
        order_by="TeamMember.joined_at",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name={self.name})>"


class TeamMember(Base, UUIDMixin):
    """Membership of a user in a team with a role.

    A user may act on a team's resources only while a row exists here.
    """

    __tablename__ = "team_members"
    __table_args__ = (
        UniqueConstraint("user_id", "team_id", name="uq_team_members_user_team"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    team_id: Mapped[UUID] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(MAX_ROLE_LENGTH),
        nullable=False,
        default=TeamRole.MEMBER,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    team: Mapped["Team"] = relationship(back_populates="members")
    user: Mapped[User] = relationship()

    @property
    def is_owner(self) -> bool:
        return self.role == TeamRole.OWNER

    def __repr__(self) -> str:
        return (
            f"<TeamMember(user_id={self.user_id}, team_id={self.team_id}, "
            f"role={self.role})>"
        )
