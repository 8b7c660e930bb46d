"""Activity log database model."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import MAX_ACTIVITY_ACTION_LENGTH, MAX_IPV6_LENGTH
from app.core.database.base import Base, TeamMixin, UUIDMixin, utcnow


class ActivityType(StrEnum):
    """Actions recorded in a team's activity log."""

    SIGN_UP = "SIGN_UP"
    SIGN_IN = "SIGN_IN"
    SIGN_OUT = "SIGN_OUT"
    CREATE_TEAM = "CREATE_TEAM"
    CREATE_ARTICLE = "CREATE_ARTICLE"
    UPDATE_ARTICLE = "UPDATE_ARTICLE"
    DELETE_ARTICLE = "DELETE_ARTICLE"
    CREATE_CATEGORY = "CREATE_CATEGORY"
    CREATE_TAG = "CREATE_TAG"


class ActivityLog(Base, UUIDMixin, TeamMixin):
    """Who did what in a team, and when."""

    __tablename__ = "activity_logs"

    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action: Mapped[str] = mapped_column(
        String(MAX_ACTIVITY_ACTION_LENGTH),
        nullable=False,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
    ip_address: Mapped[str | None] = mapped_column(
        String(MAX_IPV6_LENGTH),
        nullable=True,
    )
