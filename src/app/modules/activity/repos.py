"""Activity log repository."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from app.api.dependencies import DBSession
from app.core.constants import ACTIVITY_FEED_LIMIT
from app.modules.activity.models import ActivityLog, ActivityType
from app.modules.activity.schemas import ActivityEntry
from app.modules.users.models import User


class ActivityLogRepository:
    """Writes and reads activity log entries."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def record(
        self,
        team_id: UUID,
        user_id: UUID | None,
        action: ActivityType,
        ip_address: str | None = None,
    ) -> ActivityLog:
        """Append an entry; it commits with the surrounding transaction."""
        entry = ActivityLog(
            team_id=team_id,
            user_id=user_id,
            action=action,
            ip_address=ip_address,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def list_for_user(
        self, user_id: UUID, limit: int = ACTIVITY_FEED_LIMIT
    ) -> list[ActivityEntry]:
        """A user's most recent entries, newest first, with their name."""
        stmt = (
            select(
                ActivityLog.id,
                ActivityLog.action,
                ActivityLog.timestamp,
                ActivityLog.ip_address,
                User.name.label("user_name"),
            )
            .outerjoin(User, ActivityLog.user_id == User.id)
            .where(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.timestamp.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [ActivityEntry.model_validate(dict(row)) for row in result.mappings()]


# Type alias for dependency injection
ActivityRepo = Annotated[ActivityLogRepository, Depends(ActivityLogRepository)]
