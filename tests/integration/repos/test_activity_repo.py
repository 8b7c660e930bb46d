"""Integration tests for ActivityLogRepository."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.activity.models import ActivityLog, ActivityType
from app.modules.activity.repos import ActivityLogRepository
from app.modules.teams.models import Team
from app.modules.users.models import User


pytestmark = pytest.mark.integration


class TestActivityLog:
    """Tests for ActivityLogRepository."""

    async def test_record_and_list(self, db: AsyncSession, team: Team, owner: User):
        repo = ActivityLogRepository(db)

        await repo.record(team.id, owner.id, ActivityType.SIGN_IN, "10.0.0.1")
        (entry,) = await repo.list_for_user(owner.id)

        assert entry.action == ActivityType.SIGN_IN
        assert entry.ip_address == "10.0.0.1"
        assert entry.user_name == owner.name

    async def test_newest_first_and_limited(self, db: AsyncSession, team: Team, owner: User):
        start = datetime(2025, 1, 1, tzinfo=UTC)
        db.add_all(
            [
                ActivityLog(
                    team_id=team.id,
                    user_id=owner.id,
                    action=ActivityType.UPDATE_ARTICLE,
                    timestamp=start + timedelta(minutes=i),
                )
                for i in range(12)
            ]
        )
        await db.flush()

        entries = await ActivityLogRepository(db).list_for_user(owner.id)

        assert len(entries) == 10
        timestamps = [e.timestamp for e in entries]
        assert timestamps == sorted(timestamps, reverse=True)

    async def test_other_users_excluded(
        self, db: AsyncSession, team: Team, owner: User, member: User
    ):
        repo = ActivityLogRepository(db)
        await repo.record(team.id, member.id, ActivityType.CREATE_TAG)

        assert await repo.list_for_user(owner.id) == []
