"""Activity feed API routes."""

from app.core.auth.dependencies import CurrentUser
from app.modules.activity import router
from app.modules.activity.repos import ActivityRepo
from app.modules.activity.schemas import ActivityEntry


@router.get(
    "",
    response_model=list[ActivityEntry],
    summary="Recent activity",
    description="The caller's ten most recent actions, newest first.",
)
async def list_activity(
    current_user: CurrentUser,
    repo: ActivityRepo,
) -> list[ActivityEntry]:
    """List the caller's recent activity."""
    return await repo.list_for_user(current_user.id)
