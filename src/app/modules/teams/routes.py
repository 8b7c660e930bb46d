"""Team API routes."""

from app.core.auth.dependencies import CurrentUser
from app.core.errors import NotFoundError
from app.modules.teams import router
from app.modules.teams.schemas import TeamResponse
from app.modules.teams.services import TeamSvc


@router.get(
    "/current",
    response_model=TeamResponse,
    summary="Get current team",
    description="Returns the caller's team with its members.",
)
async def get_current_team(
    current_user: CurrentUser,
    service: TeamSvc,
) -> TeamResponse:
    """Get the caller's team."""
    team = await service.get_team_for_user(current_user.id)
    if team is None:
        raise NotFoundError("Team not found", resource="team")
    return TeamResponse.model_validate(team)
