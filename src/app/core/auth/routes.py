"""Authentication API routes.

Provides endpoints for:
- Registration (user plus owned team)
- Login/logout with a session cookie
- The current user's profile
"""

from fastapi import APIRouter, Request, Response, status

from app.config import settings
from app.core.auth.dependencies import CurrentUser, OptionalUser
from app.core.auth.schemas import SessionToken
from app.core.auth.service import AuthSvc
from app.core.logging import get_client_ip
from app.modules.articles.schemas import SuccessResponse
from app.modules.users.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: SessionToken) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token.access_token,
        max_age=token.expires_in,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user and team",
    description="Creates a user account and a team owned by it.",
)
async def register(
    data: RegisterRequest,
    service: AuthSvc,
    request: Request,
    response: Response,
) -> AuthResponse:
    """Register a new user and team."""
    user, token = await service.register(
        email=data.email,
        password=data.password,
        name=data.name,
        team_name=data.team_name,
        ip_address=get_client_ip(request),
    )
    _set_session_cookie(response, token)
    return AuthResponse(
        **token.model_dump(),
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
)
async def login(
    data: LoginRequest,
    service: AuthSvc,
    request: Request,
    response: Response,
) -> AuthResponse:
    """Login with email and password."""
    user, token = await service.login(
        email=data.email,
        password=data.password,
        ip_address=get_client_ip(request),
    )
    _set_session_cookie(response, token)
    return AuthResponse(
        **token.model_dump(),
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/logout",
    response_model=SuccessResponse,
    summary="Logout",
    description="Clears the session cookie.",
)
async def logout(
    user: OptionalUser,
    service: AuthSvc,
    request: Request,
    response: Response,
) -> SuccessResponse:
    """Logout the current session."""
    await service.logout(user, ip_address=get_client_ip(request))
    response.delete_cookie(settings.session_cookie_name)
    return SuccessResponse()


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get current user profile."""
    return UserResponse.model_validate(current_user)
