"""FastAPI dependencies for authentication.

The credential is read explicitly from the request (bearer header first,
then the session cookie) and handed to the session resolver. FastAPI
caches dependency results per request, so the resolver runs once.
"""

from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.dependencies import DBSession
from app.config import settings
from app.core.auth.session import SessionResolver
from app.core.errors import UnauthorizedError


bearer_scheme = HTTPBearer(auto_error=False)


def extract_session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = None,
) -> str | None:
    """Return the raw session token carried by a request, if any."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name) or None


async def get_session_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Dependency wrapper around ``extract_session_token``."""
    return extract_session_token(request, credentials)


SessionTokenValue = Annotated[str | None, Depends(get_session_token)]


async def get_optional_user(token: SessionTokenValue, db: DBSession) -> Any | None:
    """Resolve the requester, or None when anonymous."""
    from app.modules.users.repos import UserRepository  # noqa: PLC0415

    resolver = SessionResolver(UserRepository(db))
    return await resolver.resolve_current_user(token)


async def get_current_user(
    user: Annotated[Any | None, Depends(get_optional_user)],
) -> Any:
    """Require a resolved user.

    Raises:
        UnauthorizedError: If no valid session could be resolved
    """
    if user is None:
        raise UnauthorizedError(
            "Authentication required",
            error_code="unauthenticated",
        )
    return user


# Use Any for User type to avoid circular imports at runtime
OptionalUser = Annotated[Any | None, Depends(get_optional_user)]
CurrentUser = Annotated[Any, Depends(get_current_user)]
