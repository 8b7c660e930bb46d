"""Session resolution: credential token to live user.

Resolution fails open to ``None`` (anonymous) whenever the token is
missing, fails verification, has expired, or points at a user that no
longer exists or was soft-deleted. Nothing here raises or writes.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

import structlog

from app.core.auth.backend import SESSION_TOKEN_TYPE, decode_session_token


if TYPE_CHECKING:
    from app.modules.users.models import User


logger = structlog.get_logger()


class ActiveUserLookup(Protocol):
    """Anything that can load a user that has not been soft-deleted."""

    async def get_active_by_id(self, user_id: UUID) -> "User | None": ...


class SessionResolver:
    """Resolves session tokens to users, memoizing per token.

    One resolver lives for one request, so a token is verified and
    looked up at most once no matter how many callers ask.
    """

    def __init__(self, users: ActiveUserLookup) -> None:
        self.users = users
        self._resolved: dict[str, "User | None"] = {}

    async def resolve_current_user(self, token: str | None) -> "User | None":
        """Map a credential token to a user, or None for anonymous."""
        if not token:
            return None

        if token in self._resolved:
            return self._resolved[token]

        user = await self._resolve(token)
        self._resolved[token] = user
        return user

    async def _resolve(self, token: str) -> "User | None":
        session = decode_session_token(token)
        if session is None or session.type != SESSION_TOKEN_TYPE:
            logger.debug("session_rejected", reason="invalid_token")
            return None

        if session.expires_at <= datetime.now(UTC):
            logger.debug("session_rejected", reason="expired")
            return None

        user = await self.users.get_active_by_id(session.user_id)
        if user is None:
            logger.debug(
                "session_rejected",
                reason="user_missing",
                user_id=str(session.user_id),
            )
        return user
