"""Authentication schemas for session handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class SessionData(BaseModel):
    """Claims extracted from a verified session token.

    Attributes:
        user_id: The user's UUID
        expires_at: Token expiration time
        type: Token type, always "access" for sessions
    """

    user_id: UUID
    expires_at: datetime
    type: str = "access"


class SessionToken(BaseModel):
    """A freshly issued session token.

    Attributes:
        access_token: Signed JWT, also set as the session cookie
        token_type: Always "bearer"
        expires_in: Lifetime in seconds
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int
