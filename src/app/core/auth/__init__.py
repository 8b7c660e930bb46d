"""Authentication: password hashing, session tokens and request identity."""

from app.core.auth.backend import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from app.core.auth.dependencies import (
    CurrentUser,
    OptionalUser,
    get_current_user,
    get_optional_user,
)
from app.core.auth.middleware import RequestIdMiddleware, SessionContextMiddleware
from app.core.auth.schemas import SessionData, SessionToken
from app.core.auth.session import SessionResolver


__all__ = [
    # Dependencies
    "CurrentUser",
    "OptionalUser",
    # Middleware
    "RequestIdMiddleware",
    "SessionContextMiddleware",
    # Schemas
    "SessionData",
    # Session
    "SessionResolver",
    "SessionToken",
    # Token utilities
    "create_session_token",
    "decode_session_token",
    "get_current_user",
    "get_optional_user",
    # Password utilities
    "hash_password",
    "verify_password",
]
