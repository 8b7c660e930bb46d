"""Authentication backend: password hashing and session tokens.

Session tokens are short JWTs carrying only the user id and expiry. They
are verified here; turning a verified token into a live user is the job of
the session resolver.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings
from app.core.auth.schemas import SessionData
from app.core.constants import BCRYPT_ROUNDS


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)

SESSION_TOKEN_TYPE = "access"


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


# ============================================================
# Session Tokens
# ============================================================


def create_session_token(
    user_id: UUID,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session token for a user.

    Args:
        user_id: The user's UUID
        expires_delta: Lifetime override; defaults to ``session_expire_minutes``

    Returns:
        Encoded JWT
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.session_expire_minutes))

    claims: dict[str, Any] = {
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
        "type": SESSION_TOKEN_TYPE,
        "jti": secrets.token_urlsafe(16),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> SessionData | None:
    """Verify a session token and extract its claims.

    Returns:
        SessionData if the signature is valid and the claims are well formed,
        None otherwise. Expired tokens are rejected by the JWT library.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        user_id = payload.get("sub")
        exp = payload.get("exp")
        if not user_id or exp is None:
            return None

        return SessionData(
            user_id=UUID(user_id),
            expires_at=datetime.fromtimestamp(exp, tz=UTC),
            type=payload.get("type", SESSION_TOKEN_TYPE),
        )
    except (JWTError, ValueError, TypeError):
        return None
