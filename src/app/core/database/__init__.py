"""Database layer - session management, base models, and mixins."""

from app.core.database.base import (
    Base,
    CreatedAtMixin,
    TeamMixin,
    TimestampMixin,
    UUIDMixin,
    utcnow,
)
from app.core.database.session import (
    async_engine,
    async_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "CreatedAtMixin",
    "TeamMixin",
    "TimestampMixin",
    "UUIDMixin",
    "async_engine",
    "async_session_factory",
    "get_db",
    "utcnow",
]
