"""User repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from app.api.dependencies import DBSession
from app.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Lookups ignore soft-deleted users unless stated otherwise.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Persist a new user and return it with its ID populated."""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_active_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID, excluding soft-deleted users."""
        stmt = select(User).where(User.id == user_id, User.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_email(self, email: str) -> User | None:
        """Get a user by email, excluding soft-deleted users."""
        stmt = select(User).where(User.email == email, User.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email, including soft-deleted users.

        Used for uniqueness checks: the email column stays unique even
        after a soft delete.
        """
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
