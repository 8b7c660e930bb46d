"""Authentication service for sign-up, sign-in and sign-out."""

from typing import Annotated

import structlog
from fastapi import Depends

from app.api.dependencies import DBSession
from app.config import settings
from app.core.auth.backend import create_session_token, hash_password, verify_password
from app.core.auth.schemas import SessionToken
from app.core.constants import MAX_TEAM_NAME_LENGTH
from app.core.errors import ConflictError, UnauthorizedError
from app.core.utils.text import truncate
from app.modules.activity.models import ActivityType
from app.modules.activity.repos import ActivityLogRepository
from app.modules.teams.models import Team, TeamRole
from app.modules.teams.repos import TeamRepository
from app.modules.users.models import User
from app.modules.users.repos import UserRepository


logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations.

    A new account always comes with a team it owns; every sign-in and
    sign-out is written to that team's activity log.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.team_repo = TeamRepository(db)
        self.activity = ActivityLogRepository(db)

    async def register(
        self,
        email: str,
        password: str,
        name: str | None = None,
        team_name: str | None = None,
        ip_address: str | None = None,
    ) -> tuple[User, SessionToken]:
        """Register a new user together with a team they own.

        Args:
            email: User's email address
            password: Plain text password
            name: Display name
            team_name: Name for the new team; defaults to "<email>'s Team"
            ip_address: Client IP address for the activity log

        Returns:
            Tuple of (user, session_token)

        Raises:
            ConflictError: If the email is already registered
        """
        # Generic message so the endpoint cannot be used to probe for accounts
        existing = await self.user_repo.get_by_email(email)
        if existing:
            raise ConflictError(
                "Registration failed. If this email is already registered, please sign in.",
                error_code="registration_failed",
            )

        user = await self.user_repo.create(
            User(
                email=email,
                name=name,
                password_hash=hash_password(password),
            )
        )

        team = await self.team_repo.create(Team(name=self._team_name(email, team_name)))
        await self.team_repo.add_member(team.id, user.id, TeamRole.OWNER)

        await self.activity.record(team.id, user.id, ActivityType.SIGN_UP, ip_address)
        await self.activity.record(team.id, user.id, ActivityType.CREATE_TEAM, ip_address)

        logger.info("user_registered", user_id=str(user.id), team_id=str(team.id))
        return user, self._issue_token(user)

    async def login(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
    ) -> tuple[User, SessionToken]:
        """Authenticate with email and password.

        Raises:
            UnauthorizedError: If the credentials are invalid or the account
                has been deleted
        """
        user = await self.user_repo.get_active_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        await self._record(user, ActivityType.SIGN_IN, ip_address)
        logger.info("user_logged_in", user_id=str(user.id))
        return user, self._issue_token(user)

    async def logout(self, user: User | None, ip_address: str | None = None) -> None:
        """Record a sign-out. Tokens are stateless; the caller drops the cookie."""
        if user is None:
            return
        await self._record(user, ActivityType.SIGN_OUT, ip_address)
        logger.info("user_logged_out", user_id=str(user.id))

    async def _record(
        self, user: User, action: ActivityType, ip_address: str | None
    ) -> None:
        membership = await self.team_repo.get_primary_membership(user.id)
        if membership is None:
            return
        await self.activity.record(membership.team_id, user.id, action, ip_address)

    @staticmethod
    def _team_name(email: str, team_name: str | None) -> str:
        if team_name:
            return team_name
        return truncate(f"{email}'s Team", MAX_TEAM_NAME_LENGTH)

    def _issue_token(self, user: User) -> SessionToken:
        return SessionToken(
            access_token=create_session_token(user.id),
            expires_in=settings.session_expire_minutes * 60,
        )


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
