"""Authorization guard for team-owned resources.

Two policies govern a team-owned resource (an article):

* read: public resources are readable by anyone, including anonymous
  requesters; anything else requires membership of the owning team.
* write (update and delete): requires membership of the owning team and,
  in addition, either the ``owner`` role or authorship of the resource.

Creating a resource only requires membership of the target team.

Decisions are recomputed on every call; nothing is cached across requests.
"""

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

import structlog

from app.core.errors import ForbiddenError, UnauthorizedError


if TYPE_CHECKING:
    from app.modules.users.models import User


logger = structlog.get_logger()


class AccessDecision(StrEnum):
    """Outcome of an authorization check.

    UNAUTHENTICATED and FORBIDDEN are kept apart because callers report
    them differently (401 vs 403).
    """

    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


class TeamResource(Protocol):
    """A resource owned by a team and created by a user."""

    team_id: UUID
    author_id: UUID

    @property
    def is_public(self) -> bool: ...


class Membership(Protocol):
    """A (user, team, role) relation."""

    user_id: UUID
    team_id: UUID

    @property
    def is_owner(self) -> bool: ...


class MembershipLookup(Protocol):
    """Exact-match membership lookup."""

    async def get_membership(
        self, user_id: UUID, team_id: UUID
    ) -> Membership | None: ...


# ============================================================
# Pure policy functions
# ============================================================


def read_decision(
    resource: TeamResource,
    user: "User | None",
    membership: Membership | None,
) -> AccessDecision:
    """Apply the read policy to already-loaded facts."""
    if resource.is_public:
        return AccessDecision.ALLOW
    if user is None:
        return AccessDecision.UNAUTHENTICATED
    if membership is None:
        return AccessDecision.FORBIDDEN
    return AccessDecision.ALLOW


def write_decision(
    resource: TeamResource,
    user: "User | None",
    membership: Membership | None,
) -> AccessDecision:
    """Apply the write policy (update/delete) to already-loaded facts."""
    if user is None:
        return AccessDecision.UNAUTHENTICATED
    if membership is None:
        return AccessDecision.FORBIDDEN
    if membership.is_owner or resource.author_id == user.id:
        return AccessDecision.ALLOW
    return AccessDecision.FORBIDDEN


def create_decision(
    user: "User | None",
    membership: Membership | None,
) -> AccessDecision:
    """Apply the create policy: any role in the target team may create."""
    if user is None:
        return AccessDecision.UNAUTHENTICATED
    if membership is None:
        return AccessDecision.FORBIDDEN
    return AccessDecision.ALLOW


def enforce(decision: AccessDecision, action: str) -> None:
    """Raise the error matching a non-ALLOW decision.

    Raises:
        UnauthorizedError: For UNAUTHENTICATED
        ForbiddenError: For FORBIDDEN
    """
    if decision is AccessDecision.UNAUTHENTICATED:
        raise UnauthorizedError(
            "Authentication required",
            error_code="unauthenticated",
        )
    if decision is AccessDecision.FORBIDDEN:
        raise ForbiddenError(
            f"You are not allowed to {action} this resource",
            error_code="forbidden",
            details={"action": action},
        )


# ============================================================
# Guard bound to a membership source
# ============================================================


class AccessChecker:
    """Evaluates the policies, loading membership as needed."""

    def __init__(self, memberships: MembershipLookup) -> None:
        self.memberships = memberships

    async def _membership(
        self, user: "User | None", team_id: UUID
    ) -> Membership | None:
        if user is None:
            return None
        return await self.memberships.get_membership(user.id, team_id)

    async def can_read(
        self, resource: TeamResource, user: "User | None"
    ) -> AccessDecision:
        """Read policy. Public resources never touch the membership store."""
        if resource.is_public:
            return AccessDecision.ALLOW
        membership = await self._membership(user, resource.team_id)
        return read_decision(resource, user, membership)

    async def can_write(
        self, resource: TeamResource, user: "User | None"
    ) -> AccessDecision:
        """Write policy for update and delete."""
        membership = await self._membership(user, resource.team_id)
        decision = write_decision(resource, user, membership)
        if decision is not AccessDecision.ALLOW and user is not None:
            logger.info(
                "write_denied",
                user_id=str(user.id),
                team_id=str(resource.team_id),
                has_membership=membership is not None,
            )
        return decision

    async def can_create(self, team_id: UUID, user: "User | None") -> AccessDecision:
        """Create policy for a caller-supplied team."""
        membership = await self._membership(user, team_id)
        return create_decision(user, membership)
