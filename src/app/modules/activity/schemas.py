"""Pydantic schemas for the activity feed."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class ActivityEntry(BaseModel):
    """One line of the activity feed."""

    id: UUID
    action: str
    timestamp: datetime
    ip_address: str | None = None
    user_name: str | None = None
