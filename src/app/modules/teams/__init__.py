"""Teams module: tenants, memberships and billing state."""

from fastapi import APIRouter


router = APIRouter(prefix="/teams", tags=["teams"])

# Import routes to register them (must be after router is defined)
from app.modules.teams import routes  # noqa: F401, E402
