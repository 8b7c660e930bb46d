"""Activity module: per-team audit trail of user actions."""

from fastapi import APIRouter


router = APIRouter(prefix="/activity", tags=["activity"])

from app.modules.activity import routes  # noqa: F401, E402
