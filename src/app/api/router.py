"""Top-level router: health endpoints plus the versioned API.

The versioned API is the auth router followed by every feature module
found by ``discover_modules``.
"""

import structlog
from fastapi import APIRouter

from app.api.health import router as health_router
from app.core.auth.routes import router as auth_router
from app.core.constants import API_V1_PREFIX
from app.modules import discover_modules


logger = structlog.get_logger()


def build_v1_router() -> APIRouter:
    """Assemble the ``/api/v1`` router."""
    v1 = APIRouter(prefix=API_V1_PREFIX)
    v1.include_router(auth_router)

    modules = discover_modules()
    for module_router in modules:
        v1.include_router(module_router)

    logger.debug("api_v1_assembled", module_count=len(modules))
    return v1


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(build_v1_router())
