"""Health and metadata endpoints, mounted outside the versioned API.

Readiness runs every check in ``READINESS_CHECKS`` against the request's
session and reports each one by name. A failing check is logged and shown
as ``unavailable``; the reason stays in the logs.
"""

from collections.abc import Awaitable, Callable
from typing import Literal

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import DBSession
from app.config import settings
from app.core.constants import API_V1_PREFIX, APP_VERSION
from app.modules.articles.models import Article


logger = structlog.get_logger()

router = APIRouter(tags=["health"])


class LivenessResponse(BaseModel):
    status: Literal["alive"] = "alive"


class ReadinessResponse(BaseModel):
    """Overall state plus one entry per named check."""

    status: Literal["ready", "degraded"]
    checks: dict[str, Literal["ok", "unavailable"]]


class InfoResponse(BaseModel):
    app: str
    version: str
    environment: str
    debug: bool
    api_prefix: str


async def _database_answers(db: AsyncSession) -> None:
    await db.execute(text("SELECT 1"))


async def _schema_migrated(db: AsyncSession) -> None:
    # Fails until the article tables exist
    await db.execute(select(Article.id).limit(1))


READINESS_CHECKS: dict[str, Callable[[AsyncSession], Awaitable[None]]] = {
    "database": _database_answers,
    "schema": _schema_migrated,
}


@router.get(
    "/health/live",
    response_model=LivenessResponse,
    summary="Liveness probe",
    description="Returns 200 while the process is running.",
)
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Returns 200 when every check passes, 503 otherwise.",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
)
async def readiness(db: DBSession) -> JSONResponse:
    """Run the readiness checks in order."""
    checks: dict[str, Literal["ok", "unavailable"]] = {}
    for name, check in READINESS_CHECKS.items():
        try:
            await check(db)
        except SQLAlchemyError as e:
            logger.warning("readiness_check_failed", check=name, error=str(e))
            checks[name] = "unavailable"
        else:
            checks[name] = "ok"

    ready = all(result == "ok" for result in checks.values())
    body = ReadinessResponse(status="ready" if ready else "degraded", checks=checks)
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )


@router.get(
    "/info",
    response_model=InfoResponse,
    summary="Application info",
)
async def info() -> InfoResponse:
    return InfoResponse(
        app=settings.app_name,
        version=APP_VERSION,
        environment=settings.environment,
        debug=settings.debug,
        api_prefix=API_V1_PREFIX,
    )
