"""Unit tests for RFC 7807 exception handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field
from sqlalchemy.exc import OperationalError

from app.core.errors import (
    GENERIC_ERROR_DETAIL,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    register_exception_handlers,
)


pytestmark = pytest.mark.unit


class Payload(BaseModel):
    title: str = Field(..., min_length=3)


@pytest.fixture
def error_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise NotFoundError("Article not found", resource="article", resource_id="42")

    @app.get("/unauthorized")
    async def unauthorized():
        raise UnauthorizedError(error_code="unauthenticated")

    @app.get("/forbidden")
    async def forbidden():
        raise ForbiddenError("Nope")

    @app.get("/invalid")
    async def invalid():
        raise ValidationError(
            "Invalid article associations",
            errors=[{"field": "tag_ids", "message": "Unknown tags"}],
        )

    @app.get("/database")
    async def database():
        raise OperationalError("SELECT secret FROM vault", {}, Exception("conn refused"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("internal detail")

    @app.post("/payload")
    async def payload(data: Payload):
        return data

    return app


@pytest.fixture
async def error_client(error_app: FastAPI):
    transport = ASGITransport(app=error_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestAppExceptionHandler:
    """Tests for app_exception_handler."""

    async def test_not_found_problem_detail(self, error_client: AsyncClient):
        response = await error_client.get("/not-found")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["detail"] == "Article not found"
        assert body["type"].endswith("/errors/not_found")
        assert body["instance"] == "/not-found"
        assert body["resource"] == "article"
        assert body["resource_id"] == "42"

    async def test_unauthorized_and_forbidden_are_distinct(self, error_client: AsyncClient):
        unauthorized = await error_client.get("/unauthorized")
        forbidden = await error_client.get("/forbidden")

        assert unauthorized.status_code == 401
        assert unauthorized.json()["type"].endswith("/errors/unauthenticated")
        assert forbidden.status_code == 403
        assert forbidden.json()["detail"] == "Nope"

    async def test_domain_validation_lists_errors(self, error_client: AsyncClient):
        response = await error_client.get("/invalid")

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "tag_ids", "message": "Unknown tags"}
        ]


class TestValidationExceptionHandler:
    """Tests for validation_exception_handler."""

    async def test_request_validation_is_400(self, error_client: AsyncClient):
        response = await error_client.post("/payload", json={"title": "ab"})

        assert response.status_code == 400
        body = response.json()
        assert body["title"] == "Validation Error"
        assert body["errors"][0]["field"] == "title"


class TestInternalErrors:
    """Storage and unexpected failures never leak details."""

    async def test_database_error_is_generic_500(self, error_client: AsyncClient):
        response = await error_client.get("/database")

        assert response.status_code == 500
        body = response.json()
        assert body["detail"] == GENERIC_ERROR_DETAIL
        assert "vault" not in response.text

    async def test_unhandled_error_is_generic_500(self, error_client: AsyncClient):
        response = await error_client.get("/boom")

        assert response.status_code == 500
        assert response.json()["detail"] == GENERIC_ERROR_DETAIL
        assert "internal detail" not in response.text
