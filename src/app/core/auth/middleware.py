"""Request context middleware.

This module provides middleware for:
- Request tracing with unique IDs
- Binding the session's user id to the log context
"""

import uuid
from typing import TYPE_CHECKING

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.core.auth.backend import decode_session_token
from app.core.auth.dependencies import bearer_scheme, extract_session_token


if TYPE_CHECKING:
    from starlette.types import ASGIApp


class SessionContextMiddleware(BaseHTTPMiddleware):
    """Bind the session's user id to request.state and the log context.

    Only the token signature is checked here; whether the user still
    exists is decided by the session resolver inside the handlers.
    """

    def __init__(
        self,
        app: "ASGIApp",
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or [
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
        ]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        token = extract_session_token(request, await bearer_scheme(request))

        session = decode_session_token(token) if token else None
        if session:
            request.state.user_id = session.user_id
            structlog.contextvars.bind_contextvars(user_id=str(session.user_id))

        return await call_next(request)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        request.state.trace_id = request_id  # Alias for error handler

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "user_id")

        response.headers["X-Request-ID"] = request_id
        return response
