"""Request logging middleware.

Logs every HTTP request and its outcome with structlog.
"""

import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs HTTP requests and responses.

    Each request produces a ``request_started`` and a ``request_completed``
    event. Completion is logged at warning level for 4xx and error level
    for 5xx responses. Probe and documentation paths are skipped.
    """

    def __init__(
        self,
        app: Any,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or [
            "/health/live",
            "/health/ready",
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

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        started: dict[str, Any] = {
            "method": method,
            "path": path,
            "client_ip": get_client_ip(request),
        }
        if request.url.query:
            started["query"] = str(request.url.query)
        logger.info("request_started", **started)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                method=method,
                path=path,
                duration_ms=_elapsed_ms(start_time),
                error=str(exc),
            )
            raise

        completed: dict[str, Any] = {
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": _elapsed_ms(start_time),
        }
        user_id = getattr(request.state, "user_id", None)
        if user_id:
            completed["user_id"] = str(user_id)

        if response.status_code >= 500:
            logger.error("request_completed", **completed)
        elif response.status_code >= 400:
            logger.warning("request_completed", **completed)
        else:
            logger.info("request_completed", **completed)

        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


def get_client_ip(request: Request) -> str | None:
    """Extract the real client IP from a request.

    Honors X-Forwarded-For (first hop) and X-Real-IP before falling back
    to the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return None
