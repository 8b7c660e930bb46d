"""Error handling module with RFC 7807 Problem Details."""

from app.core.errors.exceptions import (
    AppException,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.core.errors.handlers import (
    GENERIC_ERROR_DETAIL,
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    "GENERIC_ERROR_DETAIL",
    "AppException",
    "ConflictError",
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "ProblemDetail",
    "UnauthorizedError",
    "ValidationError",
    "register_exception_handlers",
]
