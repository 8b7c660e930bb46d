"""Shared API dependencies."""

from typing import Annotated, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db


SchemaT = TypeVar("SchemaT", bound=BaseModel)


# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


async def read_json_body(request: Request, schema: type[SchemaT]) -> SchemaT:
    """Parse and validate the request body inside a handler.

    For routes that must authorize before looking at the payload. Failures
    are raised as ``RequestValidationError`` so they render exactly like
    body errors FastAPI detects itself.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body",),
                    "msg": "JSON decode error",
                    "input": {},
                }
            ]
        ) from e

    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        errors = [
            {**error, "loc": ("body", *error["loc"])}
            for error in e.errors(include_url=False)
        ]
        raise RequestValidationError(errors, body=payload) from e


def body_schema(schema: type[BaseModel]) -> dict:
    """OpenAPI ``requestBody`` for a route that reads its body itself."""
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": schema.model_json_schema(
                        ref_template="#/components/schemas/{model}"
                    )
                }
            },
        }
    }
