"""Category and tag API routes."""

from fastapi import APIRouter, Request, status

from app.core.auth.dependencies import CurrentUser
from app.core.logging import get_client_ip
from app.modules.taxonomy.schemas import (
    CategoryCreateResponse,
    CategoryResponse,
    NamedEntityCreate,
    TagCreateResponse,
    TagResponse,
)
from app.modules.taxonomy.services import TaxonomySvc


categories_router = APIRouter(prefix="/categories", tags=["categories"])
tags_router = APIRouter(prefix="/tags", tags=["tags"])


# ============================================================
# Categories
# ============================================================


@categories_router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
)
async def list_categories(
    current_user: CurrentUser,
    service: TaxonomySvc,
) -> list[CategoryResponse]:
    """List the caller's team categories."""
    categories = await service.list_categories(current_user)
    return [CategoryResponse.model_validate(c) for c in categories]


@categories_router.post(
    "",
    response_model=CategoryCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    data: NamedEntityCreate,
    current_user: CurrentUser,
    service: TaxonomySvc,
    request: Request,
) -> CategoryCreateResponse:
    """Create a category in the caller's team."""
    category = await service.create_category(
        data.name, current_user, ip_address=get_client_ip(request)
    )
    return CategoryCreateResponse(category=CategoryResponse.model_validate(category))


# ============================================================
# Tags
# ============================================================


@tags_router.get(
    "",
    response_model=list[TagResponse],
    summary="List tags",
)
async def list_tags(
    current_user: CurrentUser,
    service: TaxonomySvc,
) -> list[TagResponse]:
    """List the caller's team tags."""
    tags = await service.list_tags(current_user)
    return [TagResponse.model_validate(t) for t in tags]


@tags_router.post(
    "",
    response_model=TagCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create tag",
)
async def create_tag(
    data: NamedEntityCreate,
    current_user: CurrentUser,
    service: TaxonomySvc,
    request: Request,
) -> TagCreateResponse:
    """Create a tag in the caller's team."""
    tag = await service.create_tag(data.name, current_user, ip_address=get_client_ip(request))
    return TagCreateResponse(tag=TagResponse.model_validate(tag))
