"""Article API routes."""

from uuid import UUID

from fastapi import Request, status

from app.api.dependencies import body_schema, read_json_body
from app.core.auth.dependencies import CurrentUser, OptionalUser
from app.core.errors import NotFoundError
from app.core.logging import get_client_ip
from app.modules.articles import router
from app.modules.articles.schemas import (
    ArticleCreate,
    ArticleCreateResponse,
    ArticleDetail,
    ArticleListItem,
    ArticleResponse,
    ArticleUpdate,
    SuccessResponse,
)
from app.modules.articles.services import ArticleSvc


@router.get(
    "",
    response_model=list[ArticleListItem],
    summary="List articles",
    description="Articles of the caller's team, most recently updated first.",
)
async def list_articles(
    current_user: CurrentUser,
    service: ArticleSvc,
) -> list[ArticleListItem]:
    """List the caller's team articles."""
    return await service.list_for_user_team(current_user)


@router.post(
    "",
    response_model=ArticleCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create article",
)
async def create_article(
    data: ArticleCreate,
    current_user: CurrentUser,
    service: ArticleSvc,
    request: Request,
) -> ArticleCreateResponse:
    """Create an article in a team the caller belongs to."""
    article = await service.create_article(
        data, current_user, ip_address=get_client_ip(request)
    )
    return ArticleCreateResponse(article=ArticleResponse.model_validate(article))


# Declared before /{article_id} so "public" is never parsed as an id.
@router.get(
    "/public/{article_id}",
    response_model=ArticleDetail,
    summary="Get article if visible",
    description="Returns 404 both when the article is missing and when it is hidden.",
)
async def get_visible_article(
    article_id: UUID,
    user: OptionalUser,
    service: ArticleSvc,
) -> ArticleDetail:
    """Fail-closed article read."""
    article = await service.find_visible_article(article_id, user)
    if article is None:
        raise NotFoundError("Article not found", resource="article")
    return article


@router.get(
    "/{article_id}",
    response_model=ArticleDetail,
    summary="Get article",
)
async def get_article(
    article_id: UUID,
    user: OptionalUser,
    service: ArticleSvc,
) -> ArticleDetail:
    """Get an article with its author, tags and categories."""
    return await service.get_article(article_id, user)


@router.patch(
    "/{article_id}",
    response_model=SuccessResponse,
    summary="Update article",
    openapi_extra=body_schema(ArticleUpdate),
)
async def update_article(
    article_id: UUID,
    current_user: CurrentUser,
    service: ArticleSvc,
    request: Request,
) -> SuccessResponse:
    """Partially update an article. Team owners and the author only.

    The body is read after the article is found and the caller cleared,
    so a missing article is 404 and a foreign caller 403 whatever they sent.
    """
    await service.require_writable(article_id, current_user)
    data = await read_json_body(request, ArticleUpdate)
    await service.update_article(
        article_id, data, current_user, ip_address=get_client_ip(request)
    )
    return SuccessResponse()


@router.delete(
    "/{article_id}",
    response_model=SuccessResponse,
    summary="Delete article",
)
async def delete_article(
    article_id: UUID,
    current_user: CurrentUser,
    service: ArticleSvc,
    request: Request,
) -> SuccessResponse:
    """Delete an article. Team owners and the author only."""
    await service.delete_article(
        article_id, current_user, ip_address=get_client_ip(request)
    )
    return SuccessResponse()
