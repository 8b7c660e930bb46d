"""Taxonomy module: team-scoped categories and tags."""

from fastapi import APIRouter

from app.modules.taxonomy.routes import categories_router, tags_router


router = APIRouter()
router.include_router(categories_router)
router.include_router(tags_router)
