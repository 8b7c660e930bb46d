"""Articles module: team content with tag and category associations."""

from fastapi import APIRouter


router = APIRouter(prefix="/articles", tags=["articles"])

# Import routes to register them (must be after router is defined)
from app.modules.articles import routes  # noqa: F401, E402
