"""Feature modules with auto-discovery."""

from importlib import import_module
from pathlib import Path

import structlog
from fastapi import APIRouter


logger = structlog.get_logger()


def discover_modules() -> list[APIRouter]:
    """Collect the ``router`` of every feature module package.

    Packages without a ``router`` attribute (pure data modules such as
    users) are skipped silently.
    """
    modules_dir = Path(__file__).parent
    routers: list[APIRouter] = []

    for path in sorted(modules_dir.iterdir()):
        if not path.is_dir() or path.name.startswith("_"):
            continue
        module = import_module(f"app.modules.{path.name}")
        router = getattr(module, "router", None)
        if router is not None:
            routers.append(router)
            logger.debug("module_loaded", module=path.name)

    return routers
