"""Directory planning for generated projects.

Each architecture convention maps to one fixed :class:`Layout`: an ordered
tuple of directories plus the locations (and Go package names) where the
generators place handlers, middleware and domain models.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from goscaffold.config import Architecture, ProjectConfiguration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layout:
    """Fixed directory convention for one architecture."""

    architecture: Architecture
    directories: tuple[str, ...]
    models_dir: str
    models_package: str
    handlers_dir: str
    handlers_package: str
    middleware_dir: str = "internal/middleware"
    middleware_package: str = "middleware"


_SHARED_TAIL: tuple[str, ...] = (
    "pkg/config",
    "pkg/database",
    "pkg/logger",
    "api/routes",
    "scripts",
    "deployments",
)


LAYOUTS: dict[Architecture, Layout] = {
    Architecture.SIMPLE: Layout(
        architecture=Architecture.SIMPLE,
        directories=(
            "cmd",
            "internal/handlers",
            "internal/models",
            "internal/services",
            "internal/middleware",
            *_SHARED_TAIL,
        ),
        models_dir="internal/models",
        models_package="models",
        handlers_dir="internal/handlers",
        handlers_package="handlers",
    ),
    Architecture.CLEAN: Layout(
        architecture=Architecture.CLEAN,
        directories=(
            "cmd",
            "internal/controller",
            "internal/usecase",
            "internal/repository",
            "internal/entity",
            "internal/delivery/http",
            "internal/middleware",
            *_SHARED_TAIL,
        ),
        models_dir="internal/entity",
        models_package="entity",
        handlers_dir="internal/controller",
        handlers_package="controller",
    ),
    Architecture.HEXAGONAL: Layout(
        architecture=Architecture.HEXAGONAL,
        directories=(
            "cmd",
            "internal/core/domain",
            "internal/core/services",
            "internal/core/ports",
            "internal/adapters/primary/http",
            "internal/adapters/secondary/database",
            "internal/middleware",
            *_SHARED_TAIL,
        ),
        models_dir="internal/core/domain",
        models_package="domain",
        handlers_dir="internal/adapters/primary/http",
        handlers_package="httpadapter",
    ),
    Architecture.MVC: Layout(
        architecture=Architecture.MVC,
        directories=(
            "cmd",
            "internal/controllers",
            "internal/models",
            "internal/views",
            "internal/middleware",
            *_SHARED_TAIL,
        ),
        models_dir="internal/models",
        models_package="models",
        handlers_dir="internal/controllers",
        handlers_package="controllers",
    ),
    Architecture.CUSTOM: Layout(
        architecture=Architecture.CUSTOM,
        directories=(
            "cmd",
            "internal",
            "pkg/config",
            "pkg/database",
            "pkg/logger",
            "api",
            "scripts",
            "deployments",
        ),
        models_dir="internal/models",
        models_package="models",
        handlers_dir="internal/handlers",
        handlers_package="handlers",
    ),
}


def layout_for(config: ProjectConfiguration) -> Layout:
    """Return the fixed layout of the configuration's architecture."""
    return LAYOUTS[config.architecture]


def plan_directories(config: ProjectConfiguration) -> list[str]:
    """Compute the ordered, de-duplicated directory list for *config*.

    The architecture's base directories come first, followed by the
    feature-gated ones (``docs``, ``test``, ``static/*``, ``locales``).
    Pure function: identical input yields an identical list.
    """
    planned: list[str] = list(layout_for(config).directories)

    if config.features.api_docs:
        planned.append("docs")
    if config.testing:
        planned.append("test")
    if config.features.static_files:
        planned.extend(["static/css", "static/js", "static/images"])
    if config.features.i18n:
        planned.append("locales")

    seen: set[str] = set()
    ordered: list[str] = []
    for directory in planned:
        if directory in seen:
            continue
        seen.add(directory)
        ordered.append(directory)

    logger.debug("Planned %d directories for %s", len(ordered), config.architecture.value)
    return ordered
