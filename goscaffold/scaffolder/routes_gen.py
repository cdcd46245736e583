"""Route registration and request handlers."""

from __future__ import annotations

from goscaffold.config import Framework, ProjectConfiguration

from .base import RenderJob, StepGenerator
from .layout import layout_for


class RoutesGenerator(StepGenerator):
    """Route table plus handlers.

    Gin, Echo and Fiber register routes in code; Revel reads them from
    ``conf/routes`` and dispatches to controllers.
    """

    name = "routes"

    _ROUTES: dict[Framework, str] = {
        Framework.GIN: "routes/gin_routes.go.j2",
        Framework.ECHO: "routes/echo_routes.go.j2",
        Framework.FIBER: "routes/fiber_routes.go.j2",
    }

    _HANDLERS: dict[Framework, str] = {
        Framework.GIN: "routes/gin_handlers.go.j2",
        Framework.ECHO: "routes/echo_handlers.go.j2",
        Framework.FIBER: "routes/fiber_handlers.go.j2",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        handlers_dir = layout_for(config).handlers_dir
        if config.framework is Framework.REVEL:
            return [
                RenderJob("routes/revel_routes.j2", "conf/routes"),
                RenderJob("routes/revel_controllers.go.j2", f"{handlers_dir}/controllers.go"),
            ]
        return [
            RenderJob(self._ROUTES[config.framework], "api/routes/routes.go"),
            RenderJob(self._HANDLERS[config.framework], f"{handlers_dir}/handlers.go"),
        ]
