"""HTTP middleware, one file per enabled kind."""

from __future__ import annotations

from goscaffold.config import AuthKind, ProjectConfiguration

from .base import RenderJob, StepGenerator
from .layout import layout_for


class MiddlewareGenerator(StepGenerator):
    name = "middleware"

    _AUTH_TEMPLATES: dict[AuthKind, str] = {
        AuthKind.JWT: "middleware/auth_jwt.go.j2",
        AuthKind.OAUTH2: "middleware/auth_oauth2.go.j2",
        AuthKind.BASIC: "middleware/auth_basic.go.j2",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        base = layout_for(config).middleware_dir
        enabled = config.middleware
        jobs: list[RenderJob] = []

        if enabled.cors:
            jobs.append(RenderJob("middleware/cors.go.j2", f"{base}/cors.go"))
        if enabled.rate_limit:
            jobs.append(RenderJob("middleware/rate_limit.go.j2", f"{base}/rate_limit.go"))
        if enabled.request_logging:
            jobs.append(RenderJob("middleware/logging.go.j2", f"{base}/logging.go"))
        # Auth middleware needs a concrete scheme.
        if enabled.auth and config.auth is not AuthKind.NONE:
            jobs.append(RenderJob(self._AUTH_TEMPLATES[config.auth], f"{base}/auth.go"))
        if enabled.error_handler:
            jobs.append(RenderJob("middleware/error_handler.go.j2", f"{base}/error_handler.go"))
        return jobs
