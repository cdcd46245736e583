"""Optional feature files, startup banner and API docs stub.

Every feature is gated independently; ``FeatureGenerator`` returns the
union of the enabled ones in a fixed order.
"""

from __future__ import annotations

from goscaffold.config import ProjectConfiguration

from .base import RenderJob, StepGenerator
from .layout import layout_for


class FeatureGenerator(StepGenerator):
    name = "features"

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        features = config.features
        jobs: list[RenderJob] = []

        if features.websocket:
            handlers_dir = layout_for(config).handlers_dir
            jobs.append(RenderJob("features/websocket.go.j2", f"{handlers_dir}/websocket.go"))
        if features.caching:
            jobs.append(RenderJob("features/cache.go.j2", "pkg/cache/cache.go"))
        if features.metrics:
            jobs.append(RenderJob("features/metrics.go.j2", "pkg/metrics/metrics.go"))
            jobs.append(RenderJob("features/prometheus.yml.j2", "deployments/prometheus.yml"))
        if features.static_files:
            jobs.append(RenderJob("features/style.css.j2", "static/css/style.css"))
            jobs.append(RenderJob("features/app.js.j2", "static/js/app.js"))
            jobs.append(RenderJob("features/index.html.j2", "static/index.html"))
        if features.i18n:
            jobs.append(RenderJob("features/i18n.go.j2", "pkg/i18n/i18n.go"))
            jobs.append(RenderJob("features/locale_en.json.j2", "locales/en.json"))
            jobs.append(RenderJob("features/locale_es.json.j2", "locales/es.json"))
        if features.cloud_config:
            jobs.append(RenderJob("features/remote.go.j2", "pkg/config/remote.go"))
        return jobs


class StartupGenerator(StepGenerator):
    """Console banner printed when the service starts."""

    name = "startup"

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        return [RenderJob("startup/startup.go.j2", "pkg/startup/startup.go")]


class DocsGenerator(StepGenerator):
    """Swagger documentation stub (``docs/docs.go``)."""

    name = "docs"

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        if not config.features.api_docs:
            return []
        return [RenderJob("docs/docs.go.j2", "docs/docs.go")]
