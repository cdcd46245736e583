"""Logger package for the generated service."""

from __future__ import annotations

from goscaffold.config import LogKind, ProjectConfiguration

from .base import RenderJob, StepGenerator


class LoggingGenerator(StepGenerator):
    name = "logging"

    _TEMPLATES: dict[LogKind, str] = {
        LogKind.STANDARD: "logging/standard.go.j2",
        LogKind.LOGRUS: "logging/logrus.go.j2",
        LogKind.ZAP: "logging/zap.go.j2",
        LogKind.CHARM: "logging/charm.go.j2",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        return [RenderJob(self._TEMPLATES[config.logging], "pkg/logger/logger.go")]
