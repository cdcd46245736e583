"""Core project files and framework bootstrap."""

from __future__ import annotations

from goscaffold.config import ConfigFormat, Framework, ProjectConfiguration

from .base import RenderJob, StepGenerator


class CoreGenerator(StepGenerator):
    """Module manifest, entry point, environment files and ignore rules."""

    name = "core"

    # .env and .env.example share one template
    _FILES: tuple[tuple[str, str], ...] = (
        ("core/go.mod.j2", "go.mod"),
        ("core/main.go.j2", "main.go"),
        ("core/env.j2", ".env"),
        ("core/env.j2", ".env.example"),
        ("core/gitignore.j2", ".gitignore"),
    )

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        return [RenderJob(template, dest) for template, dest in self._FILES]


class FrameworkGenerator(StepGenerator):
    """Application bootstrap for the chosen web framework."""

    name = "framework"

    _TEMPLATES: dict[Framework, str] = {
        Framework.GIN: "framework/gin_app.go.j2",
        Framework.ECHO: "framework/echo_app.go.j2",
        Framework.FIBER: "framework/fiber_app.go.j2",
        Framework.REVEL: "framework/revel_app.go.j2",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        jobs = [RenderJob(self._TEMPLATES[config.framework], "internal/app/app.go")]
        if config.framework is Framework.REVEL:
            jobs.append(RenderJob("framework/revel_app.conf.j2", "conf/app.conf"))
        return jobs


class ConfigGenerator(StepGenerator):
    """Configuration loader plus a default settings file in the chosen format."""

    name = "config"

    _SETTINGS: dict[ConfigFormat, str] = {
        ConfigFormat.YAML: "config/config.yaml.j2",
        ConfigFormat.JSON: "config/config.json.j2",
        ConfigFormat.TOML: "config/config.toml.j2",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        return [
            RenderJob("config/config.go.j2", "pkg/config/config.go"),
            RenderJob(
                self._SETTINGS[config.config_format],
                f"config.{config.config_format.value}",
            ),
        ]
