"""Domain model files, placed where the architecture keeps its models."""

from __future__ import annotations

from goscaffold.config import ProjectConfiguration

from .base import RenderJob, StepGenerator
from .layout import layout_for


class ModelGenerator(StepGenerator):
    name = "models"

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        models_dir = layout_for(config).models_dir
        return [
            RenderJob("models/user.go.j2", f"{models_dir}/user.go"),
            RenderJob("models/response.go.j2", f"{models_dir}/response.go"),
        ]
