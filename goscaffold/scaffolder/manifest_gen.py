"""Build manifest and project README, always rendered last."""

from __future__ import annotations

from goscaffold.config import ProjectConfiguration

from .base import RenderJob, StepGenerator


class ManifestGenerator(StepGenerator):
    name = "manifest"

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        return [
            RenderJob("manifest/Makefile.j2", "Makefile"),
            RenderJob("manifest/README.md.j2", "README.md"),
        ]
