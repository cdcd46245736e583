"""Container and CI/CD file generation.

The Docker step renders the image build file, a Compose stack with the
service plus its database (and optional cache/monitoring) containers, and
the build-context ignore list.  The CI step renders one pipeline file for
the chosen provider.
"""

from __future__ import annotations

from goscaffold.config import CIProvider, ProjectConfiguration

from .base import RenderJob, StepGenerator


class DockerGenerator(StepGenerator):
    """Generates the Dockerfile, docker-compose.yml and .dockerignore."""

    name = "docker"

    # Template name -> output file name
    _FILES: dict[str, str] = {
        "docker/Dockerfile.j2": "Dockerfile",
        "docker/docker-compose.yml.j2": "docker-compose.yml",
        "docker/dockerignore.j2": ".dockerignore",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        if not config.docker:
            return []
        return [RenderJob(template, dest) for template, dest in self._FILES.items()]


class CIGenerator(StepGenerator):
    """Generates the CI/CD pipeline for the chosen provider."""

    name = "ci"

    _PIPELINES: dict[CIProvider, tuple[str, str]] = {
        CIProvider.GITHUB: ("ci/github.yml.j2", ".github/workflows/ci-cd.yml"),
        CIProvider.GITLAB: ("ci/gitlab.yml.j2", ".gitlab-ci.yml"),
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        if config.ci is CIProvider.NONE:
            return []
        template, destination = self._PIPELINES[config.ci]
        return [RenderJob(template, destination)]
