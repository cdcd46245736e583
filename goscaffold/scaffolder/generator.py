"""Main scaffolding orchestrator.

Takes a validated ``ProjectConfiguration`` and generates a complete Go
service source tree: directories first, then every generation step in a
fixed order.  Each step's files are rendered and written before the next
step starts; the first failure halts generation and is re-raised as a
``GenerationError`` naming the step.  The orchestrator never deletes
anything -- rolling back a partial tree is the invoking layer's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, Union

from goscaffold.config import ProjectConfiguration
from goscaffold.errors import GenerationError, ScaffoldError

from .base import RenderJob, StepGenerator
from .context import build_context
from .core_gen import ConfigGenerator, CoreGenerator, FrameworkGenerator
from .database_gen import DatabaseGenerator
from .docker_gen import CIGenerator, DockerGenerator
from .feature_gen import DocsGenerator, FeatureGenerator, StartupGenerator
from .layout import plan_directories
from .logging_gen import LoggingGenerator
from .manifest_gen import ManifestGenerator
from .middleware_gen import MiddlewareGenerator
from .model_gen import ModelGenerator
from .routes_gen import RoutesGenerator
from .templates import TemplateRenderer
from .testing_gen import GoTestsGenerator
from .writer import FileWriter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# State and result types
# ---------------------------------------------------------------------------


class GenerationState(str, Enum):
    """Lifecycle of one generation run."""

    NOT_STARTED = "not_started"
    DIRECTORY_PLANNING = "directory_planning"
    CORE_GENERATION = "core_generation"
    FEATURE_GENERATION = "feature_generation"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Outcome of a successful generation run."""

    project_path: Path
    config: Optional[ProjectConfiguration] = None
    directories: list[str] = field(default_factory=list)
    files_created: list[str] = field(default_factory=list)
    steps_completed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# Steps that make up the core of the service; everything after them is
# feature generation.
_CORE_STEPS: frozenset[str] = frozenset({"core", "framework"})


def default_steps() -> list[StepGenerator]:
    """The generation steps, in the order they run."""
    return [
        CoreGenerator(),
        FrameworkGenerator(),
        DatabaseGenerator(),
        MiddlewareGenerator(),
        RoutesGenerator(),
        LoggingGenerator(),
        FeatureGenerator(),
        StartupGenerator(),
        DocsGenerator(),
        ModelGenerator(),
        ConfigGenerator(),
        GoTestsGenerator(),
        DockerGenerator(),
        CIGenerator(),
        ManifestGenerator(),
    ]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectConfiguration``, generates a directory tree containing:
    - go.mod, main.go, environment files and the framework bootstrap
    - database wiring, middleware, routes, handlers and the logger package
    - optional feature packages (websocket, cache, metrics, i18n, ...)
    - models, configuration loader and Go tests
    - Dockerfile / Compose stack and a CI/CD pipeline
    - Makefile and README

    Args:
        config: The validated configuration.
        renderer: Template renderer (defaults to the packaged templates).
        writer: File writer (injectable for failure testing).
        generated_at: Timestamp recorded in generated files.  Fix it to get
            byte-identical output across runs.
        warnings: Validator warnings to carry into the result.
    """

    def __init__(
        self,
        config: ProjectConfiguration,
        renderer: Optional[TemplateRenderer] = None,
        writer: Optional[FileWriter] = None,
        generated_at: Optional[datetime] = None,
        warnings: Sequence[str] = (),
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.writer = writer or FileWriter()
        self.generated_at = generated_at
        self.warnings = list(warnings)
        self.steps: list[StepGenerator] = default_steps()
        self.state = GenerationState.NOT_STARTED

    # -- Public API --------------------------------------------------------

    def preview(self) -> list[RenderJob]:
        """Return every planned job in generation order, touching nothing."""
        return [job for _, jobs in self._plan_steps() for job in jobs]

    def generate(self, output_dir: Union[str, Path]) -> GenerationResult:
        """Generate the complete project structure.

        Args:
            output_dir: Parent directory where the project folder will be
                created.  A subdirectory named after the project is created
                inside it.

        Returns:
            A ``GenerationResult`` describing what was written.

        Raises:
            GenerationError: on the first failing step, with the underlying
                error chained.
        """
        project_root = Path(output_dir) / self.config.name
        result = GenerationResult(
            project_path=project_root,
            config=self.config,
            warnings=list(self.warnings),
        )

        # 1. Plan and create the directory skeleton
        self.state = GenerationState.DIRECTORY_PLANNING
        try:
            planned = self._plan_steps()
            directories = plan_directories(self.config)
            self.writer.create_directories(project_root, directories)
        except GenerationError:
            self.state = GenerationState.FAILED
            raise
        except ScaffoldError as exc:
            self.state = GenerationState.FAILED
            raise GenerationError("directories", exc) from exc
        result.directories = directories

        context = build_context(self.config, self.generated_at)

        # 2. Run every step in order
        for step, jobs in planned:
            if step.name in _CORE_STEPS:
                self.state = GenerationState.CORE_GENERATION
            else:
                self.state = GenerationState.FEATURE_GENERATION

            if not jobs:
                logger.debug("Step %s: nothing to generate", step.name)
                continue

            logger.info("Generating %s (%d files)", step.name, len(jobs))
            for job in jobs:
                try:
                    content = self.renderer.render(job.template, context)
                    self.writer.write(project_root / job.destination, content)
                except ScaffoldError as exc:
                    self.state = GenerationState.FAILED
                    logger.debug("Step %s failed on %s", step.name, job.destination)
                    raise GenerationError(step.name, exc, job.destination) from exc
                result.files_created.append(job.destination)
            result.steps_completed.append(step.name)

        self.state = GenerationState.DONE
        logger.info(
            "Generated %d files in %d directories under %s",
            len(result.files_created),
            len(result.directories),
            project_root,
        )
        return result

    # -- Planning ----------------------------------------------------------

    def _plan_steps(self) -> list[tuple[StepGenerator, list[RenderJob]]]:
        """Plan every step and reject two steps claiming one destination."""
        owners: dict[str, str] = {}
        planned: list[tuple[StepGenerator, list[RenderJob]]] = []
        for step in self.steps:
            jobs = step.plan(self.config)
            for job in jobs:
                previous = owners.get(job.destination)
                if previous is not None:
                    raise GenerationError(
                        step.name,
                        ScaffoldError(f"destination already planned by step '{previous}'"),
                        job.destination,
                    )
                owners[job.destination] = step.name
            planned.append((step, jobs))
        return planned
