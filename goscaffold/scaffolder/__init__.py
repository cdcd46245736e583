"""goscaffold scaffolder -- generates complete Go web-service source trees.

This package takes a validated ``ProjectConfiguration`` and renders a
project directory (framework bootstrap, database wiring, middleware,
handlers, Docker and CI files) from the packaged Jinja2 templates.

Quick usage::

    from goscaffold.config import validate_configuration
    from goscaffold.scaffolder import ProjectGenerator

    outcome = validate_configuration({"name": "my-api", "framework": "echo"})
    generator = ProjectGenerator(outcome.config, warnings=outcome.warnings)
    result = generator.generate("/tmp/output")
"""

from goscaffold.scaffolder.base import RenderJob, StepGenerator
from goscaffold.scaffolder.context import build_context
from goscaffold.scaffolder.generator import (
    GenerationResult,
    GenerationState,
    ProjectGenerator,
)
from goscaffold.scaffolder.layout import Layout, plan_directories
from goscaffold.scaffolder.templates import TemplateRenderer
from goscaffold.scaffolder.writer import FileWriter

__all__ = [
    "FileWriter",
    "GenerationResult",
    "GenerationState",
    "Layout",
    "ProjectGenerator",
    "RenderJob",
    "StepGenerator",
    "TemplateRenderer",
    "build_context",
    "plan_directories",
]
