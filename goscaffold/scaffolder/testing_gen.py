"""Go test scaffolding for the generated service."""

from __future__ import annotations

from goscaffold.config import ProjectConfiguration

from .base import RenderJob, StepGenerator


class GoTestsGenerator(StepGenerator):
    """Smoke test, HTTP test helpers and a handler test (iff testing is on)."""

    name = "testing"

    _FILES: dict[str, str] = {
        "testing/main_test.go.j2": "main_test.go",
        "testing/testutils.go.j2": "test/testutils/utils.go",
        "testing/user_test.go.j2": "test/handlers/user_test.go",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        if not config.testing:
            return []
        return [RenderJob(template, dest) for template, dest in self._FILES.items()]
