"""Shared shapes for the feature generators."""

from __future__ import annotations

from dataclasses import dataclass

from goscaffold.config import ProjectConfiguration


@dataclass(frozen=True)
class RenderJob:
    """One template to render and the project-relative file it becomes."""

    template: str
    destination: str


class StepGenerator:
    """A named generation step.

    Subclasses implement :meth:`plan`, a pure function of the configuration
    returning the jobs for this step (an empty list when the step is
    disabled).  The orchestrator renders and writes them in order.
    """

    name: str = ""

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
