"""Error taxonomy for goscaffold.

Every failure raised by the library derives from :class:`ScaffoldError` and
carries a ``category`` string so the invoking layer can pick targeted
remediation guidance without parsing messages.
"""

from __future__ import annotations

from typing import Optional


class ScaffoldError(Exception):
    """Base class for all goscaffold failures."""

    category = "scaffold"


class ValidationError(ScaffoldError):
    """A configuration field is outside its allowed domain or malformed.

    Raised before any file-system activity takes place.
    """

    category = "validation"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"invalid {field}: {message}")


class TemplateParseError(ScaffoldError):
    """A template unit is malformed or missing (a defect in goscaffold itself)."""

    category = "template-parse"

    def __init__(
        self, template: str, message: str, lineno: Optional[int] = None
    ) -> None:
        self.template = template
        self.lineno = lineno
        location = f"{template}:{lineno}" if lineno else template
        super().__init__(f"template parse error in {location}: {message}")


class TemplateExecError(ScaffoldError):
    """A template failed while resolving its data context."""

    category = "template-exec"

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"template execution error in {template}: {message}")


class FileSystemError(ScaffoldError):
    """Creating a directory or writing a file failed.

    ``errno`` carries the operating-system error number when there is one,
    so callers can tell a permission problem from a full disk.
    """

    category = "filesystem"

    def __init__(self, path: str, message: str, errno: Optional[int] = None) -> None:
        self.path = path
        self.errno = errno
        super().__init__(f"{message}: {path}")


class GenerationError(ScaffoldError):
    """Raised by the orchestrator when a generation step fails.

    Wraps the first underlying error and annotates it with the generator
    step (and destination, when known) that produced it.
    """

    def __init__(
        self,
        step: str,
        cause: Exception,
        destination: Optional[str] = None,
    ) -> None:
        self.step = step
        self.cause = cause
        self.destination = destination
        where = f"{step} ({destination})" if destination else step
        super().__init__(f"generation failed at {where}: {cause}")

    @property
    def category(self) -> str:  # type: ignore[override]
        return getattr(self.cause, "category", "scaffold")
