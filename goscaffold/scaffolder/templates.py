"""Jinja2 template rendering for generated Go projects.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``goscaffold/scaffolder/templates/`` directory and renders them with the
read-only project context.  Rendering is pure: it returns a complete string
and never touches the file system, so a failed render never leaves a
partially written file behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    select_autoescape,
)

from goscaffold.errors import TemplateExecError, TemplateParseError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Undefined context fields are errors rather than
    empty strings, so a template that references a missing key fails loudly.
    """

    def __init__(self, template_dir: Union[str, Path, None] = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["upper"] = _upper_filter
        self.env.filters["lower"] = _lower_filter
        self.env.filters["title"] = _title_filter
        self.env.filters["capitalize"] = _capitalize_filter

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"core/main.go.j2"``).
            context: Mapping of variables available inside the template.

        Returns:
            The rendered template content as a string.

        Raises:
            TemplateParseError: if the template is missing or malformed.
            TemplateExecError: if execution references an undefined field or
                applies an operation to a value of the wrong type.
        """
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as exc:
            raise TemplateParseError(template_path, f"template not found: {exc.name}") from exc
        except TemplateSyntaxError as exc:
            raise TemplateParseError(template_path, exc.message or str(exc), exc.lineno) from exc

        logger.debug("Rendering %s", template_path)
        return _execute(template_path, template.render, context)

    def render_string(
        self,
        template_string: str,
        context: Mapping[str, Any],
        name: str = "<string>",
    ) -> str:
        """Render an inline template string with the provided context.

        Useful for rendering small template fragments that are not stored as
        files.
        """
        try:
            template = self.env.from_string(template_string)
        except TemplateSyntaxError as exc:
            raise TemplateParseError(name, exc.message or str(exc), exc.lineno) from exc
        return _execute(name, template.render, context)

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory and use forward
        slashes.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )

    def check_templates(self) -> list[str]:
        """Parse every shipped template without rendering it.

        Returns:
            The list of templates checked.

        Raises:
            TemplateParseError: for the first template that fails to parse.
        """
        checked: list[str] = []
        for name in self.list_templates():
            try:
                self.env.get_template(name)
            except TemplateSyntaxError as exc:
                raise TemplateParseError(name, exc.message or str(exc), exc.lineno) from exc
            checked.append(name)
        return checked


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _upper_filter(value: str) -> str:
    return str(value).upper()


def _lower_filter(value: str) -> str:
    return str(value).lower()


def _title_filter(value: str) -> str:
    """Upper-case the first letter of each word, leaving the rest untouched.

    ``"my-api service"`` becomes ``"My-api Service"``; unlike Jinja's builtin
    ``title`` the remaining letters keep their case.
    """
    return " ".join(word[:1].upper() + word[1:] for word in str(value).split(" "))


def _capitalize_filter(value: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    text = str(value)
    return text[:1].upper() + text[1:].lower()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _execute(name: str, render: Any, context: Mapping[str, Any]) -> str:
    """Run a compiled template, translating execution failures."""
    try:
        return render(dict(context))
    except TemplateNotFound as exc:
        raise TemplateParseError(name, f"template not found: {exc.name}") from exc
    except UndefinedError as exc:
        raise TemplateExecError(name, exc.message or str(exc)) from exc
    except TemplateSyntaxError as exc:
        # Raised lazily for included or imported templates.
        raise TemplateParseError(exc.name or name, exc.message or str(exc), exc.lineno) from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise TemplateExecError(name, str(exc)) from exc
