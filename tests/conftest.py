"""Shared pytest fixtures for the goscaffold test suite.

Provides reusable fixtures for:
- Validated configurations (default and customised)
- A fixed generation timestamp for byte-identical output
- The packaged template renderer and its render context
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from goscaffold.config import ProjectConfiguration, validate_configuration
from goscaffold.scaffolder import TemplateRenderer, build_context


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------

FIXED_NOW = datetime(2024, 1, 15, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed generation timestamp so repeated runs are byte-identical."""
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config() -> Callable[..., ProjectConfiguration]:
    """Factory building a validated configuration from keyword overrides.

    ``make_config(framework="echo", database="mysql")`` validates
    ``{"name": "svc1", **overrides}`` and returns the configuration.
    """

    def _make(**overrides: Any) -> ProjectConfiguration:
        options: dict[str, Any] = {"name": "svc1"}
        options.update(overrides)
        return validate_configuration(options).config

    return _make


@pytest.fixture
def default_config(make_config) -> ProjectConfiguration:
    """svc1 with every option left at its default (gin, gorm, postgres, simple)."""
    return make_config()


@pytest.fixture
def full_config(make_config) -> ProjectConfiguration:
    """A configuration with every middleware and feature switched on."""
    return make_config(
        middleware={
            "cors": True,
            "rate_limit": True,
            "request_logging": True,
            "auth": True,
            "error_handler": True,
        },
        features={
            "websocket": True,
            "caching": True,
            "health_check": True,
            "api_docs": True,
            "static_files": True,
            "i18n": True,
            "metrics": True,
            "cloud_config": True,
        },
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """The renderer over the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def render(renderer, fixed_now) -> Callable[[str, ProjectConfiguration], str]:
    """Render one packaged template for a configuration."""

    def _render(template: str, config: ProjectConfiguration) -> str:
        return renderer.render(template, build_context(config, fixed_now))

    return _render


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory for generated projects (auto-cleanup)."""
    out = tmp_path / "out"
    out.mkdir()
    return out
