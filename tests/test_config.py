"""Tests for configuration validation and persistence.

Covers:
- Defaulting of every unset field
- Name and module-path validation
- Closed enumerations and accepted aliases
- The data-access/database cross-field rules and their warnings
- Loading options from YAML/JSON files and the environment
- Saving and reloading a validated configuration
"""

from __future__ import annotations

import errno
import json
from pathlib import Path

import pytest
import yaml

from goscaffold.config import (
    Architecture,
    AuthKind,
    CIProvider,
    ConfigFormat,
    Database,
    DataAccess,
    Framework,
    LogKind,
    ProjectConfiguration,
    ProjectOptions,
    validate_configuration,
)
from goscaffold.errors import FileSystemError, ValidationError


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    """An options set with only a name is fully defaulted."""

    def test_all_defaults(self):
        outcome = validate_configuration({"name": "my-api"})
        config = outcome.config

        assert config.name == "my-api"
        assert config.module_path == "github.com/username/my-api"
        assert config.framework is Framework.GIN
        assert config.data_access is DataAccess.GORM
        assert config.database is Database.POSTGRES
        assert config.architecture is Architecture.SIMPLE
        assert config.config_format is ConfigFormat.YAML
        assert config.auth is AuthKind.JWT
        assert config.logging is LogKind.ZAP
        assert config.ci is CIProvider.GITHUB
        assert config.testing is True
        assert config.docker is True
        assert outcome.warnings == []

    def test_default_toggles(self):
        config = validate_configuration({"name": "svc"}).config
        assert config.middleware.cors is True
        assert config.middleware.rate_limit is False
        assert config.features.health_check is True
        assert config.features.api_docs is True
        assert config.features.metrics is False

    def test_explicit_module_path_is_kept(self):
        config = validate_configuration(
            {"name": "svc", "module_path": "gitlab.com/acme/svc"}
        ).config
        assert config.module_path == "gitlab.com/acme/svc"

    def test_empty_strings_mean_unset(self):
        config = validate_configuration(
            {"name": "svc", "framework": "", "architecture": "  "}
        ).config
        assert config.framework is Framework.GIN
        assert config.architecture is Architecture.SIMPLE

    def test_explicit_false_booleans_survive(self):
        config = validate_configuration({"name": "svc", "testing": False, "docker": False}).config
        assert config.testing is False
        assert config.docker is False

    def test_accepts_project_options_instance(self):
        options = ProjectOptions(name="svc", framework="fiber")
        assert validate_configuration(options).config.framework is Framework.FIBER

    def test_configuration_is_immutable(self):
        config = validate_configuration({"name": "svc"}).config
        with pytest.raises(Exception):
            config.name = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Name and module path
# ---------------------------------------------------------------------------


class TestNameValidation:
    """Project names are restricted to letters, digits, '-' and '_'."""

    @pytest.mark.parametrize("name", ["my-api", "my_api", "API2", "a"])
    def test_valid_names(self, name: str):
        assert validate_configuration({"name": name}).config.name == name

    @pytest.mark.parametrize("name", ["my api", "my/api", "../escape", "api!", "naïve"])
    def test_invalid_names(self, name: str):
        with pytest.raises(ValidationError) as exc_info:
            validate_configuration({"name": name})
        assert exc_info.value.field == "name"

    def test_missing_name(self):
        with pytest.raises(ValidationError, match="project name is required"):
            validate_configuration({})

    def test_name_is_stripped(self):
        assert validate_configuration({"name": "  svc  "}).config.name == "svc"

    def test_module_path_with_whitespace_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_configuration({"name": "svc", "module_path": "github.com/a b"})
        assert exc_info.value.field == "module_path"

    def test_invalid_name_has_no_side_effects(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ValidationError):
            validate_configuration({"name": "bad name"})
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TestEnumerations:
    """Every enumerated field rejects values outside its domain."""

    @pytest.mark.parametrize(
        "field_name",
        ["framework", "data_access", "database", "architecture",
         "config_format", "auth", "logging", "ci"],
    )
    def test_unknown_value_names_the_field(self, field_name: str):
        with pytest.raises(ValidationError) as exc_info:
            validate_configuration({"name": "svc", field_name: "bogus"})
        assert exc_info.value.field == field_name
        assert "bogus" in str(exc_info.value)

    def test_values_are_case_insensitive(self):
        config = validate_configuration({"name": "svc", "framework": "Echo"}).config
        assert config.framework is Framework.ECHO

    @pytest.mark.parametrize(
        "alias, expected",
        [("postgresql", Database.POSTGRES), ("mongodb", Database.MONGO), ("in-memory", Database.MEMORY)],
    )
    def test_database_aliases(self, alias: str, expected: Database):
        config = validate_configuration({"name": "svc", "database": alias}).config
        assert config.database is expected

    def test_wrong_type_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_configuration({"name": "svc", "middleware": {"cors": "sometimes"}})
        assert exc_info.value.field.startswith("middleware")


# ---------------------------------------------------------------------------
# Cross-field rules
# ---------------------------------------------------------------------------


class TestDataAccessRules:
    """Interplay between the data-access layer and the database."""

    def test_none_clears_database_with_warning(self):
        outcome = validate_configuration(
            {"name": "svc", "data_access": "none", "database": "mysql"}
        )
        assert outcome.config.database is None
        assert outcome.config.has_database is False
        assert len(outcome.warnings) == 1
        assert "mysql" in outcome.warnings[0]

    def test_none_without_database_has_no_warning(self):
        outcome = validate_configuration({"name": "svc", "data_access": "none"})
        assert outcome.config.database is None
        assert outcome.warnings == []

    def test_database_defaults_to_postgres(self):
        config = validate_configuration({"name": "svc", "data_access": "sqlx"}).config
        assert config.database is Database.POSTGRES
        assert config.uses_sql is True

    def test_non_sql_database_warns(self):
        outcome = validate_configuration({"name": "svc", "data_access": "gorm", "database": "mongo"})
        assert outcome.config.database is Database.MONGO
        assert outcome.config.has_database is True
        assert outcome.config.uses_sql is False
        assert any("native mongo driver" in w for w in outcome.warnings)

    def test_sql_database_has_no_warning(self):
        outcome = validate_configuration({"name": "svc", "database": "sqlite"})
        assert outcome.warnings == []


# ---------------------------------------------------------------------------
# Loading and saving
# ---------------------------------------------------------------------------


class TestPersistence:
    """Options files, the environment and saved configurations."""

    def test_load_yaml_options(self, tmp_path: Path):
        path = tmp_path / "project.yaml"
        path.write_text(
            yaml.safe_dump({"name": "svc", "framework": "echo", "features": {"metrics": True}}),
            encoding="utf-8",
        )
        options = ProjectOptions.load(path)
        assert options.framework == "echo"
        assert options.features.metrics is True

    def test_load_json_options(self, tmp_path: Path):
        path = tmp_path / "project.json"
        path.write_text(json.dumps({"name": "svc", "database": "mysql"}), encoding="utf-8")
        assert ProjectOptions.load(path).database == "mysql"

    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileSystemError):
            ProjectOptions.load(tmp_path / "missing.yaml")

    def test_load_malformed_file(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError) as exc_info:
            ProjectOptions.load(path)
        assert exc_info.value.field == "options"

    def test_load_non_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="mapping"):
            ProjectOptions.load(path)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("GOSCAFFOLD_NAME", "env-svc")
        monkeypatch.setenv("GOSCAFFOLD_FRAMEWORK", "fiber")
        monkeypatch.setenv("GOSCAFFOLD_DATABASE", "sqlite")
        monkeypatch.delenv("GOSCAFFOLD_MODULE_PATH", raising=False)

        options = ProjectOptions.from_env()
        assert options.name == "env-svc"
        assert options.framework == "fiber"
        assert options.database == "sqlite"
        assert options.module_path is None

    @pytest.mark.parametrize("suffix", [".yaml", ".json"])
    def test_save_and_reload(self, tmp_path: Path, make_config, suffix: str):
        config = make_config(framework="echo", database="mysql", features={"metrics": True})
        path = config.save(tmp_path / f"saved{suffix}")

        assert path.exists()
        reloaded = ProjectConfiguration.load(path)
        assert reloaded == config

    def test_save_into_unwritable_location(self, tmp_path: Path, default_config):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        with pytest.raises(FileSystemError) as exc_info:
            default_config.save(blocker / "saved.yaml")
        assert exc_info.value.path == str(blocker / "saved.yaml")
        assert exc_info.value.errno in (errno.EEXIST, errno.ENOTDIR)
        assert "cannot save configuration" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)
