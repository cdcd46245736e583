"""goscaffold configuration model.

Two models describe a generation run:

* :class:`ProjectOptions` -- the possibly-partial input produced by a
  front-end (command-line flags, an options file, or code).  Enumerated
  choices are kept as raw strings so the validator can name the offending
  field.
* :class:`ProjectConfiguration` -- the validated, fully defaulted and
  immutable value threaded through the whole pipeline.

:func:`validate_configuration` turns the former into the latter exactly once.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from goscaffold.errors import FileSystemError, ValidationError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Framework(str, Enum):
    """Web framework of the generated service."""
    GIN = "gin"
    ECHO = "echo"
    FIBER = "fiber"
    REVEL = "revel"


class DataAccess(str, Enum):
    """Data-access layer: full ORM, lightweight SQL helper, raw SQL, or none."""
    GORM = "gorm"
    SQLX = "sqlx"
    RAW = "raw"
    NONE = "none"


class Database(str, Enum):
    """Backing store. Only meaningful when the data-access layer is not ``none``."""
    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    MONGO = "mongo"
    REDIS = "redis"
    MEMORY = "memory"


class Architecture(str, Enum):
    """Directory layout convention."""
    SIMPLE = "simple"
    CLEAN = "clean"
    HEXAGONAL = "hexagonal"
    MVC = "mvc"
    CUSTOM = "custom"


class ConfigFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"
    TOML = "toml"


class AuthKind(str, Enum):
    JWT = "jwt"
    OAUTH2 = "oauth2"
    BASIC = "basic"
    NONE = "none"


class LogKind(str, Enum):
    """Logging library of the generated service."""
    STANDARD = "standard"
    LOGRUS = "logrus"
    ZAP = "zap"
    CHARM = "charm"


class CIProvider(str, Enum):
    NONE = "none"
    GITHUB = "github"
    GITLAB = "gitlab"


SQL_DATABASES: frozenset[Database] = frozenset(
    {Database.POSTGRES, Database.MYSQL, Database.SQLITE}
)

_ALIASES: dict[str, dict[str, str]] = {
    "database": {
        "postgresql": "postgres",
        "mongodb": "mongo",
        "in-memory": "memory",
    },
}

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

DEFAULT_MODULE_PREFIX = "github.com/username"


# ---------------------------------------------------------------------------
# Toggle groups
# ---------------------------------------------------------------------------


class MiddlewareOptions(BaseModel):
    """Independently gated HTTP middleware."""

    model_config = ConfigDict(frozen=True)

    cors: bool = Field(default=True)
    rate_limit: bool = Field(default=False)
    request_logging: bool = Field(default=True)
    auth: bool = Field(default=True, description="Requires auth != none")
    error_handler: bool = Field(default=True)


class FeatureOptions(BaseModel):
    """Optional features of the generated service."""

    model_config = ConfigDict(frozen=True)

    websocket: bool = Field(default=False)
    caching: bool = Field(default=False)
    health_check: bool = Field(default=True)
    api_docs: bool = Field(default=True, description="Swagger documentation stub")
    static_files: bool = Field(default=False)
    i18n: bool = Field(default=False)
    metrics: bool = Field(default=False)
    cloud_config: bool = Field(default=False)


# ---------------------------------------------------------------------------
# Input model
# ---------------------------------------------------------------------------


class ProjectOptions(BaseModel):
    """Possibly-partial generation options, as collected by a front-end.

    ``None`` (or an empty string) means "not chosen"; the validator fills in
    the documented default.
    """

    name: str = Field(default="", description="Project name (letters, digits, '-' and '_')")
    module_path: Optional[str] = Field(default=None)
    framework: Optional[str] = Field(default=None)
    data_access: Optional[str] = Field(default=None, description="gorm, sqlx, raw or none")
    database: Optional[str] = Field(default=None)
    architecture: Optional[str] = Field(default=None)
    config_format: Optional[str] = Field(default=None)
    auth: Optional[str] = Field(default=None)
    logging: Optional[str] = Field(default=None)
    ci: Optional[str] = Field(default=None)
    testing: Optional[bool] = Field(default=None)
    docker: Optional[bool] = Field(default=None)
    middleware: MiddlewareOptions = Field(default_factory=MiddlewareOptions)
    features: FeatureOptions = Field(default_factory=FeatureOptions)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProjectOptions":
        """Build options from a plain mapping, translating type errors.

        Raises:
            ValidationError: naming the first field pydantic rejected.
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            field_name = ".".join(str(part) for part in first["loc"]) or "options"
            raise ValidationError(field_name, first["msg"]) from exc

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ProjectOptions":
        """Load options from a YAML or JSON file (chosen by suffix)."""
        return cls.from_mapping(_read_mapping(Path(path)))

    @classmethod
    def from_env(cls) -> "ProjectOptions":
        """Build options from environment variables.

        Recognised variables (all optional):
            GOSCAFFOLD_NAME, GOSCAFFOLD_MODULE_PATH, GOSCAFFOLD_FRAMEWORK,
            GOSCAFFOLD_DATA_ACCESS, GOSCAFFOLD_DATABASE, GOSCAFFOLD_ARCHITECTURE.
        """
        return cls(
            name=os.environ.get("GOSCAFFOLD_NAME", ""),
            module_path=os.environ.get("GOSCAFFOLD_MODULE_PATH") or None,
            framework=os.environ.get("GOSCAFFOLD_FRAMEWORK") or None,
            data_access=os.environ.get("GOSCAFFOLD_DATA_ACCESS") or None,
            database=os.environ.get("GOSCAFFOLD_DATABASE") or None,
            architecture=os.environ.get("GOSCAFFOLD_ARCHITECTURE") or None,
        )


# ---------------------------------------------------------------------------
# Validated model
# ---------------------------------------------------------------------------


class ProjectConfiguration(BaseModel):
    """Validated, immutable description of the project to generate.

    Instances are created by :func:`validate_configuration` and never
    mutated afterwards; every generator only reads them.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    module_path: str
    framework: Framework = Framework.GIN
    data_access: DataAccess = DataAccess.GORM
    database: Optional[Database] = Database.POSTGRES
    architecture: Architecture = Architecture.SIMPLE
    config_format: ConfigFormat = ConfigFormat.YAML
    auth: AuthKind = AuthKind.JWT
    logging: LogKind = LogKind.ZAP
    ci: CIProvider = CIProvider.GITHUB
    testing: bool = True
    docker: bool = True
    middleware: MiddlewareOptions = Field(default_factory=MiddlewareOptions)
    features: FeatureOptions = Field(default_factory=FeatureOptions)

    @property
    def has_database(self) -> bool:
        return self.data_access is not DataAccess.NONE and self.database is not None

    @property
    def uses_sql(self) -> bool:
        """True when the database is relational (driven by the data-access layer)."""
        return self.has_database and self.database in SQL_DATABASES

    # -- Serialisation helpers ---------------------------------------------

    def save(self, path: Union[str, Path]) -> Path:
        """Persist the configuration as YAML or JSON (chosen by suffix).

        Returns:
            The path written.

        Raises:
            FileSystemError: if the file or its directory cannot be written.
        """
        target = Path(path)
        data = self.model_dump(mode="json")
        if target.suffix in (".yaml", ".yml"):
            content = yaml.safe_dump(data, sort_keys=False)
        else:
            content = json.dumps(data, indent=2)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise FileSystemError(
                str(target), f"cannot save configuration ({reason})", exc.errno
            ) from exc
        return target

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ProjectConfiguration":
        """Load a saved configuration and re-run validation on it."""
        options = ProjectOptions.load(path)
        return validate_configuration(options).config


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationOutcome:
    """A validated configuration plus the non-fatal warnings raised on the way."""

    config: ProjectConfiguration
    warnings: list[str] = field(default_factory=list)


def validate_configuration(
    options: Union[ProjectOptions, Mapping[str, Any]],
) -> ValidationOutcome:
    """Validate and default a possibly-partial set of options.

    Args:
        options: A :class:`ProjectOptions` or an equivalent mapping.

    Returns:
        A :class:`ValidationOutcome` holding the immutable configuration and
        any warnings (e.g. a database supplied alongside ``data_access=none``).

    Raises:
        ValidationError: if the name is empty or malformed, or any enumerated
            value is outside its domain.
    """
    if not isinstance(options, ProjectOptions):
        options = ProjectOptions.from_mapping(options)

    warnings: list[str] = []

    name = (options.name or "").strip()
    if not name:
        raise ValidationError("name", "project name is required")
    if not _NAME_PATTERN.match(name):
        raise ValidationError(
            "name",
            f"'{name}' may only contain letters, numbers, hyphens, and underscores",
        )

    module_path = (options.module_path or "").strip() or f"{DEFAULT_MODULE_PREFIX}/{name}"
    if any(ch.isspace() for ch in module_path):
        raise ValidationError("module_path", f"'{module_path}' must not contain whitespace")

    framework = _choice("framework", options.framework, Framework, Framework.GIN)
    data_access = _choice("data_access", options.data_access, DataAccess, DataAccess.GORM)
    database: Optional[Database] = _choice("database", options.database, Database, None)
    architecture = _choice("architecture", options.architecture, Architecture, Architecture.SIMPLE)
    config_format = _choice("config_format", options.config_format, ConfigFormat, ConfigFormat.YAML)
    auth = _choice("auth", options.auth, AuthKind, AuthKind.JWT)
    log_kind = _choice("logging", options.logging, LogKind, LogKind.ZAP)
    ci = _choice("ci", options.ci, CIProvider, CIProvider.GITHUB)

    if data_access is DataAccess.NONE:
        if database is not None:
            message = (
                f"database '{database.value}' specified but data access is 'none'; "
                "the database will be ignored"
            )
            logger.warning(message)
            warnings.append(message)
        database = None
    elif database is None:
        database = Database.POSTGRES
    elif database not in SQL_DATABASES:
        message = (
            f"data access '{data_access.value}' does not apply to "
            f"'{database.value}'; the native {database.value} driver will be wired instead"
        )
        logger.warning(message)
        warnings.append(message)

    config = ProjectConfiguration(
        name=name,
        module_path=module_path,
        framework=framework,
        data_access=data_access,
        database=database,
        architecture=architecture,
        config_format=config_format,
        auth=auth,
        logging=log_kind,
        ci=ci,
        testing=True if options.testing is None else options.testing,
        docker=True if options.docker is None else options.docker,
        middleware=options.middleware,
        features=options.features,
    )
    return ValidationOutcome(config=config, warnings=warnings)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _choice(field_name: str, raw: Optional[str], enum_cls: type[Enum], default: Any) -> Any:
    """Resolve a raw option string against its closed enumeration."""
    if raw is None:
        return default
    if isinstance(raw, enum_cls):
        return raw
    value = str(raw).strip().lower()
    if not value:
        return default
    value = _ALIASES.get(field_name, {}).get(value, value)
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            field_name, f"'{raw}' is not one of: {allowed}"
        ) from None


def _read_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON options file into a dict."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(str(path), "cannot read options file", exc.errno) from exc
    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(raw) or {}
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ValidationError("options", f"{path} is not valid: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError("options", f"{path} must contain a mapping at the top level")
    return data
