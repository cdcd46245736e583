"""Template context construction.

The context is a read-only mapping derived once from a
:class:`~goscaffold.config.ProjectConfiguration`.  Besides the raw choices
(as plain strings, so templates can compare them with ``==`` and ``in``)
it carries derived values: the database connection profile, the
architecture layout, and the ordered ``go.mod`` requirement list.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from goscaffold.config import (
    AuthKind,
    Database,
    DataAccess,
    Framework,
    LogKind,
    ProjectConfiguration,
)

from .layout import layout_for

APP_PORT = 8080
GO_VERSION = "1.22"


# ---------------------------------------------------------------------------
# Database profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatabaseProfile:
    """Connection defaults and driver wiring for one database kind."""

    kind: str
    family: str  # sql, document, keyvalue or memory
    host: str = "localhost"
    port: Optional[int] = None
    user: str = ""
    password: str = ""
    name: str = ""
    path: str = ""
    service: str = ""
    image: str = ""
    sql_driver: str = ""
    sql_driver_import: str = ""
    gorm_driver_import: str = ""
    gorm_open: str = ""

    @property
    def is_sql(self) -> bool:
        return self.family == "sql"


def database_profile(config: ProjectConfiguration) -> Optional[DatabaseProfile]:
    """Build the connection profile for *config*, or ``None`` without a database."""
    if not config.has_database:
        return None

    db_name = f"{config.name}_db"
    kind = config.database
    if kind is Database.POSTGRES:
        return DatabaseProfile(
            kind=kind.value,
            family="sql",
            port=5432,
            user="postgres",
            password="postgres",
            name=db_name,
            service="postgres",
            image="postgres:15-alpine",
            sql_driver="postgres",
            sql_driver_import="github.com/lib/pq",
            gorm_driver_import="gorm.io/driver/postgres",
            gorm_open="postgres.Open",
        )
    if kind is Database.MYSQL:
        return DatabaseProfile(
            kind=kind.value,
            family="sql",
            port=3306,
            user="root",
            password="root",
            name=db_name,
            service="mysql",
            image="mysql:8.0",
            sql_driver="mysql",
            sql_driver_import="github.com/go-sql-driver/mysql",
            gorm_driver_import="gorm.io/driver/mysql",
            gorm_open="mysql.Open",
        )
    if kind is Database.SQLITE:
        return DatabaseProfile(
            kind=kind.value,
            family="sql",
            path=f"./{config.name}.db",
            sql_driver="sqlite3",
            sql_driver_import="github.com/mattn/go-sqlite3",
            gorm_driver_import="gorm.io/driver/sqlite",
            gorm_open="sqlite.Open",
        )
    if kind is Database.MONGO:
        return DatabaseProfile(
            kind=kind.value,
            family="document",
            port=27017,
            user="admin",
            password="admin",
            name=db_name,
            service="mongodb",
            image="mongo:7",
        )
    if kind is Database.REDIS:
        return DatabaseProfile(
            kind=kind.value,
            family="keyvalue",
            port=6379,
            service="redis",
            image="redis:7-alpine",
        )
    return DatabaseProfile(kind=kind.value, family="memory")


# ---------------------------------------------------------------------------
# go.mod requirements
# ---------------------------------------------------------------------------


_FRAMEWORK_MODULES: dict[Framework, tuple[str, str]] = {
    Framework.GIN: ("github.com/gin-gonic/gin", "v1.9.1"),
    Framework.ECHO: ("github.com/labstack/echo/v4", "v4.11.4"),
    Framework.FIBER: ("github.com/gofiber/fiber/v2", "v2.52.0"),
    Framework.REVEL: ("github.com/revel/revel", "v1.1.0"),
}

_GORM_DRIVERS: dict[Database, tuple[str, str]] = {
    Database.POSTGRES: ("gorm.io/driver/postgres", "v1.5.4"),
    Database.MYSQL: ("gorm.io/driver/mysql", "v1.5.2"),
    Database.SQLITE: ("gorm.io/driver/sqlite", "v1.5.4"),
}

_SQL_DRIVERS: dict[Database, tuple[str, str]] = {
    Database.POSTGRES: ("github.com/lib/pq", "v1.10.9"),
    Database.MYSQL: ("github.com/go-sql-driver/mysql", "v1.7.1"),
    Database.SQLITE: ("github.com/mattn/go-sqlite3", "v1.14.18"),
}

_LOGGER_MODULES: dict[LogKind, tuple[tuple[str, str], ...]] = {
    LogKind.STANDARD: (),
    LogKind.LOGRUS: (("github.com/sirupsen/logrus", "v1.9.3"),),
    LogKind.ZAP: (("go.uber.org/zap", "v1.26.0"),),
    LogKind.CHARM: (
        ("github.com/charmbracelet/log", "v0.4.0"),
        ("github.com/charmbracelet/lipgloss", "v0.9.1"),
    ),
}

_SWAGGER_MODULES: dict[Framework, tuple[tuple[str, str], ...]] = {
    Framework.GIN: (
        ("github.com/swaggo/files", "v1.0.1"),
        ("github.com/swaggo/gin-swagger", "v1.6.0"),
    ),
    Framework.ECHO: (("github.com/swaggo/echo-swagger", "v1.4.1"),),
    Framework.FIBER: (("github.com/swaggo/fiber-swagger", "v1.3.0"),),
    Framework.REVEL: (),
}

_MONGO_DRIVER = ("go.mongodb.org/mongo-driver", "v1.13.1")
_REDIS_CLIENT = ("github.com/redis/go-redis/v9", "v9.3.0")


def resolve_requirements(config: ProjectConfiguration) -> list[tuple[str, str]]:
    """Return the ordered, de-duplicated ``(module, version)`` requirements."""
    required: list[tuple[str, str]] = [_FRAMEWORK_MODULES[config.framework]]
    if config.framework is Framework.REVEL:
        required.append(("github.com/revel/modules", "v1.1.0"))

    if config.has_database:
        if config.database is Database.MONGO:
            required.append(_MONGO_DRIVER)
        elif config.database is Database.REDIS:
            required.append(_REDIS_CLIENT)
        elif config.database is Database.MEMORY:
            pass
        elif config.data_access is DataAccess.GORM:
            required.append(("gorm.io/gorm", "v1.25.5"))
            required.append(_GORM_DRIVERS[config.database])
        elif config.data_access is DataAccess.SQLX:
            required.append(("github.com/jmoiron/sqlx", "v1.3.5"))
            required.append(_SQL_DRIVERS[config.database])
        else:
            required.append(_SQL_DRIVERS[config.database])

    required.extend(_LOGGER_MODULES[config.logging])

    if config.auth is AuthKind.JWT:
        required.append(("github.com/golang-jwt/jwt/v5", "v5.2.0"))
    elif config.auth is AuthKind.OAUTH2:
        required.append(("golang.org/x/oauth2", "v0.15.0"))

    if config.middleware.rate_limit and config.framework is not Framework.FIBER:
        required.append(("golang.org/x/time", "v0.5.0"))

    features = config.features
    if features.api_docs:
        required.append(("github.com/swaggo/swag", "v1.16.2"))
        required.extend(_SWAGGER_MODULES[config.framework])
    if features.metrics:
        required.append(("github.com/prometheus/client_golang", "v1.17.0"))
    if features.websocket:
        if config.framework is Framework.FIBER:
            required.append(("github.com/gofiber/contrib/websocket", "v1.3.0"))
        elif config.framework is not Framework.REVEL:
            required.append(("github.com/gorilla/websocket", "v1.5.1"))
    if features.caching:
        required.append(_REDIS_CLIENT)
    if features.i18n:
        required.append(("github.com/nicksnyder/go-i18n/v2", "v2.3.0"))
        required.append(("golang.org/x/text", "v0.14.0"))
    if features.cloud_config:
        required.append(("github.com/sagikazarmark/crypt", "v0.17.0"))

    required.append(("github.com/spf13/viper", "v1.18.2"))
    required.append(("github.com/joho/godotenv", "v1.5.1"))

    seen: set[str] = set()
    ordered: list[tuple[str, str]] = []
    for module, version in required:
        if module in seen:
            continue
        seen.add(module)
        ordered.append((module, version))
    return ordered


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


def build_context(
    config: ProjectConfiguration,
    generated_at: Optional[datetime] = None,
) -> Mapping[str, Any]:
    """Build the read-only template context for *config*.

    Args:
        config: The validated configuration.
        generated_at: Timestamp recorded in generated files.  Inject a fixed
            value for byte-identical output across runs.  Aware values are
            converted to UTC; naive ones are taken as local time.
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)

    profile = database_profile(config)
    middleware = config.middleware
    auth_middleware = middleware.auth and config.auth is not AuthKind.NONE
    context: dict[str, Any] = {
        "config": config,
        "project_name": config.name,
        "module_path": config.module_path,
        "framework": config.framework.value,
        "orm": config.data_access.value,
        "database": config.database.value if config.database else "",
        "architecture": config.architecture.value,
        "config_format": config.config_format.value,
        "auth": config.auth.value,
        "logging": config.logging.value,
        "testing": config.testing,
        "docker": config.docker,
        "ci": config.ci.value,
        "middleware": middleware,
        "features": config.features,
        "auth_middleware": auth_middleware,
        "uses_middleware": (
            middleware.cors
            or middleware.rate_limit
            or middleware.request_logging
            or middleware.error_handler
            or auth_middleware
        ),
        "layout": layout_for(config),
        "db": profile,
        "has_database": profile is not None,
        "sql_database": profile is not None and profile.is_sql,
        "app_port": APP_PORT,
        "go_version": GO_VERSION,
        "requirements": resolve_requirements(config),
        "generated_at": generated_at.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
    }
    return MappingProxyType(context)
