"""Database connection setup."""

from __future__ import annotations

from goscaffold.config import Database, DataAccess, ProjectConfiguration

from .base import RenderJob, StepGenerator


class DatabaseGenerator(StepGenerator):
    """Writes ``pkg/database/database.go`` when a data-access layer is chosen.

    Relational databases are wired through the chosen layer; the others
    always use their native client.
    """

    name = "database"

    _SQL_TEMPLATES: dict[DataAccess, str] = {
        DataAccess.GORM: "database/gorm.go.j2",
        DataAccess.SQLX: "database/sqlx.go.j2",
        DataAccess.RAW: "database/raw.go.j2",
    }

    _NATIVE_TEMPLATES: dict[Database, str] = {
        Database.MONGO: "database/mongo.go.j2",
        Database.REDIS: "database/redis.go.j2",
        Database.MEMORY: "database/memory.go.j2",
    }

    def plan(self, config: ProjectConfiguration) -> list[RenderJob]:
        if not config.has_database:
            return []
        if config.uses_sql:
            template = self._SQL_TEMPLATES[config.data_access]
        else:
            template = self._NATIVE_TEMPLATES[config.database]
        return [RenderJob(template, "pkg/database/database.go")]
