from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool

from postlink.config.settings import Settings

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def build_conninfo(settings: Settings) -> str:
    """Build a libpq connection string from settings."""
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )


class Database:
    """Explicitly constructed handle around a psycopg connection pool.

    One instance is created at start-up and passed to every repository that
    needs it. Nothing in the package reaches for a module-level pool.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        pool = ConnectionPool(
            build_conninfo(settings),
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            open=True,
        )
        return cls(pool)

    @contextmanager
    def connection(self) -> Generator[psycopg.Connection[Any], None, None]:
        """Yield a connection from the pool. Caller manages commit/rollback."""
        with self._pool.connection() as conn:
            yield conn

    def apply_schema(self, path: Path | None = None) -> None:
        """Create the groups and posts tables if they do not exist yet."""
        sql = (path or SCHEMA_PATH).read_text(encoding="utf-8")
        with self.connection() as conn:
            conn.execute(sql)
            conn.commit()

    def close(self) -> None:
        self._pool.close()
