import os
from collections.abc import Callable, Generator

import pytest

from postlink.config.settings import Settings
from postlink.database.connection import Database


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "postlink_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def database(test_settings: Settings) -> Generator[Database, None, None]:
    try:
        db = Database.from_settings(test_settings)
        db.apply_schema()
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def integration_cleanup(database: Database) -> Generator[list[tuple[str, str]], None, None]:
    cleanup: list[tuple[str, str]] = []
    yield cleanup
    if not cleanup:
        return
    with database.connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "posts":
                    cur.execute("DELETE FROM posts WHERE id = %s", (row_id,))
            for table, row_id in cleanup:
                if table == "groups":
                    cur.execute("DELETE FROM groups WHERE id = %s", (row_id,))
        conn.commit()


@pytest.fixture
def seed_group(
    database: Database,
    integration_cleanup: list[tuple[str, str]],
) -> Callable[..., str]:
    def _seed(
        group_id: str,
        members: list[str | None],
        alternate_names: list[str] | None = None,
    ) -> str:
        with database.connection() as conn:
            conn.execute(
                """
                INSERT INTO groups (id, members, alternate_names)
                VALUES (%s, %s, %s)
                """,
                (group_id, members, alternate_names or []),
            )
            conn.commit()
        integration_cleanup.append(("groups", group_id))
        return group_id

    return _seed
