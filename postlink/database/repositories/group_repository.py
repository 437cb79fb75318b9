from typing import Any

import psycopg
from psycopg.rows import dict_row

from postlink.database.connection import Database
from postlink.database.models import GroupRecord
from postlink.resolution.base import BaseGroupCatalog
from postlink.service.exceptions import PersistenceError

# PostgreSQL text values cannot hold NUL, so no stored group can match a key with one.
_NUL = "\x00"


def _row_to_group(row: dict[str, Any]) -> GroupRecord:
    return GroupRecord(
        id=row["id"],
        members=tuple(row["members"] or ()),
        alternate_names=frozenset(row["alternate_names"] or ()),
    )


class GroupRepository(BaseGroupCatalog):
    """Read-only queries against the groups table.

    Database failures surface as PersistenceError.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def get(self, group_id: str) -> GroupRecord | None:
        """Find a group by its exact identifier."""
        if _NUL in group_id:
            return None
        row = self._fetch_one(
            """
            SELECT id, members, alternate_names
            FROM groups
            WHERE id = %s
            """,
            (group_id,),
        )
        return _row_to_group(row) if row is not None else None

    def find_by_alternate_name(self, name: str) -> GroupRecord | None:
        """Find the first group (by identifier) whose alternate_names contain name."""
        if _NUL in name:
            return None
        row = self._fetch_one(
            """
            SELECT id, members, alternate_names
            FROM groups
            WHERE %s = ANY(alternate_names)
            ORDER BY id
            LIMIT 1
            """,
            (name,),
        )
        return _row_to_group(row) if row is not None else None

    def list_all(self) -> list[GroupRecord]:
        """Return every group ordered by identifier."""
        try:
            with self._database.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        "SELECT id, members, alternate_names FROM groups ORDER BY id"
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to list groups: {exc}") from exc
        return [_row_to_group(row) for row in rows]

    def _fetch_one(
        self, query: str, params: tuple[object, ...]
    ) -> dict[str, Any] | None:
        try:
            with self._database.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query, params)
                    row: dict[str, Any] | None = cur.fetchone()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to look up group {params[0]!r}: {exc}") from exc
        return row
