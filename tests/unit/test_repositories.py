from unittest.mock import MagicMock

import psycopg
import pytest
from psycopg.types.json import Jsonb

from postlink.database.connection import Database
from postlink.database.models import GroupRecord
from postlink.database.repositories.group_repository import GroupRepository
from postlink.database.repositories.post_repository import PostRepository
from postlink.service.exceptions import PersistenceError


def _mock_database() -> tuple[MagicMock, MagicMock, MagicMock]:
    """Wire up a mock Database + connection + cursor."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    database = MagicMock(spec=Database)
    database.connection.return_value.__enter__ = MagicMock(return_value=mock_conn)
    database.connection.return_value.__exit__ = MagicMock(return_value=False)
    return database, mock_conn, mock_cursor


def _group_row(group_id: str = "Acme Corp") -> dict:
    return {"id": group_id, "members": ["u1", None, "u2"], "alternate_names": ["ACME"]}


class TestGroupRepositoryGet:
    def test_returns_group_when_found(self) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchone.return_value = _group_row()

        group = GroupRepository(database).get("Acme Corp")

        assert group == GroupRecord(
            id="Acme Corp",
            members=("u1", None, "u2"),
            alternate_names=frozenset({"ACME"}),
        )
        assert mock_cursor.execute.call_args.args[1] == ("Acme Corp",)

    def test_returns_none_when_missing(self) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchone.return_value = None

        assert GroupRepository(database).get("Nobody") is None

    def test_null_arrays_become_empty(self) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchone.return_value = {
            "id": "Acme Corp",
            "members": None,
            "alternate_names": None,
        }

        group = GroupRepository(database).get("Acme Corp")

        assert group is not None
        assert group.members == ()
        assert group.alternate_names == frozenset()


class TestGroupRepositoryAlternateName:
    def test_queries_array_membership(self) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchone.return_value = _group_row("ACME-001")

        group = GroupRepository(database).find_by_alternate_name("ACME")

        assert group is not None
        assert group.id == "ACME-001"
        query, params = mock_cursor.execute.call_args.args
        assert "ANY(alternate_names)" in query
        assert params == ("ACME",)


class TestGroupRepositoryListAll:
    def test_returns_all_rows_in_order(self) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchall.return_value = [_group_row("A"), _group_row("B")]

        groups = GroupRepository(database).list_all()

        assert [g.id for g in groups] == ["A", "B"]
        assert "ORDER BY id" in mock_cursor.execute.call_args.args[0]


class TestPostRepositoryCreate:
    def test_inserts_and_commits(self) -> None:
        database, mock_conn, mock_cursor = _mock_database()
        mock_cursor.fetchone.return_value = {"created_at": "2025-01-01T00:00:00Z"}

        post = PostRepository(database).create(
            "abc123",
            image="enc-name",
            download_url="enc-url",
            users=("u1", "u2"),
            categories=["CAS24Q2"],
        )

        params = mock_cursor.execute.call_args.args[1]
        assert params[:4] == ("abc123", "enc-name", "enc-url", ["u1", "u2"])
        assert isinstance(params[4], Jsonb)
        mock_conn.commit.assert_called_once()
        assert post.id == "abc123"
        assert post.users == ("u1", "u2")
        assert post.created_at == "2025-01-01T00:00:00Z"

    def test_wraps_database_errors(self) -> None:
        database, mock_conn, mock_cursor = _mock_database()
        mock_cursor.execute.side_effect = psycopg.errors.UniqueViolation("duplicate key")

        with pytest.raises(PersistenceError, match="Failed to create post abc123"):
            PostRepository(database).create(
                "abc123",
                image="enc-name",
                download_url="enc-url",
                users=(),
                categories="CAS24Q2",
            )
        mock_conn.commit.assert_not_called()


class TestPostRepositoryFindById:
    def test_returns_none_when_missing(self) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchone.return_value = None

        assert PostRepository(database).find_by_id("missing") is None


class TestGroupRepositoryErrors:
    @pytest.mark.parametrize("lookup", ["get", "find_by_alternate_name"])
    def test_key_with_nul_matches_nothing(self, lookup: str) -> None:
        database, _conn, mock_cursor = _mock_database()

        group = getattr(GroupRepository(database), lookup)("Acme\x00Corp")

        assert group is None
        mock_cursor.execute.assert_not_called()

    @pytest.mark.parametrize("lookup", ["get", "find_by_alternate_name"])
    def test_wraps_lookup_errors(self, lookup: str) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.execute.side_effect = psycopg.OperationalError("server closed the connection")

        with pytest.raises(PersistenceError, match="Failed to look up group 'Acme Corp'"):
            getattr(GroupRepository(database), lookup)("Acme Corp")

    def test_wraps_list_errors(self) -> None:
        database, _conn, mock_cursor = _mock_database()
        mock_cursor.execute.side_effect = psycopg.OperationalError("server closed the connection")

        with pytest.raises(PersistenceError, match="Failed to list groups"):
            GroupRepository(database).list_all()
