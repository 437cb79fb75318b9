import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from postlink.database.connection import Database
from postlink.database.models import PostRecord
from postlink.service.exceptions import PersistenceError


class PostRepository:
    """Database operations for the posts table. Posts are insert-only."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def create(
        self,
        post_id: str,
        *,
        image: str,
        download_url: str,
        users: tuple[str, ...],
        categories: str | list[str] | None,
    ) -> PostRecord:
        """Insert one post row; created_at is assigned by the database.

        Raises:
            PersistenceError: if the insert fails or the id is already taken.
        """
        try:
            with self._database.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO posts (id, image, download_url, users, categories)
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING created_at
                        """,
                        (post_id, image, download_url, list(users), Jsonb(categories)),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to create post {post_id}: {exc}") from exc

        return PostRecord(
            id=post_id,
            image=image,
            download_url=download_url,
            users=users,
            categories=categories,
            created_at=row["created_at"] if row is not None else None,
        )

    def find_by_id(self, post_id: str) -> PostRecord | None:
        """Find a post by ID. Useful for tests."""
        with self._database.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, image, download_url, users, categories, created_at
                    FROM posts
                    WHERE id = %s
                    """,
                    (post_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return PostRecord(
            id=row["id"],
            image=row["image"],
            download_url=row["download_url"],
            users=tuple(row["users"] or ()),
            categories=row["categories"],
            created_at=row["created_at"],
        )
