"""SQLite database backend.

Used for local development and tests. Each operation opens its own
connection and commits before closing it, so no connection outlives a call.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from . import Database
from .posts import PostOperations
from .query import build_update_clause, build_where_clause
from .users import UserOperations
from ..exceptions import DatabaseError
from ..utils import isodatetime

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"

# Largest value of a SQLite INTEGER column
SQLITE_MAX_INTEGER = 2**63 - 1


def _row_to_dict(row: sqlite3.Row | None) -> dict | None:
    return dict(row) if row is not None else None


def _storable(value: int) -> bool:
    """True if value can be bound to an INTEGER column.

    Larger ids can't name any row; binding them raises OverflowError.
    """
    return -SQLITE_MAX_INTEGER - 1 <= value <= SQLITE_MAX_INTEGER


class SqliteDatabase(Database):
    """Database gateway backed by a SQLite file."""

    backend = "sqlite"

    def __init__(self, path: str | Path):
        """Initialize with the path of the database file.

        Args:
            path: Database file; parent directories are created on connect
        """
        super().__init__()
        self.path = Path(path)

    def _create_connection(self) -> sqlite3.Connection:
        """Create a fresh connection with Row factory and foreign keys enabled."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and always closes.

        Raises:
            DatabaseError: If SQLite rejects any statement in the block
        """
        conn = self._create_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"SQLite error: {e}")
            raise DatabaseError(str(e)) from e
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Apply schema.sql. Safe to call on an existing database."""
        with open(SCHEMA_PATH, "r") as f:
            schema_sql = f.read()

        with self.connect() as conn:
            conn.executescript(schema_sql)

    def _create_user_operations(self) -> "SqliteUserOperations":
        return SqliteUserOperations(self)

    def _create_post_operations(self) -> "SqlitePostOperations":
        return SqlitePostOperations(self)


class SqliteUserOperations(UserOperations):
    """User operations for SQLite."""

    def __init__(self, database: SqliteDatabase):
        self._db = database

    def _get_one(self, conditions: dict[str, Any]) -> dict | None:
        where_clause, params = build_where_clause(conditions)
        with self._db.connect() as conn:
            row = conn.execute(
                f"SELECT * FROM users WHERE {where_clause} LIMIT 1",
                params
            ).fetchone()
        return _row_to_dict(row)

    def get_by_email(self, email: str) -> dict | None:
        return self._get_one({"email": email})

    def get_by_id(self, user_id: int) -> dict | None:
        if not _storable(user_id):
            return None
        return self._get_one({"id": user_id})

    def create(self, name: str, email: str, password: str | None) -> dict:
        with self._db.connect() as conn:
            cursor = conn.execute(
                """INSERT INTO users (name, email, password, created_at)
                   VALUES (?, ?, ?, ?)""",
                (name, email, password, isodatetime.now())
            )
            row = conn.execute(
                "SELECT * FROM users WHERE id = ?",
                (cursor.lastrowid,)
            ).fetchone()
        return _row_to_dict(row)


class SqlitePostOperations(PostOperations):
    """Post operations for SQLite."""

    def __init__(self, database: SqliteDatabase):
        self._db = database

    def list_by_owner(self, user_id: int) -> list[dict]:
        if not _storable(user_id):
            return []

        with self._db.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM posts WHERE user_id = ? ORDER BY id DESC",
                (user_id,)
            ).fetchall()
        return [dict(row) for row in rows]

    def create(self, title: str, content: str, user_id: int) -> dict:
        with self._db.connect() as conn:
            cursor = conn.execute(
                """INSERT INTO posts (title, content, user_id, created_at)
                   VALUES (?, ?, ?, ?)""",
                (title, content, user_id, isodatetime.now())
            )
            row = conn.execute(
                "SELECT * FROM posts WHERE id = ?",
                (cursor.lastrowid,)
            ).fetchone()
        return _row_to_dict(row)

    def update_owned(self, post_id: int, user_id: int, data: dict[str, Any]) -> dict | None:
        if not (_storable(post_id) and _storable(user_id)):
            return None

        update_clause, params = build_update_clause(data, exclude={"id", "user_id", "created_at"})
        where_clause, where_params = build_where_clause({"id": post_id, "user_id": user_id})

        with self._db.connect() as conn:
            if update_clause:
                cursor = conn.execute(
                    f"UPDATE posts SET {update_clause} WHERE {where_clause}",
                    params + where_params
                )
                if cursor.rowcount == 0:
                    return None
            row = conn.execute(
                f"SELECT * FROM posts WHERE {where_clause}",
                where_params
            ).fetchone()
        return _row_to_dict(row)

    def delete_owned(self, post_id: int, user_id: int) -> bool:
        if not (_storable(post_id) and _storable(user_id)):
            return False

        with self._db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM posts WHERE id = ? AND user_id = ?",
                (post_id, user_id)
            )
        return cursor.rowcount > 0
