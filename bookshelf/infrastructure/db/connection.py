"""
SQLite storage client shared by the repository adapters.

One SqliteDatabase is constructed at application start-up and passed to
every repository. It opens a short-lived connection per operation, so a
single instance is safe to use from concurrent request workers; SQLite's
own locking keeps rows consistent.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from bookshelf.domain.errors import CatalogStorageError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS books (
    pk INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    author TEXT NOT NULL DEFAULT '',
    classification TEXT NOT NULL DEFAULT '',
    external_id TEXT NOT NULL DEFAULT '',
    owner TEXT
);

CREATE INDEX IF NOT EXISTS idx_books_owner ON books(owner);

CREATE TABLE IF NOT EXISTS users (
    username TEXT PRIMARY KEY,
    secret TEXT NOT NULL
);
"""


class SqliteDatabase:
    """
    Connection factory and schema owner for the bookshelf database.

    ``AUTOINCREMENT`` keeps primary keys monotonic: a deleted key is
    never handed out again.
    """

    def __init__(self, db_path: Path) -> None:
        """
        Initialize the database at a path, creating the schema if needed.

        Args:
            db_path: SQLite file. Parent directories are created.
        """
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the tables if they don't exist."""
        try:
            with self.connect() as conn:
                conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise CatalogStorageError(f"Could not initialize database schema: {e}") from e
        logger.info("Database ready at %s", self._db_path)

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """
        Open a connection for one unit of work.

        Commits when the block exits normally, rolls back on error and
        always closes the connection.
        """
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row  # access columns by name
        try:
            yield conn
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()
