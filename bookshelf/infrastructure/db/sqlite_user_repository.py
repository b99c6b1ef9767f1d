"""
SQLite implementation of the UserRepository port.
"""

import sqlite3
from typing import Optional

from bookshelf.domain.entities import User
from bookshelf.domain.errors import CatalogStorageError, DuplicateUserError
from bookshelf.domain.ports import UserRepository
from bookshelf.infrastructure.db.connection import SqliteDatabase


class SqliteUserRepository(UserRepository):
    """Users keyed by username; the secret column holds the encoded hash."""

    def __init__(self, database: SqliteDatabase) -> None:
        self._database = database

    def add(self, user: User) -> None:
        """Insert a user, rejecting a username that already exists."""
        try:
            with self._database.connect() as conn:
                conn.execute(
                    "INSERT INTO users (username, secret) VALUES (?, ?)",
                    (user.username, user.secret),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateUserError(f"Username '{user.username}' is already taken") from e
        except sqlite3.Error as e:
            raise CatalogStorageError(f"Database error while saving user: {e}") from e

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve a user by username."""
        try:
            with self._database.connect() as conn:
                row = conn.execute(
                    "SELECT username, secret FROM users WHERE username = ?",
                    (username,),
                ).fetchone()
        except sqlite3.Error as e:
            raise CatalogStorageError(f"Database error while reading user: {e}") from e

        if row is None:
            return None

        return User(username=row["username"], secret=row["secret"])
