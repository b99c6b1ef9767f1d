"""
SQLite implementation of the BookCatalogRepository port.

This adapter persists Book entities to the ``books`` table, composing the
listing query from the closed SortColumn / CatalogFilter enums. Every value
coming from a request travels as a bound parameter; the only text spliced
into SQL is a fixed column name taken from SortColumn.column.
"""

import logging
import sqlite3
from typing import Any, List, Optional, Tuple

from bookshelf.domain.entities import Book
from bookshelf.domain.errors import CatalogStorageError
from bookshelf.domain.ports import BookCatalogRepository
from bookshelf.domain.value_objects import (
    FICTION_LOWER_BOUND,
    FICTION_UPPER_BOUND,
    CatalogFilter,
    SortColumn,
)
from bookshelf.infrastructure.db.connection import SqliteDatabase

logger = logging.getLogger(__name__)

_FICTION_PREDICATE = "classification BETWEEN ? AND ?"


class SqliteBookCatalogRepository(BookCatalogRepository):
    """
    Books stored in SQLite.

    Ownership is optional: in single-user deployments ``owner`` is NULL
    and no owner predicate is applied.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        """
        Initialize the repository with a shared storage client.
        """
        self._database = database

    def _row_to_book(self, row: sqlite3.Row) -> Book:
        """Convert a database row to a Book entity."""
        return Book(
            pk=row["pk"],
            title=row["title"],
            author=row["author"],
            classification=row["classification"],
            external_id=row["external_id"],
            owner=row["owner"],
        )

    def _build_list_query(
        self,
        sort_by: SortColumn,
        catalog_filter: CatalogFilter,
        owner: Optional[str],
    ) -> Tuple[str, List[Any]]:
        """Compose the SELECT for list_books() and its parameters."""
        clauses: List[str] = []
        params: List[Any] = []

        if owner is not None:
            clauses.append("owner = ?")
            params.append(owner)

        if catalog_filter is CatalogFilter.FICTION:
            clauses.append(_FICTION_PREDICATE)
            params.extend([FICTION_LOWER_BOUND, FICTION_UPPER_BOUND])
        elif catalog_filter is CatalogFilter.NONFICTION:
            clauses.append(f"NOT ({_FICTION_PREDICATE})")
            params.extend([FICTION_LOWER_BOUND, FICTION_UPPER_BOUND])

        sql = "SELECT * FROM books"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        # Tie-break on pk so equal titles/authors list deterministically
        if sort_by is SortColumn.PK:
            sql += " ORDER BY pk ASC"
        else:
            sql += f" ORDER BY {sort_by.column} ASC, pk ASC"

        return sql, params

    def list_books(
        self,
        sort_by: SortColumn = SortColumn.PK,
        catalog_filter: CatalogFilter = CatalogFilter.ALL,
        owner: Optional[str] = None,
    ) -> List[Book]:
        """List books ordered by a sort column, ties broken by primary key."""
        sql, params = self._build_list_query(
            SortColumn.parse(sort_by),
            CatalogFilter.parse(catalog_filter),
            owner,
        )

        try:
            with self._database.connect() as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error("Listing books failed: %s", e)
            raise CatalogStorageError(f"Database error while listing books: {e}") from e

        return [self._row_to_book(row) for row in rows]

    def add(self, book: Book) -> Book:
        """Insert a new book and return it with its assigned primary key."""
        if book.pk is not None:
            raise ValueError(f"Book already has pk={book.pk}; cannot insert it again")

        try:
            with self._database.connect() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO books (title, author, classification, external_id, owner)
                    VALUES (:title, :author, :classification, :external_id, :owner)
                    """,
                    {
                        "title": book.title,
                        "author": book.author,
                        "classification": book.classification,
                        "external_id": book.external_id,
                        "owner": book.owner,
                    },
                )
                pk = cursor.lastrowid
        except sqlite3.Error as e:
            logger.error("Inserting book external_id=%s failed: %s", book.external_id, e)
            raise CatalogStorageError(f"Database error while saving book: {e}") from e

        return book.with_pk(pk)

    def delete(self, pk: int, owner: Optional[str] = None) -> bool:
        """Delete a book. Returns True if deleted."""
        if owner is None:
            sql, params = "DELETE FROM books WHERE pk = ?", (pk,)
        else:
            sql, params = "DELETE FROM books WHERE pk = ? AND owner = ?", (pk, owner)

        try:
            with self._database.connect() as conn:
                cursor = conn.execute(sql, params)
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error("Deleting book pk=%s failed: %s", pk, e)
            raise CatalogStorageError(f"Database error while deleting book: {e}") from e

    def count(self) -> int:
        """Get the total number of books in the catalog."""
        try:
            with self._database.connect() as conn:
                result = conn.execute("SELECT COUNT(*) AS cnt FROM books").fetchone()
        except sqlite3.Error as e:
            raise CatalogStorageError(f"Database error while counting books: {e}") from e
        return result["cnt"]
