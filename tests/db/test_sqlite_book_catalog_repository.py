"""
Tests for SqliteBookCatalogRepository.

Validates the SQLite implementation of the BookCatalogRepository protocol,
including ordering, the fiction/non-fiction split and owner scoping.

Test Pattern: AAA (Arrange-Act-Assert)
"""

import sqlite3

import pytest

from bookshelf.domain.entities import Book
from bookshelf.domain.errors import CatalogStorageError
from bookshelf.domain.value_objects import CatalogFilter, SortColumn
from bookshelf.infrastructure.db.connection import SqliteDatabase
from bookshelf.infrastructure.db.sqlite_book_catalog_repository import SqliteBookCatalogRepository


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def database(tmp_path):
    """
    Create a storage client on a temporary database for each test.

    Uses pytest's tmp_path fixture to ensure isolation between tests.
    """
    return SqliteDatabase(tmp_path / "test_bookshelf.db")


@pytest.fixture
def repo(database):
    return SqliteBookCatalogRepository(database)


def _book(title, author="Author", classification="", external_id="x", owner=None):
    return Book(
        pk=None,
        title=title,
        author=author,
        classification=classification,
        external_id=external_id,
        owner=owner,
    )


@pytest.fixture
def shelf(repo):
    """
    A small shelf with deliberate ties on author and classification.

    Insertion order (and therefore pk order):
        1 Dune            Herbert   813
        2 Cosmos          Sagan     520
        3 Children of Dune Herbert  813
        4 A Brief History Hawking   523.1
    """
    return [
        repo.add(_book("Dune", "Herbert", "813", "w1")),
        repo.add(_book("Cosmos", "Sagan", "520", "w2")),
        repo.add(_book("Children of Dune", "Herbert", "813", "w3")),
        repo.add(_book("A Brief History", "Hawking", "523.1", "w4")),
    ]


# ============================================================================
# INITIALIZATION TESTS
# ============================================================================

class TestRepositoryInitialization:
    """Tests for schema creation."""

    def test_creates_table_on_init(self, repo):
        assert repo.count() == 0

    def test_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "shelf.db"

        SqliteDatabase(db_path)

        assert db_path.exists()

    def test_reopening_keeps_data(self, tmp_path):
        db_path = tmp_path / "shelf.db"
        SqliteBookCatalogRepository(SqliteDatabase(db_path)).add(_book("Dune"))

        reopened = SqliteBookCatalogRepository(SqliteDatabase(db_path))

        assert reopened.count() == 1


# ============================================================================
# ADD TESTS
# ============================================================================

class TestAdd:
    """Tests for the add() method."""

    def test_add_assigns_increasing_primary_keys(self, repo):
        first = repo.add(_book("Dune"))
        second = repo.add(_book("Cosmos"))

        assert first.pk is not None
        assert second.pk > first.pk

    def test_add_persists_all_fields(self, repo):
        stored = repo.add(_book("Dune", "Herbert, Frank", "813", "12345", owner="alice"))

        [retrieved] = repo.list_books()

        assert retrieved == stored
        assert retrieved.title == "Dune"
        assert retrieved.author == "Herbert, Frank"
        assert retrieved.classification == "813"
        assert retrieved.external_id == "12345"
        assert retrieved.owner == "alice"

    def test_primary_keys_are_not_reused_after_delete(self, repo):
        first = repo.add(_book("Dune"))
        repo.delete(first.pk)

        second = repo.add(_book("Cosmos"))

        assert second.pk > first.pk

    def test_add_rejects_book_with_pk(self, repo):
        with pytest.raises(ValueError, match="already has pk"):
            repo.add(Book(pk=1, title="Dune", author="Herbert"))


# ============================================================================
# LIST TESTS
# ============================================================================

class TestListOrdering:
    """Rows are ordered by the sort column, ties broken by pk."""

    def test_default_is_pk_ascending(self, repo, shelf):
        books = repo.list_books()

        assert [b.pk for b in books] == sorted(b.pk for b in shelf)

    def test_sort_by_title(self, repo, shelf):
        books = repo.list_books(SortColumn.TITLE)

        assert [b.title for b in books] == [
            "A Brief History",
            "Children of Dune",
            "Cosmos",
            "Dune",
        ]

    def test_sort_by_author_breaks_ties_by_pk(self, repo, shelf):
        books = repo.list_books(SortColumn.AUTHOR)

        assert [(b.author, b.title) for b in books] == [
            ("Hawking", "A Brief History"),
            ("Herbert", "Dune"),
            ("Herbert", "Children of Dune"),
            ("Sagan", "Cosmos"),
        ]

    def test_sort_by_classification_breaks_ties_by_pk(self, repo, shelf):
        books = repo.list_books(SortColumn.CLASSIFICATION)

        assert [b.title for b in books] == [
            "Cosmos",
            "A Brief History",
            "Dune",
            "Children of Dune",
        ]

    @pytest.mark.parametrize("column", list(SortColumn))
    def test_every_column_is_non_decreasing(self, repo, shelf, column):
        books = repo.list_books(column)

        keys = [(getattr(b, column.value), b.pk) for b in books]
        assert keys == sorted(keys)


class TestListFilter:
    """The fiction range is '800'..'900' as strings, both bounds inclusive."""

    @pytest.fixture
    def boundary_shelf(self, repo):
        codes = ["799", "800", "813.54", "900", "901", "", "100"]
        return {code: repo.add(_book(f"Book {code or 'none'}", classification=code)) for code in codes}

    def test_fiction_includes_both_bounds(self, repo, boundary_shelf):
        books = repo.list_books(catalog_filter=CatalogFilter.FICTION)

        assert [b.classification for b in books] == ["800", "813.54", "900"]

    def test_nonfiction_is_the_complement(self, repo, boundary_shelf):
        books = repo.list_books(catalog_filter=CatalogFilter.NONFICTION)

        assert [b.classification for b in books] == ["799", "901", "", "100"]

    def test_fiction_and_nonfiction_partition_the_shelf(self, repo, boundary_shelf):
        fiction = {b.pk for b in repo.list_books(catalog_filter=CatalogFilter.FICTION)}
        nonfiction = {b.pk for b in repo.list_books(catalog_filter=CatalogFilter.NONFICTION)}
        everything = {b.pk for b in repo.list_books(catalog_filter=CatalogFilter.ALL)}

        assert fiction.isdisjoint(nonfiction)
        assert fiction | nonfiction == everything

    def test_every_fiction_row_satisfies_the_range(self, repo, boundary_shelf):
        for book in repo.list_books(SortColumn.TITLE, CatalogFilter.FICTION):
            assert "800" <= book.classification <= "900"

    def test_filter_and_sort_combine(self, repo, shelf):
        books = repo.list_books(SortColumn.TITLE, CatalogFilter.FICTION)

        assert [b.title for b in books] == ["Children of Dune", "Dune"]


class TestListOwnerScope:
    def test_owner_sees_only_own_books(self, repo):
        repo.add(_book("Dune", owner="alice"))
        repo.add(_book("Cosmos", owner="bob"))

        books = repo.list_books(owner="alice")

        assert [b.title for b in books] == ["Dune"]

    def test_no_owner_lists_everything(self, repo):
        repo.add(_book("Dune", owner="alice"))
        repo.add(_book("Cosmos"))

        assert repo.count() == len(repo.list_books())


# ============================================================================
# DELETE TESTS
# ============================================================================

class TestDelete:
    """Tests for the delete() method."""

    def test_delete_existing_book(self, repo):
        book = repo.add(_book("Dune"))

        assert repo.delete(book.pk) is True
        assert repo.list_books() == []

    def test_delete_missing_book_returns_false(self, repo):
        assert repo.delete(42) is False

    def test_delete_scoped_to_owner(self, repo):
        alices = repo.add(_book("Dune", owner="alice"))

        assert repo.delete(alices.pk, owner="bob") is False
        assert [b.pk for b in repo.list_books()] == [alices.pk]

        assert repo.delete(alices.pk, owner="alice") is True
        assert repo.count() == 0

    def test_failed_delete_leaves_other_rows(self, repo):
        repo.add(_book("Dune", owner="alice"))
        repo.add(_book("Cosmos", owner="bob"))

        repo.delete(999, owner="alice")

        assert repo.count() == 2


# ============================================================================
# ERROR HANDLING TESTS
# ============================================================================

class TestStorageErrors:
    def test_database_errors_become_catalog_storage_errors(self, database, repo):
        with database.connect() as conn:
            conn.execute("DROP TABLE books")

        with pytest.raises(CatalogStorageError) as exc_info:
            repo.list_books()

        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_insert_failure_is_reported(self, database, repo):
        with database.connect() as conn:
            conn.execute("DROP TABLE books")

        with pytest.raises(CatalogStorageError, match="saving book"):
            repo.add(_book("Dune"))
