"""
Domain service for the book catalog.

Implements the three catalog use cases on top of the domain ports:

    list   : allow-listed sort column + fiction/non-fiction filter
    add    : classification lookup by external id -> insert
    delete : owner-scoped removal by primary key

It also exposes the title search so that the API layer talks to a
single service object. The service depends only on PORTS; it does not
know about SQLite, HTTP or XML.
"""

import logging
from typing import List, Optional, Union

from bookshelf.domain.entities import Book
from bookshelf.domain.ports import BookCatalogRepository, ClassificationProvider
from bookshelf.domain.value_objects import CatalogFilter, SearchResult, SortColumn

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Orchestrates reads and writes of the book catalog.

    Usage:
        service = CatalogService(
            catalog_repo=SqliteBookCatalogRepository(database),
            classifier=ClassifyClient(),
        )
        books = service.list_books("title", "fiction", owner="alice")
        book = service.add_book("1234", owner="alice")
    """

    def __init__(
        self,
        catalog_repo: BookCatalogRepository,
        classifier: ClassificationProvider,
    ) -> None:
        """
        Initialize the catalog service with required dependencies.

        Args:
            catalog_repo: Repository for persisting books
            classifier: Remote classification lookup used to populate new books
        """
        self._catalog_repo = catalog_repo
        self._classifier = classifier

    def list_books(
        self,
        sort_by: Union[str, SortColumn, None] = SortColumn.PK,
        catalog_filter: Union[str, CatalogFilter, None] = CatalogFilter.ALL,
        owner: Optional[str] = None,
    ) -> List[Book]:
        """
        List books sorted and filtered.

        Both arguments are validated before the repository is touched,
        so an unknown column never reaches storage.

        Args:
            sort_by: One of pk, title, author, classification (default pk)
            catalog_filter: One of all, fiction, nonfiction (default all)
            owner: Restrict to this user's books (multi-user deployments)

        Returns:
            Books ordered ascending by the column, then by primary key

        Raises:
            InvalidPreferenceError: If sort_by or catalog_filter is not allowed
            CatalogStorageError: If the storage layer fails
        """
        column = SortColumn.parse(sort_by)
        selected = CatalogFilter.parse(catalog_filter)

        return self._catalog_repo.list_books(
            sort_by=column,
            catalog_filter=selected,
            owner=owner,
        )

    def search(self, query: str) -> List[SearchResult]:
        """
        Search the classification service by title.

        Raises:
            ValueError: If query is empty or blank
            ClassificationError: If the remote lookup fails
        """
        return self._classifier.search_by_title(query)

    def add_book(self, external_id: str, owner: Optional[str] = None) -> Book:
        """
        Look up a work by its external id and add it to the shelf.

        Nothing is inserted when the lookup fails.

        Args:
            external_id: Work identifier from a previous search
            owner: Username that will own the book, if ownership is tracked

        Returns:
            The stored Book with its assigned primary key

        Raises:
            ValueError: If external_id is empty or blank
            ClassificationError: If the remote lookup fails
            CatalogStorageError: If the insert fails
        """
        metadata = self._classifier.lookup_by_id(external_id)

        book = self._catalog_repo.add(Book.from_metadata(metadata, owner=owner))
        logger.info(
            "Added book pk=%s external_id=%s owner=%s",
            book.pk,
            book.external_id,
            owner,
        )
        return book

    def delete_book(self, pk: int, owner: Optional[str] = None) -> bool:
        """
        Delete a book, scoped to its owner when ownership is tracked.

        Args:
            pk: Primary key of the book
            owner: Only delete if the book belongs to this user

        Returns:
            True if the book was deleted, False if no matching row exists
        """
        deleted = self._catalog_repo.delete(pk, owner=owner)
        if deleted:
            logger.info("Deleted book pk=%s owner=%s", pk, owner)
        else:
            logger.info("No book pk=%s for owner=%s to delete", pk, owner)
        return deleted
