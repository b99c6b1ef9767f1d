"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.

Following Hexagonal Architecture principles, the domain layer depends only
on these abstract protocols, never on concrete implementations.
"""

from typing import List, Optional, Protocol

from .entities import Book, User
from .value_objects import BookMetadata, CatalogFilter, SearchResult, SortColumn


class BookCatalogRepository(Protocol):
    """
    Port for persisting and retrieving books on the shelf.

    Implementations must:
    - Assign a monotonic, unique primary key on insert
    - Only ever build ORDER BY clauses from SortColumn.column
    - Report storage failures as CatalogStorageError
    """

    def add(self, book: Book) -> Book:
        """
        Insert a new book.

        Args:
            book: Book without a primary key

        Returns:
            The stored book, carrying its assigned primary key

        Raises:
            ValueError: If the book already has a primary key
            CatalogStorageError: If a database error occurs
        """
        ...

    def list_books(
        self,
        sort_by: SortColumn = SortColumn.PK,
        catalog_filter: CatalogFilter = CatalogFilter.ALL,
        owner: Optional[str] = None,
    ) -> List[Book]:
        """
        List books ordered by a sort column, ties broken by primary key.

        Args:
            sort_by: Column to sort by (ascending)
            catalog_filter: Fiction / non-fiction predicate
            owner: When given, only books owned by this user

        Raises:
            CatalogStorageError: If a database error occurs
        """
        ...

    def delete(self, pk: int, owner: Optional[str] = None) -> bool:
        """
        Delete a book.

        When owner is given the row must match both pk and owner.

        Returns:
            True if a row was deleted, False if nothing matched
        """
        ...

    def count(self) -> int:
        """Get the total number of stored books."""
        ...


class UserRepository(Protocol):
    """Port for storing login identities."""

    def add(self, user: User) -> None:
        """
        Insert a user.

        Raises:
            DuplicateUserError: If the username is taken
            CatalogStorageError: If a database error occurs
        """
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """Return the user with this username, or None."""
        ...


class ClassificationProvider(Protocol):
    """
    Port for the remote library-classification service.

    Implementations raise a ClassificationError subclass for every
    failure mode (network, HTTP status, malformed body, missing work).
    """

    def search_by_title(self, query: str) -> List[SearchResult]:
        """
        Search works by title.

        Raises:
            ValueError: If query is empty or blank
            ClassificationError: If the lookup fails
        """
        ...

    def lookup_by_id(self, external_id: str) -> BookMetadata:
        """
        Fetch metadata for one work.

        Raises:
            ValueError: If external_id is empty or blank
            ClassificationError: If the lookup fails
        """
        ...


class PasswordHasher(Protocol):
    """Port for salted one-way password hashing."""

    def hash(self, password: str) -> str:
        """Return an encoded secret for the password."""
        ...

    def verify(self, password: str, secret: str) -> bool:
        """Compare a password against an encoded secret in constant time."""
        ...
