"""
Domain entities for the bookshelf.

Entities are objects with a unique identity that runs through time and
different representations. They are the core building blocks of the domain.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .value_objects import BookMetadata


@dataclass(frozen=True)
class Book:
    """
    Represents a book on a user's shelf.

    A book is created from a classification lookup and identified by the
    primary key the storage layer assigns on insert. Before insertion the
    primary key is None.
    """

    pk: Optional[int]
    """Server-assigned primary key (None until stored)"""

    title: str
    """Book title"""

    author: str
    """Author as reported by the classification service"""

    classification: str = ""
    """Dewey-decimal-like code, used for the fiction/non-fiction split"""

    external_id: str = ""
    """Opaque work identifier issued by the classification service"""

    owner: Optional[str] = None
    """Username of the owning user, None in single-user deployments"""

    def __post_init__(self) -> None:
        """Validate book data."""
        if not self.title or not self.title.strip():
            raise ValueError("Book title cannot be empty")

        if self.pk is not None and self.pk < 1:
            raise ValueError(f"pk must be a positive integer, got {self.pk}")

    def with_pk(self, pk: int) -> "Book":
        """Return a copy of this book carrying the assigned primary key."""
        if self.pk is not None:
            raise ValueError(f"Book already has pk={self.pk}")
        return replace(self, pk=pk)

    @staticmethod
    def from_metadata(metadata: BookMetadata, owner: Optional[str] = None) -> "Book":
        """
        Factory method building an unsaved book from a classification lookup.

        Args:
            metadata: Result of ClassificationProvider.lookup_by_id()
            owner: Username that will own the book, if ownership is tracked

        Returns:
            A new Book without a primary key
        """
        return Book(
            pk=None,
            title=metadata.title,
            author=metadata.author,
            classification=metadata.classification,
            external_id=metadata.external_id,
            owner=owner,
        )


@dataclass(frozen=True)
class User:
    """
    A login identity.

    The secret is an encoded salted hash produced by a PasswordHasher;
    the plain password is never stored on the entity.
    """

    username: str
    secret: str

    def __post_init__(self) -> None:
        if not self.username or not self.username.strip():
            raise ValueError("username cannot be empty")
        if not self.secret:
            raise ValueError("secret cannot be empty")

    def __repr__(self) -> str:
        return f"User(username={self.username!r})"
