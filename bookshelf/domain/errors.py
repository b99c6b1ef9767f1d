"""
Domain exception taxonomy.

Adapters translate library exceptions (sqlite3, requests, XML parsing)
into these types so that the API layer can map each family to one
HTTP status without knowing about infrastructure details.
"""

from typing import Optional


class InvalidPreferenceError(ValueError):
    """A sort column or filter outside the allow-list (client error)."""


class CatalogStorageError(RuntimeError):
    """The storage layer failed to read or write (server error)."""


class ClassificationError(RuntimeError):
    """Base class for failures of the remote classification service."""


class ClassificationUnavailableError(ClassificationError):
    """The service could not be reached (connection error or timeout)."""


class ClassificationHTTPError(ClassificationError):
    """The service answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClassificationParseError(ClassificationError):
    """The service answered with a body that is not well-formed XML."""


class ClassificationNotFoundError(ClassificationError):
    """The response was well-formed but described no work."""


class AuthenticationError(Exception):
    """Base class for login and registration failures."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown username or wrong password."""


class DuplicateUserError(AuthenticationError):
    """Registration with a username that is already taken."""
