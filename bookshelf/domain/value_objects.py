"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidPreferenceError


class SortColumn(str, Enum):
    """
    Closed set of columns the catalog can be sorted by.

    The enum value is what clients send (``sortBy=title``); ``column``
    is the fixed SQL column it maps to. Request input never reaches a
    query string directly.
    """

    PK = "pk"
    TITLE = "title"
    AUTHOR = "author"
    CLASSIFICATION = "classification"

    @property
    def column(self) -> str:
        return _SORT_COLUMNS[self]

    @classmethod
    def parse(cls, value: Union[str, "SortColumn", None]) -> "SortColumn":
        """
        Parse a client-supplied sort column.

        None and the empty string mean the default (primary key order).

        Raises:
            InvalidPreferenceError: If the value is not in the allow-list
        """
        if isinstance(value, SortColumn):
            return value
        if value is None or value == "":
            return cls.PK
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise InvalidPreferenceError(
                f"sortBy must be one of {allowed}, got '{value}'"
            ) from None


_SORT_COLUMNS = {
    SortColumn.PK: "pk",
    SortColumn.TITLE: "title",
    SortColumn.AUTHOR: "author",
    SortColumn.CLASSIFICATION: "classification",
}


class CatalogFilter(str, Enum):
    """
    The fiction / non-fiction split applied to catalog listings.

    Fiction is the Dewey 800-900 range compared as strings, both bounds
    inclusive. Non-fiction is its exact complement.
    """

    ALL = "all"
    FICTION = "fiction"
    NONFICTION = "nonfiction"

    @classmethod
    def parse(cls, value: Union[str, "CatalogFilter", None]) -> "CatalogFilter":
        """
        Parse a client-supplied filter.

        None and the empty string mean no predicate.

        Raises:
            InvalidPreferenceError: If the value is not a known filter
        """
        if isinstance(value, CatalogFilter):
            return value
        if value is None or value == "":
            return cls.ALL
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(f.value for f in cls)
            raise InvalidPreferenceError(
                f"filter must be one of {allowed}, got '{value}'"
            ) from None


FICTION_LOWER_BOUND = "800"
FICTION_UPPER_BOUND = "900"


@dataclass(frozen=True)
class SortFilterPreference:
    """
    A session's chosen sort column and filter.

    Defaults to primary-key order with no filter (first visit).
    """

    sort_by: SortColumn = SortColumn.PK
    filter: CatalogFilter = CatalogFilter.ALL


@dataclass(frozen=True)
class SearchResult:
    """
    A remote catalog entry returned by a title search.

    Transient: never stored, only shown to the user so they can pick
    a work to add by its external identifier.
    """

    title: str
    author: str
    year: str
    external_id: str


@dataclass(frozen=True)
class BookMetadata:
    """
    Metadata for one work as returned by a lookup by identifier.
    """

    title: str
    """Work title"""

    author: str
    """Author string"""

    external_id: str
    """Work identifier in the classification service"""

    classification: str = ""
    """Most popular DDC code, empty when the service reports none"""

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("title cannot be empty")
        if not self.external_id or not self.external_id.strip():
            raise ValueError("external_id cannot be empty")

