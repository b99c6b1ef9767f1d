"""
Converters between domain entities/value objects and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer, maintaining clean separation of concerns.
"""

from dataclasses import asdict
from typing import List

from bookshelf.domain import entities as domain
from bookshelf.domain import value_objects as domain_vo
from bookshelf.api.v1 import schemas as api


def domain_book_to_api(book: domain.Book) -> api.Book:
    """
    Convert a stored domain Book entity to an API Book model.

    Args:
        book: Domain Book entity with a primary key

    Returns:
        API Book model
    """
    return api.Book(**asdict(book))


def domain_books_to_api(books: List[domain.Book]) -> List[api.Book]:
    return [domain_book_to_api(book) for book in books]


def domain_search_result_to_api(result: domain_vo.SearchResult) -> api.SearchResult:
    """
    Convert a domain SearchResult value object to an API SearchResult model.
    """
    return api.SearchResult(**asdict(result))
