"""
API endpoints for the book catalog.

This module defines the FastAPI routes for listing, adding and deleting
books and for searching the classification service. It handles HTTP
concerns and delegates to the catalog service.

Every error path raises; no handler continues after reporting an error.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Path, Query, Request, Response, status

from bookshelf.api.v1 import schemas as api
from bookshelf.api.v1.converters import (
    domain_book_to_api,
    domain_books_to_api,
    domain_search_result_to_api,
)
from bookshelf.api.v1.dependencies import get_catalog_service, get_owner, get_session_context
from bookshelf.api.v1.session import SessionContext
from bookshelf.domain.errors import (
    CatalogStorageError,
    ClassificationError,
    InvalidPreferenceError,
)
from bookshelf.domain.services import CatalogService, resolve_preferences

router = APIRouter()

# Largest primary key SQLite can store
MAX_PK = 2**63 - 1


@router.get("/books", response_model=List[api.Book])
def list_books(
    request: Request,
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    catalog_filter: Optional[str] = Query(default=None, alias="filter"),
    service: CatalogService = Depends(get_catalog_service),
    session_ctx: SessionContext = Depends(get_session_context),
    owner: Optional[str] = Depends(get_owner),
) -> List[api.Book]:
    """
    List books, sorted and filtered.

    ``sortBy`` and ``filter`` override the values stored in the session;
    the values used are stored back for the next request.

    Raises:
        400: Unknown sort column or filter
        500: Storage failure
    """
    try:
        preference = resolve_preferences(session_ctx.preference, sort_by, catalog_filter)
    except InvalidPreferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        books = service.list_books(preference.sort_by, preference.filter, owner=owner)
    except CatalogStorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    session_ctx.with_preference(preference).write_to(request.session)
    return domain_books_to_api(books)


@router.post("/search", response_model=List[api.SearchResult])
def search_books(
    search: str = Form(default=""),
    service: CatalogService = Depends(get_catalog_service),
) -> List[api.SearchResult]:
    """
    Search the classification service by title.

    Raises:
        400: Empty search text
        502: Classification service unreachable or returned a bad response
    """
    try:
        results = service.search(search)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ClassificationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return [domain_search_result_to_api(r) for r in results]


@router.put("/books", response_model=api.Book)
def add_book(
    external_id: str = Form(default="", alias="id"),
    service: CatalogService = Depends(get_catalog_service),
    owner: Optional[str] = Depends(get_owner),
) -> api.Book:
    """
    Look up a work by its identifier and add it to the shelf.

    Raises:
        400: Missing identifier
        502: Classification lookup failed (nothing is inserted)
        500: Storage failure
    """
    try:
        book = service.add_book(external_id, owner=owner)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ClassificationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except CatalogStorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return domain_book_to_api(book)


@router.delete("/books/{pk}")
def delete_book(
    pk: int = Path(..., ge=1, le=MAX_PK),
    service: CatalogService = Depends(get_catalog_service),
    owner: Optional[str] = Depends(get_owner),
) -> Response:
    """
    Delete a book from the shelf.

    Only the owner's books can be deleted in multi-user deployments.

    Raises:
        404: No such book for this user
        422: pk is not a storable primary key
        500: Storage failure
    """
    try:
        deleted = service.delete_book(pk, owner=owner)
    except CatalogStorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with pk '{pk}' not found",
        )

    return Response(status_code=status.HTTP_200_OK)
