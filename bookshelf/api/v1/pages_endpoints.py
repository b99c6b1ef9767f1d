"""
Server-rendered pages: the catalog and the login form.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from bookshelf.api.v1.dependencies import (
    get_auth_service,
    get_catalog_service,
    get_owner,
    get_session_context,
)
from bookshelf.api.v1.session import SessionContext
from bookshelf.domain.errors import (
    AuthenticationError,
    CatalogStorageError,
    DuplicateUserError,
    InvalidPreferenceError,
)
from bookshelf.domain.services import AuthService, CatalogService, resolve_preferences
from bookshelf.domain.value_objects import CatalogFilter, SortColumn

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    catalog_filter: Optional[str] = Query(default=None, alias="filter"),
    service: CatalogService = Depends(get_catalog_service),
    session_ctx: SessionContext = Depends(get_session_context),
    owner: Optional[str] = Depends(get_owner),
) -> HTMLResponse:
    """Render the catalog with the session's sort column and filter."""
    try:
        preference = resolve_preferences(session_ctx.preference, sort_by, catalog_filter)
    except InvalidPreferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        books = service.list_books(preference.sort_by, preference.filter, owner=owner)
    except CatalogStorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    session_ctx.with_preference(preference).write_to(request.session)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "books": books,
            "user": session_ctx.user,
            "sort_by": preference.sort_by.value,
            "filter": preference.filter.value,
            "sort_columns": [c.value for c in SortColumn],
            "filters": [f.value for f in CatalogFilter],
        },
    )


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "login.html", {"error": None})


@router.post("/login", response_class=HTMLResponse)
def login(
    request: Request,
    username: str = Form(default=""),
    password: str = Form(default=""),
    register_action: Optional[str] = Form(default=None, alias="register"),
    auth: AuthService = Depends(get_auth_service),
    session_ctx: SessionContext = Depends(get_session_context),
):
    """
    Log in, or register when the ``register`` button was used.

    Failures re-render the form with an inline message.
    """
    try:
        if register_action:
            user = auth.register(username, password)
        else:
            user = auth.login(username, password)
    except ValueError as e:
        return _login_error(request, str(e), status.HTTP_400_BAD_REQUEST)
    except DuplicateUserError as e:
        return _login_error(request, str(e), status.HTTP_409_CONFLICT)
    except AuthenticationError as e:
        return _login_error(request, str(e), status.HTTP_401_UNAUTHORIZED)
    except CatalogStorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    SessionContext(user=user.username, preference=session_ctx.preference).write_to(
        request.session
    )
    logger.info("User %s signed in", user.username)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/logout")
def logout(request: Request) -> RedirectResponse:
    request.session.clear()
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


def _login_error(request: Request, message: str, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "login.html",
        {"error": message},
        status_code=status_code,
    )
