"""
FastAPI dependencies for dependency injection.

Services are constructed once by ``bookshelf.main.create_app`` and kept on
``app.state``; these providers hand them to route functions through
FastAPI's Depends() system. Tests build their own app with fakes instead
of patching module globals.
"""

from typing import Optional

from fastapi import Depends, Request

from bookshelf.api.v1.session import SessionContext
from bookshelf.config import Settings
from bookshelf.domain.services import AuthService, CatalogService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog_service(request: Request) -> CatalogService:
    """Provide the catalog service wired at start-up."""
    return request.app.state.catalog_service


def get_auth_service(request: Request) -> AuthService:
    """Provide the auth service wired at start-up."""
    return request.app.state.auth_service


def get_session_context(request: Request) -> SessionContext:
    """Read the typed session for this request."""
    return SessionContext.from_session(request.session)


def get_owner(
    settings: Settings = Depends(get_settings),
    session_ctx: SessionContext = Depends(get_session_context),
) -> Optional[str]:
    """
    Owner used to scope catalog reads and writes.

    None in single-user deployments, where books have no owner.
    """
    if not settings.require_login:
        return None
    return session_ctx.user
