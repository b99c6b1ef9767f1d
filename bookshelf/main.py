"""
Main application entry point.

``create_app`` wires the storage client, repositories, classification
client and services once, keeps them on ``app.state`` and installs the
session and login-gate middleware.

Run with:
    uvicorn bookshelf.main:create_app --factory
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from bookshelf import __version__
from bookshelf.api.v1.books_endpoints import router as books_router
from bookshelf.api.v1.pages_endpoints import router as pages_router
from bookshelf.api.v1.session import SESSION_USER_KEY
from bookshelf.config import Settings
from bookshelf.domain.ports import ClassificationProvider
from bookshelf.domain.services import AuthService, CatalogService
from bookshelf.infrastructure.db.connection import SqliteDatabase
from bookshelf.infrastructure.db.sqlite_book_catalog_repository import SqliteBookCatalogRepository
from bookshelf.infrastructure.db.sqlite_user_repository import SqliteUserRepository
from bookshelf.infrastructure.external.classify_client import ClassifyClient
from bookshelf.infrastructure.security.password_hasher import Pbkdf2PasswordHasher

LOGIN_PATH = "/login"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    *,
    classifier: Optional[ClassificationProvider] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when None
        classifier: Classification provider; a ClassifyClient built from
                    settings when None. Tests pass a fake here.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    database = SqliteDatabase(settings.db_path)
    if classifier is None:
        classifier = ClassifyClient(
            base_url=settings.classify_url,
            timeout=settings.classify_timeout,
        )

    app = FastAPI(
        title="Bookshelf",
        description="A personal library: look books up by title and keep them on a shelf.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.catalog_service = CatalogService(
        catalog_repo=SqliteBookCatalogRepository(database),
        classifier=classifier,
    )
    app.state.auth_service = AuthService(
        user_repo=SqliteUserRepository(database),
        hasher=Pbkdf2PasswordHasher(iterations=settings.password_iterations),
    )

    app.include_router(pages_router)
    app.include_router(books_router)

    if settings.require_login:

        @app.middleware("http")
        async def require_login(request: Request, call_next):
            """Send anonymous visitors to the login form before any handler runs."""
            if request.url.path != LOGIN_PATH and not request.session.get(SESSION_USER_KEY):
                return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
            return await call_next(request)

    # Outermost: the login gate needs the decoded session
    app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)

    logger.info(
        "Bookshelf ready (require_login=%s, db=%s)",
        settings.require_login,
        settings.db_path,
    )
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bookshelf.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
