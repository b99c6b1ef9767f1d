"""
Fixtures for HTTP-level tests.

Each test gets its own application built by ``create_app`` on a temporary
database, with a fake classification provider in place of the remote
service.
"""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from bookshelf.config import Settings
from bookshelf.domain.value_objects import BookMetadata, SearchResult
from bookshelf.main import create_app


class FakeClassifier:
    """Canned classification provider; set ``error`` to make every call fail."""

    def __init__(self):
        self.works: Dict[str, BookMetadata] = {
            "12345": BookMetadata("Dune", "Herbert, Frank", "12345", "813"),
            "555": BookMetadata("Cosmos", "Sagan, Carl", "555", "520"),
            "800": BookMetadata("Lower Bound", "Edge, Case", "800", "800"),
            "900": BookMetadata("Upper Bound", "Edge, Case", "900", "900"),
            "799": BookMetadata("Just Below", "Edge, Case", "799", "799"),
            "901": BookMetadata("Just Above", "Edge, Case", "901", "901"),
        }
        self.results: List[SearchResult] = [
            SearchResult("Dune", "Herbert, Frank", "2019", "12345"),
        ]
        self.error: Optional[Exception] = None

    def search_by_title(self, query: str) -> List[SearchResult]:
        if not query or not query.strip():
            raise ValueError("query cannot be empty")
        if self.error is not None:
            raise self.error
        return self.results

    def lookup_by_id(self, external_id: str) -> BookMetadata:
        if not external_id or not external_id.strip():
            raise ValueError("external_id cannot be empty")
        if self.error is not None:
            raise self.error
        return self.works[external_id]


@pytest.fixture
def classifier():
    return FakeClassifier()


def _settings(tmp_path, require_login: bool) -> Settings:
    return Settings(
        db_path=tmp_path / "bookshelf.db",
        secret_key="test-secret",
        require_login=require_login,
        password_iterations=1_000,
    )


@pytest.fixture
def client(tmp_path, classifier):
    """Single-user deployment: no login gate, books have no owner."""
    app = create_app(_settings(tmp_path, require_login=False), classifier=classifier)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def multi_user_app(tmp_path, classifier):
    return create_app(_settings(tmp_path, require_login=True), classifier=classifier)


@pytest.fixture
def anonymous_client(multi_user_app):
    with TestClient(multi_user_app) as test_client:
        yield test_client


def login_as(test_client: TestClient, username: str, password: str = "s3cret") -> None:
    """Register (or log in, if already registered) through the form."""
    response = test_client.post(
        "/login",
        data={"username": username, "password": password, "register": "register"},
        follow_redirects=False,
    )
    if response.status_code == 409:
        response = test_client.post(
            "/login",
            data={"username": username, "password": password},
            follow_redirects=False,
        )
    assert response.status_code == 303


@pytest.fixture
def alice(multi_user_app):
    with TestClient(multi_user_app) as test_client:
        login_as(test_client, "alice")
        yield test_client


@pytest.fixture
def bob(multi_user_app):
    with TestClient(multi_user_app) as test_client:
        login_as(test_client, "bob")
        yield test_client
