"""
Classification service client implementing the ClassificationProvider port.

The remote service (OCLC Classify style) answers plain HTTP GETs with XML:

    search by title:  ?summary=true&title=<query>
        <classify>
          <works>
            <work title="..." author="..." hyr="1965" owi="1234"/>
          </works>
        </classify>

    lookup by work id:  ?summary=true&owi=<id>
        <classify>
          <work title="..." author="..." owi="1234">...</work>
          <recommendations>
            <ddc><mostPopular nsfa="813.54"/></ddc>
          </recommendations>
        </classify>

Responses may carry a default XML namespace, so elements are matched by
local name only. Every failure mode surfaces as its own ClassificationError
subclass; the caller decides how to report it.

The constructor accepts an optional ``session`` so tests can inject a
fake that returns canned responses instead of touching the network.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, List, Optional

import requests

from bookshelf.domain.errors import (
    ClassificationHTTPError,
    ClassificationNotFoundError,
    ClassificationParseError,
    ClassificationUnavailableError,
)
from bookshelf.domain.ports import ClassificationProvider
from bookshelf.domain.value_objects import BookMetadata, SearchResult

logger = logging.getLogger(__name__)


class ClassifyClient(ClassificationProvider):
    """
    Client for the remote library-classification service.

    Stateless apart from the HTTP session, so one instance is shared by
    all request workers.

    Usage:
        # Production
        client = ClassifyClient(timeout=10)
        results = client.search_by_title("dune")
        metadata = client.lookup_by_id(results[0].external_id)

        # Testing (with fake session)
        client = ClassifyClient(session=fake_session)
    """

    BASE_URL = "http://classify.oclc.org/classify2/Classify"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[Any] = None,
    ) -> None:
        """
        Initialize the classification client.

        Args:
            base_url: Endpoint to query. Defaults to BASE_URL.
            timeout: Seconds to wait for the remote service on every call.
            session: Optional HTTP session for dependency injection.
                    If None, creates a new requests.Session().
        """
        self._base_url = base_url or self.BASE_URL
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    def search_by_title(self, query: str) -> List[SearchResult]:
        """
        Search works by title.

        Args:
            query: Title text as typed by the user

        Returns:
            One SearchResult per work in the response (possibly empty)

        Raises:
            ValueError: If query is empty or blank
            ClassificationError: If the request or parsing fails
        """
        if not query or not query.strip():
            raise ValueError("query cannot be empty")

        root = self._fetch({"summary": "true", "title": query.strip()})

        results = []
        for work in root.iterfind(".//{*}work"):
            result = self._parse_search_result(work)
            if result is not None:
                results.append(result)

        return results

    def lookup_by_id(self, external_id: str) -> BookMetadata:
        """
        Fetch title, author and most popular classification for one work.

        Args:
            external_id: Work identifier (``owi``) from a previous search

        Returns:
            BookMetadata for the work

        Raises:
            ValueError: If external_id is empty or blank
            ClassificationNotFoundError: If the response describes no work
            ClassificationError: If the request or parsing fails
        """
        if not external_id or not external_id.strip():
            raise ValueError("external_id cannot be empty")

        external_id = external_id.strip()
        root = self._fetch({"summary": "true", "owi": external_id})

        work = root.find(".//{*}work")
        if work is None or not _attr(work, "title"):
            raise ClassificationNotFoundError(
                f"Classification service has no work for id '{external_id}'"
            )

        return BookMetadata(
            title=_attr(work, "title"),
            author=_attr(work, "author"),
            external_id=_attr(work, "owi") or external_id,
            classification=self._most_popular_classification(root),
        )

    # =========================================================================
    # Private helper methods
    # =========================================================================

    def _fetch(self, params: dict) -> ET.Element:
        """
        GET the endpoint and parse the body as XML.

        Raises:
            ClassificationUnavailableError: Network failure or timeout
            ClassificationHTTPError: Non-2xx status
            ClassificationParseError: Body is not well-formed XML
        """
        try:
            response = self._session.get(self._base_url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("Classification request failed: %s", e)
            raise ClassificationUnavailableError(
                f"Classification service request failed: {e}"
            ) from e

        if not 200 <= response.status_code < 300:
            logger.warning("Classification service returned HTTP %s", response.status_code)
            raise ClassificationHTTPError(
                f"Classification service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return ET.fromstring(response.content)
        except ET.ParseError as e:
            logger.warning("Classification service returned malformed XML: %s", e)
            raise ClassificationParseError(
                f"Classification service returned malformed XML: {e}"
            ) from e

    def _parse_search_result(self, work: ET.Element) -> Optional[SearchResult]:
        """
        Parse one ``work`` element into a SearchResult.

        Works without an id or title cannot be added later and are skipped.
        """
        external_id = _attr(work, "owi")
        title = _attr(work, "title")
        if not external_id or not title:
            return None

        return SearchResult(
            title=title,
            author=_attr(work, "author"),
            year=_attr(work, "hyr"),
            external_id=external_id,
        )

    def _most_popular_classification(self, root: ET.Element) -> str:
        """Read recommendations/ddc/mostPopular, preferring the normalized code."""
        most_popular = root.find(".//{*}recommendations/{*}ddc/{*}mostPopular")
        if most_popular is None:
            return ""
        return _attr(most_popular, "nsfa") or _attr(most_popular, "sfa")


def _attr(element: ET.Element, name: str) -> str:
    return (element.get(name) or "").strip()
