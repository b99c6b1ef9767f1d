#!/usr/bin/env python3
"""
Add books to the shelf by classification work id.

This script looks each id up in the classification service and inserts
the result into the catalog database, without going through the web app.

Usage:
    python -m scripts.add_books --id 1234 --id 5678 --owner alice
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bookshelf.config import Settings
from bookshelf.domain.errors import CatalogStorageError, ClassificationError
from bookshelf.domain.ports import ClassificationProvider
from bookshelf.domain.services import CatalogService
from bookshelf.infrastructure.db.connection import SqliteDatabase
from bookshelf.infrastructure.db.sqlite_book_catalog_repository import SqliteBookCatalogRepository
from bookshelf.infrastructure.external.classify_client import ClassifyClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main(
    external_ids: List[str],
    owner: Optional[str] = None,
    db_path: Optional[Path] = None,
    classifier: Optional[ClassificationProvider] = None,
) -> int:
    """
    Add every id to the catalog.

    Args:
        external_ids: Work identifiers to look up
        owner: Username that will own the books (multi-user deployments)
        db_path: SQLite file; BOOKSHELF_DB_PATH when None
        classifier: Classification provider; built from settings when None

    Returns:
        Process exit code: 0 if every book was added, 1 otherwise
    """
    settings = Settings.from_env()
    database = SqliteDatabase(db_path or settings.db_path)
    if classifier is None:
        classifier = ClassifyClient(
            base_url=settings.classify_url,
            timeout=settings.classify_timeout,
        )
    repo = SqliteBookCatalogRepository(database)
    service = CatalogService(repo, classifier)

    failures = 0
    for external_id in external_ids:
        try:
            book = service.add_book(external_id, owner=owner)
        except (ValueError, ClassificationError, CatalogStorageError) as e:
            logger.error("Could not add %s: %s", external_id, e)
            failures += 1
            continue
        logger.info("Added '%s' by %s as pk=%s", book.title, book.author, book.pk)

    logger.info(
        "Done: %s added, %s failed, %s books on the shelf",
        len(external_ids) - failures,
        failures,
        repo.count(),
    )
    return 1 if failures else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Add books by classification work id")
    parser.add_argument(
        "--id", "-i",
        dest="ids",
        action="append",
        required=True,
        help="Work identifier to add (repeatable)"
    )
    parser.add_argument(
        "--owner", "-o",
        type=str,
        default=None,
        help="Username that will own the books"
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database path (default: BOOKSHELF_DB_PATH)"
    )

    args = parser.parse_args()
    sys.exit(main(args.ids, args.owner, args.db))
