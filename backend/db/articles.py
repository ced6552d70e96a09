"""Saving extracted articles into the record store.

Both helpers translate any store failure into :class:`PersistenceError`, the
request-scoped error the API reports as a server error.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from backend.config import settings
from backend.db.collections import CollectionNotFound, find_collection
from backend.db.models import Collection, Record
from backend.db.records import RecordValidationError, new_record, save_record
from backend.errors import PersistenceError
from backend.scraper.models import Article

logger = logging.getLogger(__name__)


def resolve_collection(conn: sqlite3.Connection, name: Optional[str] = None) -> Collection:
    """Look up the collection articles go into (``settings.articles_collection``)."""
    name = name or settings.articles_collection
    try:
        return find_collection(conn, name)
    except (CollectionNotFound, sqlite3.Error) as exc:
        logger.error("Cannot resolve collection %r: %s", name, exc)
        raise PersistenceError("Failed to create database record", exc) from exc


def save_article(conn: sqlite3.Connection, article: Article, collection: Collection) -> Record:
    """Persist exactly the ``title`` and ``content`` of *article*.

    Returns:
        The saved :class:`Record`, carrying its generated id.
    """
    record = new_record(collection)
    for name, value in article.as_fields().items():
        record.set(name, value)
    try:
        save_record(conn, record)
    except (RecordValidationError, sqlite3.Error) as exc:
        logger.error("Saving article to %r failed: %s", collection.name, exc)
        raise PersistenceError("Failed to save to database", exc) from exc
    return record
