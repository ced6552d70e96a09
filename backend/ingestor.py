"""Link processing pipeline.

``process_link`` takes one URL from request to stored record:

    resolve collection → fetch → extract → save
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from backend.db.articles import resolve_collection, save_article
from backend.db.models import Record
from backend.scraper.extractor import extract_content
from backend.scraper.fetcher import fetch_url

logger = logging.getLogger(__name__)


def process_link(
    conn: sqlite3.Connection, url: str, collection: Optional[str] = None
) -> Record:
    """Fetch *url*, extract its article and save it as a new record.

    The collection is resolved before any network traffic so a misconfigured
    store fails fast.

    Args:
        conn: Open, initialised DB connection.
        url: Page to clip.
        collection: Target collection name.  Defaults to
            ``settings.articles_collection``.

    Raises:
        FetchError: The page could not be retrieved.
        PersistenceError: The collection is missing or the write failed.
    """
    target = resolve_collection(conn, collection)

    raw = fetch_url(url)
    article = extract_content(raw)

    record = save_article(conn, article, target)
    logger.info(
        "Saved %s as %s/%s (title=%r, %d chars)",
        url,
        target.name,
        record.id,
        article.title,
        len(article.content),
    )
    return record
