"""Database initialisation.

``init_db(conn)`` is idempotent — safe to call on an existing database.
"""

from __future__ import annotations

import sqlite3

from backend.config import settings
from backend.db.collections import ensure_collection

# Fields of the collection extracted articles are saved into.
ARTICLE_FIELDS = ["title", "content"]


def init_db(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes, then seed the articles collection.

    Every DDL statement uses ``IF NOT EXISTS`` and the seed is skipped when
    the collection already exists, so calling this repeatedly is safe.

    Args:
        conn: An open, configured SQLite connection.
    """
    sql = settings.schema_path.read_text(encoding="utf-8")
    # executescript() issues an implicit COMMIT first, which is fine for DDL.
    conn.executescript(sql)
    ensure_collection(conn, settings.articles_collection, ARTICLE_FIELDS)
