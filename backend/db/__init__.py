"""Database layer package — the record store articles are saved into.

Public re-exports so callers can write::

    from backend.db import get_connection, init_db
    from backend.db import records
"""

from backend.db.connection import get_connection
from backend.db.migrations import init_db
from backend.db import collections, records

__all__ = ["get_connection", "init_db", "collections", "records"]
