"""Operations on the ``collections`` table.

A collection names a set of records and declares which fields they may hold.
Collections are looked up by name (or id) every time a record is created, so
a missing collection surfaces as an error on that request only.
"""

from __future__ import annotations

import json
import sqlite3
from time import time
from typing import Iterable, Optional

from backend.db.ids import new_id
from backend.db.models import Collection

# System fields every record carries; collections may not redeclare them.
RESERVED_FIELDS = frozenset(
    {"id", "collectionId", "collectionName", "created", "updated"}
)


class CollectionNotFound(LookupError):
    """No collection matches the requested name or id."""


def _row_to_collection(row: sqlite3.Row) -> Collection:
    return Collection(
        id=row["id"],
        name=row["name"],
        fields=json.loads(row["fields"] or "[]"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def create_collection(
    conn: sqlite3.Connection,
    name: str,
    fields: Iterable[str],
    collection_id: Optional[str] = None,
) -> Collection:
    """Insert a new collection and return it.

    Raises:
        ValueError: If a field name is empty or reserved.
        sqlite3.IntegrityError: If the name is already taken.
    """
    field_list = list(fields)
    for name_ in field_list:
        if not name_ or name_ in RESERVED_FIELDS:
            raise ValueError(f"Invalid field name {name_!r}")

    cid = collection_id or new_id()
    now = int(time())
    with conn:
        conn.execute(
            """
            INSERT INTO collections (id, name, fields, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (cid, name, json.dumps(field_list), now, now),
        )
    return find_collection(conn, cid)


def ensure_collection(
    conn: sqlite3.Connection, name: str, fields: Iterable[str]
) -> Collection:
    """Return the collection called *name*, creating it when absent."""
    try:
        return find_collection(conn, name)
    except CollectionNotFound:
        return create_collection(conn, name, fields)


def find_collection(conn: sqlite3.Connection, name_or_id: str) -> Collection:
    """Fetch a collection by name or id.

    Raises:
        CollectionNotFound: If neither matches.
    """
    row = conn.execute(
        "SELECT * FROM collections WHERE id = ? OR name = ? LIMIT 1",
        (name_or_id, name_or_id),
    ).fetchone()
    if row is None:
        raise CollectionNotFound(f"Collection not found: {name_or_id!r}")
    return _row_to_collection(row)


def list_collections(conn: sqlite3.Connection) -> list[Collection]:
    rows = conn.execute("SELECT * FROM collections ORDER BY name").fetchall()
    return [_row_to_collection(r) for r in rows]
