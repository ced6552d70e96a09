"""CRUD operations for the ``records`` table."""

from __future__ import annotations

import json
import sqlite3
from time import time
from typing import Optional

from backend.db.ids import new_id
from backend.db.models import Collection, Record


class RecordValidationError(ValueError):
    """A record holds a field its collection does not declare."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _row_to_record(row: sqlite3.Row, collection: Collection) -> Record:
    return Record(
        id=row["id"],
        collection=collection,
        data=json.loads(row["data"] or "{}"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _validate(record: Record) -> None:
    unknown = sorted(set(record.data) - set(record.collection.fields))
    if unknown:
        raise RecordValidationError(
            f"Unknown field(s) for collection {record.collection.name!r}: "
            + ", ".join(unknown)
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def new_record(collection: Collection, record_id: Optional[str] = None) -> Record:
    """Return an unsaved record bound to *collection* with a fresh id."""
    return Record(id=record_id or new_id(), collection=collection)


def save_record(conn: sqlite3.Connection, record: Record) -> Record:
    """Insert *record*, or update it if a record with its id already exists.

    ``created_at`` is set on first save; ``updated_at`` is refreshed every time.

    Raises:
        RecordValidationError: If the record holds undeclared fields.
        sqlite3.Error: If the write itself fails.
    """
    _validate(record)

    now = int(time())
    with conn:
        conn.execute(
            """
            INSERT INTO records (id, collection_id, data, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                data = excluded.data,
                updated_at = excluded.updated_at
            WHERE records.collection_id = excluded.collection_id
            """,
            (record.id, record.collection.id, record.data_json(), now, now),
        )

    saved = get_record(conn, record.collection, record.id)
    if saved is None:
        # The id belongs to a record of another collection.
        raise RecordValidationError(
            f"Record {record.id!r} does not belong to {record.collection.name!r}"
        )
    record.created_at = saved.created_at
    record.updated_at = saved.updated_at
    return record


def get_record(
    conn: sqlite3.Connection, collection: Collection, record_id: str
) -> Optional[Record]:
    """Fetch a single record of *collection*.  Returns ``None`` if not found."""
    row = conn.execute(
        "SELECT * FROM records WHERE id = ? AND collection_id = ?",
        (record_id, collection.id),
    ).fetchone()
    return _row_to_record(row, collection) if row else None


def list_records(
    conn: sqlite3.Connection,
    collection: Collection,
    limit: Optional[int] = None,
) -> list[Record]:
    """Return the records of *collection*, newest first."""
    sql = "SELECT * FROM records WHERE collection_id = ? ORDER BY created_at DESC, rowid DESC"
    params: tuple = (collection.id,)
    if limit is not None:
        sql += " LIMIT ?"
        params += (limit,)
    rows = conn.execute(sql, params).fetchall()
    return [_row_to_record(r, collection) for r in rows]

