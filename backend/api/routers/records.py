"""Read-only access to stored records.

Routes
------
GET /api/collections/{collection}/records               List records (newest first)
GET /api/collections/{collection}/records/{record_id}   Fetch one record
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request

from backend.db.collections import CollectionNotFound, find_collection
from backend.db.models import Collection
from backend.db.records import get_record, list_records

router = APIRouter()


def _collection_or_404(request: Request, name: str) -> Collection:
    try:
        return find_collection(request.app.state.db, name)
    except CollectionNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/{collection}/records")
def list_all(
    collection: str,
    request: Request,
    limit: int = Query(50, ge=1, le=500),
) -> dict[str, Any]:
    """Return up to ``limit`` records of *collection*."""
    target = _collection_or_404(request, collection)
    items = list_records(request.app.state.db, target, limit=limit)
    return {"items": [r.to_dict() for r in items], "total": len(items)}


@router.get("/{collection}/records/{record_id}")
def get_one(collection: str, record_id: str, request: Request) -> dict[str, Any]:
    """Fetch a single record by id."""
    target = _collection_or_404(request, collection)
    record = get_record(request.app.state.db, target, record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record not found: {record_id!r}")
    return record.to_dict()
