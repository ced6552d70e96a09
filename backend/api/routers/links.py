"""Link processing and health endpoints.

Routes
------
GET  /api/v1/health         → {"message": "Ok"}
POST /api/v1/processLink    Body: {"url": "https://..."}  → {"message": "Ok", "id": ...}
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, StrictStr

from backend.ingestor import process_link

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ProcessLinkRequest(BaseModel):
    url: StrictStr


class ProcessLinkResponse(BaseModel):
    message: str
    id: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/health")
def health() -> dict[str, Any]:
    """Liveness probe; always answers Ok."""
    return {"message": "Ok"}


@router.post("/processLink", response_model=ProcessLinkResponse)
def process_link_endpoint(body: ProcessLinkRequest, request: Request) -> dict[str, Any]:
    """Fetch the page at ``url``, extract its article and store it.

    Fetch and persistence failures propagate as ``ClipperError`` and are
    rendered by the app's exception handler.
    """
    conn = request.app.state.db
    record = process_link(conn, body.url)
    return {"message": "Ok", "id": record.id}
