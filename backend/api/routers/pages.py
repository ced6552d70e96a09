"""HTML pages and the login form stub.

Routes
------
GET  /         Home page
GET  /login    Login form
GET  /upload   Upload page
POST /submit   Login form target; logs the submission and redirects home
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse, Response
from jinja2 import TemplateNotFound

router = APIRouter()

logger = logging.getLogger(__name__)


def _render(request: Request, page: str) -> Response:
    """Render *page* (which extends ``layout.html``) or answer 404."""
    templates = request.app.state.templates
    try:
        return templates.TemplateResponse(request, page, {})
    except TemplateNotFound as exc:
        raise HTTPException(status_code=404, detail=f"Page not found: {page}") from exc


@router.get("/", include_in_schema=False)
def home(request: Request) -> Response:
    return _render(request, "index.html")


@router.get("/login", include_in_schema=False)
def login(request: Request) -> Response:
    return _render(request, "login.html")


@router.get("/upload", include_in_schema=False)
def upload(request: Request) -> Response:
    return _render(request, "upload.html")


@router.post("/submit", include_in_schema=False)
def submit(email: str = Form(""), password: str = Form("")) -> Response:
    """Login stub: no session is created."""
    logger.info(
        "Received form submission - Email: %s, Password: %s",
        email,
        "*" * len(password),
    )
    return RedirectResponse(url="/", status_code=303)
