"""Clipper CLI — entry-point for all backend operations.

Usage:
    python cli/main.py --help

Sub-commands:
    serve     run the HTTP API
    db        database operations
    scrape    fetch + extract a page without saving it
    process   fetch + extract + save a page
    articles  browse saved articles
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from backend.config import settings
from backend.db import get_connection, init_db
from backend.db.collections import list_collections
from backend.errors import ClipperError
from backend.log import configure_logging
from cli.commands.articles import articles_app

app = typer.Typer(
    name="clipper",
    help="Clipper backend CLI.",
    no_args_is_help=True,
)
app.add_typer(articles_app, name="articles")


@app.callback()
def main(
    log_level: str = typer.Option(
        None, "--log-level", help="Log level [DEBUG|INFO|WARNING|ERROR]."
    ),
) -> None:
    """Clipper — clip readable articles from web pages."""
    if log_level:
        settings.log_level = log_level.upper()
    configure_logging(settings.log_level)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address."),
    port: Optional[int] = typer.Option(None, help="Bind port."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    # Reload workers are fresh processes and read the level from the environment.
    os.environ["LOG_LEVEL"] = settings.log_level
    uvicorn.run(
        "backend.api.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# DB commands
# ---------------------------------------------------------------------------
db_app = typer.Typer(help="Database operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init() -> None:
    """Initialise the SQLite database (create tables if they do not exist)."""
    conn = get_connection()
    init_db(conn)
    names = [c.name for c in list_collections(conn)]
    conn.close()
    typer.echo(f"[db init] Database ready at {settings.db_path}")
    typer.echo(f"[db init] Collections: {', '.join(names)}")


# ---------------------------------------------------------------------------
# Scrape / process
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="URL to scrape."),
) -> None:
    """Fetch a URL and print the extracted article without saving it."""
    from backend.scraper import extract_content, fetch_url

    typer.echo(f"[scrape] Fetching {url!r} …")
    try:
        raw = fetch_url(url)
    except ClipperError as e:
        typer.echo(f"[scrape] {e.message} ({e.detail})")
        raise typer.Exit(1)

    article = extract_content(raw)
    typer.echo(f"[scrape] Title  : {article.title or '(none)'}")
    typer.echo(f"[scrape] Chars  : {len(article.content)}")
    typer.echo("")
    typer.echo(article.content)


@app.command("process")
def process(
    url: str = typer.Option(..., help="URL to clip."),
) -> None:
    """Fetch a URL, extract its article and save it to the database."""
    from backend.ingestor import process_link

    conn = get_connection()
    init_db(conn)
    typer.echo(f"[process] Clipping {url!r} …")
    try:
        record = process_link(conn, url)
    except ClipperError as e:
        typer.echo(f"[process] {e.message} ({e.detail})")
        raise typer.Exit(1)
    finally:
        conn.close()
    typer.echo(f"[process] Saved record: {record.id}  title={record.get('title')!r}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
