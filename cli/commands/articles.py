"""Commands for browsing clipped articles."""

import typer

from backend.config import settings
from backend.db import get_connection, init_db
from backend.db.collections import CollectionNotFound, find_collection
from backend.db.records import get_record, list_records

articles_app = typer.Typer(help="Browse saved articles.", no_args_is_help=True)


@articles_app.command("list")
def articles_list(
    limit: int = typer.Option(20, help="Maximum number of articles to show."),
    collection: str = typer.Option(None, help="Collection name (defaults to the articles collection)."),
) -> None:
    """List saved articles, newest first."""
    conn = get_connection()
    init_db(conn)
    try:
        target = find_collection(conn, collection or settings.articles_collection)
        records = list_records(conn, target, limit=limit)
    except CollectionNotFound as e:
        typer.echo(f"[articles list] {e}")
        raise typer.Exit(code=1)
    finally:
        conn.close()

    if not records:
        typer.echo("[articles list] No articles found.")
        return
    for r in records:
        typer.echo(f"  {r.id}  {r.get('title', '')!r}  ({len(r.get('content', ''))} chars)")


@articles_app.command("show")
def articles_show(
    record_id: str = typer.Argument(..., help="Record id."),
    collection: str = typer.Option(None, help="Collection name (defaults to the articles collection)."),
) -> None:
    """Print one saved article."""
    conn = get_connection()
    init_db(conn)
    try:
        target = find_collection(conn, collection or settings.articles_collection)
        record = get_record(conn, target, record_id)
    except CollectionNotFound as e:
        typer.echo(f"[articles show] {e}")
        raise typer.Exit(code=1)
    finally:
        conn.close()

    if record is None:
        typer.echo(f"[articles show] Record not found: {record_id!r}")
        raise typer.Exit(code=1)

    typer.echo(f"Title  : {record.get('title') or '(none)'}")
    typer.echo("")
    typer.echo(record.get("content", ""))
