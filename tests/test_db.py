"""Tests for the record store (collections, records, article persistence).

All tests use an in-memory SQLite database so they are:
- Fast (no disk I/O)
- Isolated (each fixture gets a fresh DB)
- Side-effect free (nothing written to ~/.clipper_data)
"""

from __future__ import annotations

import sqlite3
from typing import Generator

import pytest

from backend.config import settings
from backend.db.articles import resolve_collection, save_article
from backend.db.collections import (
    CollectionNotFound,
    create_collection,
    find_collection,
    list_collections,
)
from backend.db.connection import get_connection
from backend.db.ids import ID_ALPHABET, ID_LENGTH, new_id
from backend.db.migrations import init_db
from backend.db.models import Collection
from backend.db.records import (
    RecordValidationError,
    get_record,
    list_records,
    new_record,
    save_record,
)
from backend.errors import PersistenceError
from backend.scraper.models import Article


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory connection with the schema initialised."""
    connection = get_connection(db_path=":memory:")  # type: ignore[arg-type]
    init_db(connection)
    yield connection
    connection.close()


@pytest.fixture()
def articles(conn: sqlite3.Connection) -> Collection:
    return find_collection(conn, settings.articles_collection)


# ---------------------------------------------------------------------------
# connection / init
# ---------------------------------------------------------------------------

class TestInit:
    def test_foreign_keys_enabled(self, conn: sqlite3.Connection) -> None:
        row = conn.execute("PRAGMA foreign_keys").fetchone()
        assert row[0] == 1

    def test_seeds_articles_collection(self, articles: Collection) -> None:
        assert articles.name == "articles"
        assert articles.fields == ["title", "content"]

    def test_init_is_idempotent(self, conn: sqlite3.Connection) -> None:
        init_db(conn)
        init_db(conn)
        names = [c.name for c in list_collections(conn)]
        assert names.count("articles") == 1

    def test_on_disk_database(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr("backend.config.settings.workspace_dir", tmp_path / "ws")
        connection = get_connection()
        init_db(connection)
        connection.close()
        assert (tmp_path / "ws" / "clipper.db").exists()


# ---------------------------------------------------------------------------
# ids
# ---------------------------------------------------------------------------

class TestIds:
    def test_shape(self) -> None:
        rid = new_id()
        assert len(rid) == ID_LENGTH
        assert set(rid) <= set(ID_ALPHABET)

    def test_unique(self) -> None:
        assert len({new_id() for _ in range(200)}) == 200


# ---------------------------------------------------------------------------
# collections
# ---------------------------------------------------------------------------

class TestCollections:
    def test_find_by_name_and_id(self, conn: sqlite3.Connection, articles: Collection) -> None:
        assert find_collection(conn, articles.id) == articles
        assert find_collection(conn, "articles") == articles

    def test_missing_collection_raises(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(CollectionNotFound):
            find_collection(conn, "nope")

    def test_create_collection(self, conn: sqlite3.Connection) -> None:
        notes = create_collection(conn, "notes", ["body"])
        assert notes.fields == ["body"]
        assert "notes" in [c.name for c in list_collections(conn)]

    def test_duplicate_name_rejected(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(sqlite3.IntegrityError):
            create_collection(conn, "articles", ["title"])

    def test_reserved_field_rejected(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(ValueError):
            create_collection(conn, "bad", ["id"])


# ---------------------------------------------------------------------------
# records
# ---------------------------------------------------------------------------

class TestRecords:
    def test_new_record_is_unsaved(self, conn: sqlite3.Connection, articles: Collection) -> None:
        record = new_record(articles)
        assert len(record.id) == ID_LENGTH
        assert get_record(conn, articles, record.id) is None

    def test_save_and_get(self, conn: sqlite3.Connection, articles: Collection) -> None:
        record = new_record(articles)
        record.set("title", "Hello")
        record.set("content", "World")
        save_record(conn, record)

        fetched = get_record(conn, articles, record.id)
        assert fetched is not None
        assert fetched.get("title") == "Hello"
        assert fetched.get("content") == "World"
        assert fetched.created_at > 0

    def test_undeclared_field_rejected(self, conn: sqlite3.Connection, articles: Collection) -> None:
        record = new_record(articles)
        record.set("author", "someone")
        with pytest.raises(RecordValidationError):
            save_record(conn, record)
        assert get_record(conn, articles, record.id) is None

    def test_resave_updates(self, conn: sqlite3.Connection, articles: Collection) -> None:
        record = new_record(articles)
        record.set("title", "v1")
        save_record(conn, record)
        record.set("title", "v2")
        save_record(conn, record)

        assert get_record(conn, articles, record.id).get("title") == "v2"
        assert len(list_records(conn, articles)) == 1

    def test_id_taken_by_other_collection(self, conn: sqlite3.Connection, articles: Collection) -> None:
        notes = create_collection(conn, "notes", ["title"])
        first = new_record(articles, record_id="sharedid0000001")
        save_record(conn, first)
        clash = new_record(notes, record_id="sharedid0000001")
        clash.set("title", "x")
        with pytest.raises(RecordValidationError):
            save_record(conn, clash)

    def test_list_newest_first_with_limit(self, conn: sqlite3.Connection, articles: Collection) -> None:
        ids = []
        for i in range(3):
            record = new_record(articles)
            record.set("title", f"t{i}")
            save_record(conn, record)
            ids.append(record.id)

        listed = list_records(conn, articles)
        assert [r.id for r in listed] == list(reversed(ids))
        assert len(list_records(conn, articles, limit=2)) == 2

    def test_to_dict_flattens(self, conn: sqlite3.Connection, articles: Collection) -> None:
        record = new_record(articles)
        record.set("title", "T")
        save_record(conn, record)
        data = record.to_dict()
        assert data["id"] == record.id
        assert data["title"] == "T"
        assert data["collectionName"] == "articles"


# ---------------------------------------------------------------------------
# article persistence
# ---------------------------------------------------------------------------

class TestArticles:
    def test_save_article(self, conn: sqlite3.Connection, articles: Collection) -> None:
        record = save_article(conn, Article(title="T", content="body"), articles)
        stored = get_record(conn, articles, record.id)
        assert stored.data == {"title": "T", "content": "body"}

    def test_resolve_default_collection(self, conn: sqlite3.Connection, articles: Collection) -> None:
        assert resolve_collection(conn) == articles

    def test_resolve_missing_collection(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(PersistenceError) as info:
            resolve_collection(conn, "ghost")
        assert info.value.message == "Failed to create database record"
        assert isinstance(info.value.cause, CollectionNotFound)

    def test_write_failure_becomes_persistence_error(self, conn: sqlite3.Connection) -> None:
        # The collection row does not exist, so the foreign key rejects the insert.
        ghost = Collection(id="ghost", name="ghost", fields=["title", "content"], created_at=0, updated_at=0)
        with pytest.raises(PersistenceError) as info:
            save_article(conn, Article(title="T", content="c"), ghost)
        assert info.value.message == "Failed to save to database"
        assert isinstance(info.value.cause, sqlite3.IntegrityError)

    def test_collection_without_article_fields(self, conn: sqlite3.Connection) -> None:
        notes = create_collection(conn, "notes", ["body"])
        with pytest.raises(PersistenceError) as info:
            save_article(conn, Article(title="T", content="c"), notes)
        assert isinstance(info.value.cause, RecordValidationError)
