"""Catalog persistence: load and store a DocumentStore in SQLite."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any

from PaperShelf.core.errors import PersistenceError
from PaperShelf.core.models import Document, FileSource, OtherSource, Source, UrlSource
from PaperShelf.core.store import DocumentStore
from PaperShelf.storage.db import DatabaseManager
from PaperShelf.storage.migration import latest_version, schema_version
from PaperShelf.utils.log import log

_NEXT_ID_KEY = "next_id"


def encode_source(source: Source) -> dict[str, str]:
    """Encode a source as a tagged JSON object."""
    if isinstance(source, FileSource):
        return {"kind": "file", "value": source.path}
    if isinstance(source, UrlSource):
        return {"kind": "url", "value": source.url}
    if isinstance(source, OtherSource):
        return {"kind": "other", "value": source.text}
    raise TypeError(f"Unsupported source: {source!r}")


def decode_source(raw: Any) -> Source:
    """Decode a tagged JSON object into a source.

    Raises:
        ValueError: If the object is malformed or the kind is unknown.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("value"), str):
        raise ValueError(f"Malformed source entry: {raw!r}")
    kind = raw.get("kind")
    value = raw["value"]
    if kind == "file":
        return FileSource(value)
    if kind == "url":
        return UrlSource(value)
    if kind == "other":
        return OtherSource(value)
    raise ValueError(f"Unknown source kind: {kind!r}")


def _decode_str_list(text: str, column: str) -> list[str]:
    values = json.loads(text)
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ValueError(f"{column} must be a JSON list of strings")
    return values


def _decode_row(row: tuple[Any, ...]) -> Document:
    doc_id, name, authors, sources, tags, lang = row
    raw_sources = json.loads(sources)
    if not isinstance(raw_sources, list):
        raise ValueError("sources must be a JSON list")
    return Document(
        id=doc_id,
        name=name,
        authors=_decode_str_list(authors, "authors"),
        source=[decode_source(item) for item in raw_sources],
        tags=_decode_str_list(tags, "tags"),
        lang=lang,
    )


_REQUIRED_TABLES = frozenset({"schema_version", "documents", "catalog_meta"})


def _check_schema(conn: sqlite3.Connection) -> int:
    """Return the schema version of a PaperShelf catalog.

    Raises:
        ValueError: If a catalog table is missing (empty, truncated or foreign
            SQLite file).
    """
    tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    missing = _REQUIRED_TABLES - tables
    if missing:
        raise ValueError(f"missing tables: {', '.join(sorted(missing))}")
    return schema_version(conn)


def _read_store(conn: sqlite3.Connection) -> DocumentStore:
    rows = conn.execute(
        "SELECT id, name, authors, sources, tags, lang FROM documents ORDER BY id"
    ).fetchall()
    meta = conn.execute("SELECT value FROM catalog_meta WHERE key = ?", (_NEXT_ID_KEY,)).fetchone()
    documents = [_decode_row(row) for row in rows]
    return DocumentStore(documents, next_id=int(meta[0]) if meta else 0)


def load_store(path: Path) -> DocumentStore:
    """Load a catalog file into a new store.

    The file is opened read-only. Only a catalog written with an older schema
    is reopened for writing, to apply the pending migrations first.

    Args:
        path: Catalog database file.

    Returns:
        Store with ids, field values and the id high-water mark as persisted.

    Raises:
        PersistenceError: If the file is missing, is not a PaperShelf catalog,
            was written by a newer PaperShelf, or its content is unparseable.
    """
    if not path.is_file():
        raise PersistenceError("Catalog file not found", path)

    store: DocumentStore | None = None
    try:
        with DatabaseManager(path, read_only=True) as manager:
            conn = manager.get_connection()
            version = _check_schema(conn)
            if version > latest_version():
                raise PersistenceError(f"Catalog written by a newer PaperShelf (schema v{version})", path)
            if version == latest_version():
                store = _read_store(conn)
        if store is None:
            log.info("Upgrading catalog schema from v%d to v%d: %s", version, latest_version(), path)
            with DatabaseManager(path) as manager:
                store = _read_store(manager.get_connection())
    except (sqlite3.Error, ValueError, TypeError) as error:
        raise PersistenceError(f"Corrupt catalog ({error})", path) from error

    log.debug("Loaded %d documents from %s", len(store), path)
    return store


def save_store(path: Path, store: DocumentStore) -> None:
    """Write every document of ``store`` to the catalog file.

    The previous content is replaced in a single transaction.

    Raises:
        PersistenceError: If the file cannot be written.
    """
    rows = [
        (
            document.id,
            document.name,
            json.dumps(list(document.authors), ensure_ascii=False),
            json.dumps([encode_source(src) for src in document.source], ensure_ascii=False),
            json.dumps(list(document.tags), ensure_ascii=False),
            document.lang,
        )
        for document in store
    ]

    try:
        with DatabaseManager(path) as manager:
            conn = manager.get_connection()
            conn.execute("BEGIN")
            try:
                conn.execute("DELETE FROM documents")
                conn.executemany(
                    """
                    INSERT INTO documents (id, name, authors, sources, tags, lang)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )
                conn.execute(
                    "INSERT OR REPLACE INTO catalog_meta (key, value) VALUES (?, ?)",
                    (_NEXT_ID_KEY, str(store.next_id)),
                )
                conn.execute("COMMIT")
            except Exception:
                conn.execute("ROLLBACK")
                raise
    except (sqlite3.Error, OSError, ValueError) as error:
        raise PersistenceError(f"Cannot write catalog ({error})", path) from error

    log.debug("Stored %d documents to %s", len(rows), path)
