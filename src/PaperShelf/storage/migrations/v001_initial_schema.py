"""Migration v001: initial schema (documents, catalog_meta)."""

from __future__ import annotations

from PaperShelf.storage.migration import Migration

MIGRATION = Migration(
    version=1,
    description="Initial schema: documents, catalog_meta",
    sql="""
        CREATE TABLE IF NOT EXISTS documents (
          id INTEGER PRIMARY KEY CHECK (id >= 0),
          name TEXT NOT NULL,
          authors TEXT NOT NULL DEFAULT '[]',
          sources TEXT NOT NULL DEFAULT '[]',
          tags TEXT NOT NULL DEFAULT '[]',
          lang TEXT NOT NULL DEFAULT ''
        );

        CREATE TABLE IF NOT EXISTS catalog_meta (
          key TEXT PRIMARY KEY,
          value TEXT NOT NULL
        );
    """,
)
