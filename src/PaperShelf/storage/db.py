"""SQLite database utilities."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from PaperShelf.storage.migration import run_migrations


class DatabaseManager:
    """Owner of the single connection to a catalog database.

    Writers open the catalog normally and get the schema migrated to the
    latest version on open. Readers pass ``read_only=True``: the file is
    opened with ``mode=ro`` and left exactly as it is, schema included.
    Supports context manager protocol for automatic connection cleanup.
    """

    def __init__(self, db_path: Path, *, read_only: bool = False) -> None:
        """Open the database.

        Args:
            db_path: Path to the catalog database file.
            read_only: Open an existing file without migrating or writing.

        Raises:
            sqlite3.Error: If the file cannot be opened, is not a database, or
                a migration fails.
            ValueError: If the schema is newer than this version supports.
        """
        self.db_path = db_path
        self.read_only = read_only
        self.conn: sqlite3.Connection | None = (
            connect_read_only(db_path) if read_only else ensure_db(db_path)
        )
        if read_only:
            return
        try:
            run_migrations(self.conn)
        except Exception:
            self.close()
            raise

    def get_connection(self) -> sqlite3.Connection:
        """Get the database connection.

        Raises:
            RuntimeError: If the manager has been closed.
        """
        if self.conn is None:
            raise RuntimeError(f"Database connection already closed: {self.db_path}")
        return self.conn

    def close(self) -> None:
        """Close the database connection."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path) -> sqlite3.Connection:
    """Ensure the parent directory exists and return a read-write connection.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(db_path))


def connect_read_only(db_path: Path) -> sqlite3.Connection:
    """Open an existing database file read-only; nothing is created or written.

    Raises:
        sqlite3.Error: If the file cannot be opened.
    """
    return sqlite3.connect(f"{db_path.resolve().as_uri()}?mode=ro", uri=True)
