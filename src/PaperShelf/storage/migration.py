"""Versioned schema migrations for catalog databases.

Each catalog records the last applied migration in ``schema_version``.
Opening a catalog written by an older PaperShelf applies the missing
migrations in order, each one atomically.

Migrations live in :mod:`PaperShelf.storage.migrations`, one ``vNNN_*``
module per version exposing a ``MIGRATION`` constant.
"""

from __future__ import annotations

import importlib
import pkgutil
import sqlite3
from dataclasses import dataclass

from PaperShelf.utils.log import log

_VERSION_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS schema_version (
    id      INTEGER PRIMARY KEY CHECK (id = 1),
    version INTEGER NOT NULL
)
"""


@dataclass(frozen=True)
class Migration:
    """One schema step.

    Attributes:
        version: Position in the migration sequence, starting at 1.
        description: Short summary, logged when applied.
        sql: Statements separated by ``;``.
    """

    version: int
    description: str
    sql: str

    def statements(self) -> list[str]:
        return [stmt.strip() for stmt in self.sql.split(";") if stmt.strip()]


def _discover() -> list[Migration]:
    package = importlib.import_module("PaperShelf.storage.migrations")
    found = []
    for info in pkgutil.iter_modules(package.__path__):
        module = importlib.import_module(f"{package.__name__}.{info.name}")
        migration = getattr(module, "MIGRATION", None)
        if isinstance(migration, Migration):
            found.append(migration)
    return sorted(found, key=lambda m: m.version)


# Published migrations are never edited; schema changes add a module.
MIGRATIONS: list[Migration] = _discover()


def check_sequence(migrations: list[Migration]) -> None:
    """Raise ValueError unless versions run 1, 2, 3, ... without gaps."""
    for expected, migration in enumerate(migrations, start=1):
        if migration.version != expected:
            raise ValueError(
                f"Migration sequence broken at {migration.description!r}: "
                f"expected version {expected}, got {migration.version}"
            )


def schema_version(conn: sqlite3.Connection) -> int:
    """Return the last applied migration version, 0 for a fresh database."""
    row = conn.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    return row[0] if row else 0


def apply_migration(conn: sqlite3.Connection, migration: Migration) -> None:
    """Run one migration and bump the version in a single transaction.

    Statements go through ``execute`` one at a time; ``executescript`` would
    commit implicitly and a failure could leave the schema half migrated.

    Raises:
        sqlite3.Error: If a statement fails; nothing of the step is kept.
    """
    conn.execute("BEGIN")
    try:
        for stmt in migration.statements():
            conn.execute(stmt)
        conn.execute(
            "INSERT OR REPLACE INTO schema_version (id, version) VALUES (1, ?)",
            (migration.version,),
        )
        conn.execute("COMMIT")
    except Exception:
        conn.execute("ROLLBACK")
        raise


def latest_version() -> int:
    """Version a catalog has once every known migration is applied."""
    return MIGRATIONS[-1].version if MIGRATIONS else 0


def check_supported(version: int) -> None:
    """Raise ValueError for a schema written by a newer PaperShelf."""
    if version > latest_version():
        raise ValueError(
            f"Catalog schema v{version} is newer than the supported v{latest_version()}"
        )


def run_migrations(conn: sqlite3.Connection) -> int:
    """Bring the database schema up to the latest version.

    Args:
        conn: Open connection to the catalog.

    Returns:
        Schema version after the call.

    Raises:
        ValueError: If the migration sequence has a gap, or the schema is
            newer than the latest known migration.
        sqlite3.Error: If the file is not a database or a migration fails.
    """
    check_sequence(MIGRATIONS)
    conn.execute(_VERSION_TABLE_DDL)
    conn.commit()

    current = schema_version(conn)
    check_supported(current)
    for migration in MIGRATIONS:
        if migration.version <= current:
            continue
        apply_migration(conn, migration)
        current = migration.version
        log.debug("Applied migration v%03d: %s", migration.version, migration.description)
    return current
