"""Tests for schema migration mechanism.

Covers:
  1. fresh catalog       - all tables created, schema_version written
  2. already up to date  - second run executes no DDL
  3. new migration       - v2 applied to an existing catalog, old data intact
  4. broken migration    - transaction rolled back, version unchanged
Plus: version-gap validation raises ValueError.
"""

import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

import PaperShelf.storage.migration as migration_module
from PaperShelf.storage.db import DatabaseManager
from PaperShelf.storage.migration import MIGRATIONS, Migration, latest_version, run_migrations


def _connect(path: Path) -> sqlite3.Connection:
    return sqlite3.connect(str(path))


def _current_version(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    return row[0] if row else 0


def _table_names(conn: sqlite3.Connection) -> set[str]:
    return {
        row[0]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    }


_LATEST_VERSION = max(m.version for m in MIGRATIONS)


class TestFreshDatabase(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / ".papershelf.db")

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_schema_version_equals_latest(self):
        self.assertEqual(run_migrations(self._conn), _LATEST_VERSION)
        self.assertEqual(_current_version(self._conn), _LATEST_VERSION)

    def test_main_tables_created(self):
        run_migrations(self._conn)
        tables = _table_names(self._conn)
        for name in ("documents", "catalog_meta", "schema_version"):
            with self.subTest(table=name):
                self.assertIn(name, tables)

    def test_negative_id_rejected(self):
        run_migrations(self._conn)
        with self.assertRaises(sqlite3.IntegrityError):
            self._conn.execute("INSERT INTO documents (id, name) VALUES (-1, 'x')")


class TestAlreadyUpToDate(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / ".papershelf.db")
        run_migrations(self._conn)

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_version_unchanged_on_second_run(self):
        version_before = _current_version(self._conn)
        run_migrations(self._conn)
        self.assertEqual(_current_version(self._conn), version_before)

    def test_no_new_tables_on_second_run(self):
        tables_before = _table_names(self._conn)
        run_migrations(self._conn)
        self.assertEqual(_table_names(self._conn), tables_before)


class TestNewMigration(unittest.TestCase):
    """Simulated v2 migration applied to a v1 catalog."""

    _V2 = Migration(
        version=2,
        description="Add note column to documents",
        sql="ALTER TABLE documents ADD COLUMN note TEXT;",
    )

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / ".papershelf.db")
        run_migrations(self._conn)
        self._conn.execute("INSERT INTO documents (id, name) VALUES (?, ?)", (0, "Pre-v2 Paper"))
        self._conn.commit()

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_version_advances_to_v2(self):
        with patch.object(migration_module, "MIGRATIONS", list(MIGRATIONS) + [self._V2]):
            run_migrations(self._conn)
        self.assertEqual(_current_version(self._conn), 2)

    def test_new_column_exists_and_data_preserved(self):
        with patch.object(migration_module, "MIGRATIONS", list(MIGRATIONS) + [self._V2]):
            run_migrations(self._conn)
        row = self._conn.execute("SELECT name, note FROM documents WHERE id = 0").fetchone()
        self.assertEqual(row[0], "Pre-v2 Paper")
        self.assertIsNone(row[1])


class TestRollbackOnError(unittest.TestCase):
    _BAD_V2 = Migration(
        version=2,
        description="Intentionally broken migration",
        sql="CREATE TABLE half_done (x INTEGER); THIS IS NOT VALID SQL;",
    )

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / ".papershelf.db")
        run_migrations(self._conn)

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_version_and_tables_unchanged(self):
        version_before = _current_version(self._conn)
        with patch.object(migration_module, "MIGRATIONS", list(MIGRATIONS) + [self._BAD_V2]):
            with self.assertRaises(sqlite3.Error):
                run_migrations(self._conn)
        self.assertEqual(_current_version(self._conn), version_before)
        self.assertNotIn("half_done", _table_names(self._conn))


class TestVersionContinuityValidation(unittest.TestCase):
    def test_gap_raises_value_error(self):
        gap_migrations = list(MIGRATIONS) + [
            Migration(version=_LATEST_VERSION + 2, description="Gap migration", sql="SELECT 1;")
        ]
        with tempfile.TemporaryDirectory() as tmpdir:
            conn = _connect(Path(tmpdir) / ".papershelf.db")
            try:
                with patch.object(migration_module, "MIGRATIONS", gap_migrations):
                    with self.assertRaises(ValueError):
                        run_migrations(conn)
            finally:
                conn.close()


class TestDatabaseManager(unittest.TestCase):
    def test_open_migrates_and_close(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / ".papershelf.db"
            with DatabaseManager(path) as manager:
                conn = manager.get_connection()
                self.assertEqual(_current_version(conn), _LATEST_VERSION)
            with self.assertRaises(RuntimeError):
                manager.get_connection()

    def test_read_only_open_does_not_migrate(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".papershelf.db"
            path.write_bytes(b"")
            with DatabaseManager(path, read_only=True) as manager:
                self.assertEqual(_table_names(manager.get_connection()), set())
            self.assertEqual(path.stat().st_size, 0)

    def test_read_only_open_of_missing_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "absent.db"
            with self.assertRaises(sqlite3.OperationalError):
                DatabaseManager(path, read_only=True)
            self.assertFalse(path.exists())


class TestNewerSchema(unittest.TestCase):
    def test_schema_newer_than_known_migrations(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            conn = _connect(Path(tmpdir) / ".papershelf.db")
            try:
                run_migrations(conn)
                conn.execute("UPDATE schema_version SET version = ?", (latest_version() + 1,))
                conn.commit()
                with self.assertRaisesRegex(ValueError, "newer"):
                    run_migrations(conn)
            finally:
                conn.close()


if __name__ == "__main__":
    unittest.main()
