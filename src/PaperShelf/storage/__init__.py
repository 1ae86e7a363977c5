"""Storage layer for PaperShelf.

Provides the SQLite catalog format, schema migrations, catalog discovery and
zip export.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PaperShelf.storage.archive import export_archive
from PaperShelf.storage.catalog import load_store, save_store
from PaperShelf.storage.db import DatabaseManager
from PaperShelf.storage.locate import find_catalog, init_catalog, resolve_catalog
from PaperShelf.storage.migration import run_migrations

if TYPE_CHECKING:
    from PaperShelf.config import AppConfig


def locate_catalog(config: AppConfig, start: Path | None = None) -> Path:
    """Return the catalog file for ``start`` (default: working directory).

    Args:
        config: Application configuration holding catalog settings.
        start: Directory to search from.

    Raises:
        CatalogNotFoundError: If no catalog can be found.
    """
    return resolve_catalog(
        start or Path.cwd(),
        file_name=config.catalog.file_name,
        path_env=config.catalog.path_env,
    )


__all__ = [
    "DatabaseManager",
    "export_archive",
    "find_catalog",
    "init_catalog",
    "load_store",
    "locate_catalog",
    "resolve_catalog",
    "run_migrations",
    "save_store",
]
