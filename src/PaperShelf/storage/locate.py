"""Find or create the catalog file for the current working directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from PaperShelf.core.errors import CatalogNotFoundError, PersistenceError
from PaperShelf.core.store import DocumentStore
from PaperShelf.storage.catalog import save_store
from PaperShelf.utils.log import log


def find_catalog(start: Path, file_name: str) -> Path:
    """Walk from ``start`` up to the filesystem root looking for a catalog.

    Args:
        start: Directory to start from.
        file_name: Catalog file name, e.g. ``.papershelf.db``.

    Returns:
        Path of the first catalog file found.

    Raises:
        CatalogNotFoundError: If neither ``start`` nor any parent holds one.
    """
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / file_name
        if candidate.is_file():
            return candidate
    raise CatalogNotFoundError(start)


def resolve_catalog(
    start: Path,
    file_name: str,
    path_env: str,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the catalog file, honoring the directory pinned by ``path_env``.

    Raises:
        CatalogNotFoundError: If no catalog can be found.
    """
    env = os.environ if environ is None else environ
    pinned = env.get(path_env, "").strip() if path_env else ""
    if pinned:
        candidate = Path(pinned).expanduser() / file_name
        if not candidate.is_file():
            raise CatalogNotFoundError(Path(pinned))
        log.debug("Using catalog from %s=%s", path_env, pinned)
        return candidate
    return find_catalog(start, file_name)


def init_catalog(directory: Path, file_name: str) -> Path:
    """Create an empty catalog in ``directory``.

    Raises:
        PersistenceError: If a catalog already exists there.
    """
    path = directory / file_name
    if path.exists():
        raise PersistenceError("Catalog already exists", path)
    save_store(path, DocumentStore.create())
    return path
