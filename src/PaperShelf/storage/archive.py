"""Zip export of a catalog together with its local files."""

from __future__ import annotations

import tempfile
import zipfile
from pathlib import Path
from typing import Sequence

from PaperShelf.core.models import FileSource
from PaperShelf.core.store import DocumentStore
from PaperShelf.storage.catalog import save_store
from PaperShelf.utils.log import log


def select_documents(store: DocumentStore, ids: Sequence[int]) -> DocumentStore:
    """Build the store to export.

    With no ids the whole store is exported as is. Otherwise the selected
    documents are copied, in the given order, into a fresh store and get new
    ids starting from 0.

    Raises:
        NotFoundError: If an id is unknown.
    """
    if not ids:
        return store

    exported = DocumentStore.create()
    for doc_id in ids:
        document = store.get(doc_id)
        exported.add(
            name=document.name,
            authors=document.authors,
            sources=document.source,
            tags=document.tags,
            lang=document.lang,
        )
    return exported


def export_archive(
    store: DocumentStore,
    base_dir: Path,
    zip_path: Path,
    file_name: str,
    ids: Sequence[int] = (),
) -> int:
    """Write a zip holding the catalog file and every relative local file.

    Files stored with an absolute path live outside the catalog and are left
    out; missing files are skipped with a warning.

    Args:
        store: Loaded catalog.
        base_dir: Directory containing the catalog file.
        zip_path: Archive to create.
        file_name: Entry name of the catalog inside the archive.
        ids: Documents to export; all when empty.

    Returns:
        Number of local files copied into the archive.
    """
    exported = select_documents(store, ids)
    copied = 0

    with tempfile.TemporaryDirectory() as tmpdir:
        catalog_copy = Path(tmpdir) / file_name
        save_store(catalog_copy, exported)

        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.write(catalog_copy, arcname=file_name)
            for document in exported:
                for source in document.source:
                    if not isinstance(source, FileSource):
                        continue
                    rel_path = Path(source.path)
                    if rel_path.is_absolute():
                        log.debug("Skipping file outside the catalog: %s", rel_path)
                        continue
                    full_path = base_dir / rel_path
                    if not full_path.is_file():
                        log.warning("Missing file for document %d: %s", document.id, full_path)
                        continue
                    archive.write(full_path, arcname=rel_path.as_posix())
                    copied += 1

    log.info("Exported %d documents and %d files to %s", len(exported), copied, zip_path)
    return copied
