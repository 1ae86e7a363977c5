"""PDF metadata extraction using PyMuPDF.

Used to prefill the prompts of ``add``. Extraction is best effort: any
failure yields empty hints.
"""

from __future__ import annotations

import re
from pathlib import Path

import pymupdf

from PaperShelf.core.models import DocumentHints, FileSource, Source
from PaperShelf.utils.log import log

_AUTHOR_SPLIT_RE = re.compile(r"\s*(?:,|;|\band\b)\s*")
_TAG_SPLIT_RE = re.compile(r"\s*[,;]\s*")


def _split(text: str, pattern: re.Pattern[str]) -> list[str]:
    return [part for part in pattern.split(text.strip()) if part]


def extract_metadata(path: Path) -> DocumentHints:
    """Read title, authors and tags from a PDF info dictionary.

    Tags combine the ``subject`` and ``keywords`` entries.

    Args:
        path: PDF file.

    Returns:
        Hints with whatever fields the PDF provides.
    """
    try:
        with pymupdf.open(path) as pdf:
            info = pdf.metadata or {}
    except Exception as error:  # noqa: BLE001 - metadata is optional
        log.debug("Cannot read PDF metadata from %s: %s", path, error)
        return DocumentHints()

    title = (info.get("title") or "").strip() or None
    authors = _split(info.get("author") or "", _AUTHOR_SPLIT_RE)
    subject = (info.get("subject") or "").strip()
    keywords = (info.get("keywords") or "").strip()
    tags = _split(", ".join(part for part in (subject, keywords) if part), _TAG_SPLIT_RE)
    return DocumentHints(title=title, authors=tuple(authors), tags=tuple(tags))


def suggest_metadata(source: Source, base_dir: Path) -> DocumentHints:
    """Return metadata hints for a source; only local PDF files are inspected."""
    if not isinstance(source, FileSource):
        return DocumentHints()
    path = Path(source.path)
    if not path.is_absolute():
        path = base_dir / path
    if path.suffix.lower() != ".pdf":
        return DocumentHints()
    return extract_metadata(path)
