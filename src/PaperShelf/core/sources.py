"""Source parsing and path resolution relative to a catalog directory."""

from __future__ import annotations

import re
from pathlib import Path

from PaperShelf.core.models import FileSource, OtherSource, Source, UrlSource

_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_OPAQUE_PREFIXES = ("doi:", "isbn:", "arxiv:", "hal:")
_FILE_PREFIX = "file://"


def parse_source(text: str) -> Source:
    """Classify a raw source string.

    Args:
        text: Path, URL or opaque reference.

    Returns:
        ``FileSource`` for ``file://`` and plain paths, ``UrlSource`` for any
        other ``scheme://``, ``OtherSource`` for known opaque prefixes.
    """
    if text.startswith(_FILE_PREFIX):
        return FileSource(text[len(_FILE_PREFIX):])
    if _URL_RE.match(text):
        return UrlSource(text)
    if text.lower().startswith(_OPAQUE_PREFIXES):
        return OtherSource(text)
    return FileSource(text)


def import_source(base_dir: Path, text: str) -> Source:
    """Parse a source given on the command line.

    Local files inside ``base_dir`` are stored relative to it so the catalog
    can be moved together with its files.
    """
    source = parse_source(text)
    if not isinstance(source, FileSource):
        return source

    path = Path(source.path).expanduser().resolve()
    base = base_dir.resolve()
    try:
        return FileSource(path.relative_to(base).as_posix())
    except ValueError:
        return FileSource(str(path))


def export_source(base_dir: Path, source: Source) -> str:
    """Return a usable location for ``source``: absolute path for local files."""
    if isinstance(source, FileSource):
        path = Path(source.path)
        return str(path if path.is_absolute() else base_dir / path)
    if isinstance(source, (UrlSource, OtherSource)):
        return str(source)
    raise TypeError(f"Unsupported source: {source!r}")
