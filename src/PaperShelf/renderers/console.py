"""Console text output renderers.

Renders documents into human-friendly text, optionally colored with
``click.style``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import click

from PaperShelf.core.models import Document
from PaperShelf.core.sources import export_source

_TITLE_STYLE = {"bold": True, "underline": True}
_AUTHORS_STYLE = {"fg": "green"}
_SOURCES_STYLE = {"fg": "red"}
_TAGS_STYLE = {"fg": "blue"}


def _style(text: str, colored: bool, style: dict[str, object]) -> str:
    return click.style(text, **style) if colored else text


def render_document(document: Document, base_dir: Path, *, colored: bool = False) -> str:
    """Render one document as a text block.

    Args:
        document: Document to render.
        base_dir: Catalog directory, used to show absolute file paths.
        colored: Emit ANSI styles.

    Returns:
        Lines without a trailing newline.
    """
    lines = [_style(f"# {document.id} : {document.name}", colored, _TITLE_STYLE)]

    if document.authors:
        lines.append(_style("Authors : ", colored, _AUTHORS_STYLE) + ", ".join(document.authors))

    for idx, source in enumerate(document.source):
        label = "Source  :" if idx == 0 else "         "
        if idx == 0:
            label = _style(label, colored, _SOURCES_STYLE)
        lines.append(f"{label} #{idx}: {export_source(base_dir, source)}")

    if document.tags:
        lines.append(_style("Tags    : ", colored, _TAGS_STYLE) + ", ".join(document.tags))

    if document.lang:
        lines.append(f"Lang    : {document.lang}")

    return "\n".join(lines)


def render_documents(documents: Iterable[Document], base_dir: Path, *, colored: bool = False) -> str:
    """Render documents separated by blank lines."""
    return "\n\n".join(render_document(doc, base_dir, colored=colored) for doc in documents)


def render_ids(documents: Iterable[Document]) -> str:
    """Render the short form: space-separated ids."""
    return " ".join(str(doc.id) for doc in documents)


class ConsoleOutputWriter:
    """Write documents to stdout."""

    def __init__(self, base_dir: Path, *, colored: bool = False) -> None:
        self.base_dir = base_dir
        self.colored = colored

    def write_documents(self, documents: list[Document], *, short: bool = False) -> None:
        """Print documents in full or short form. Prints nothing when empty."""
        if not documents:
            return
        if short:
            click.echo(render_ids(documents))
        else:
            click.echo(render_documents(documents, self.base_dir, colored=self.colored))
