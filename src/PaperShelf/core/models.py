from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union


@dataclass(frozen=True, slots=True)
class FileSource:
    """Local file, stored relative to the catalog directory when possible."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class UrlSource:
    """External reference with a URL scheme (http, https, ftp, ...)."""

    url: str

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True, slots=True)
class OtherSource:
    """Opaque reference such as ``doi:10.1000/182``."""

    text: str

    def __str__(self) -> str:
        return self.text


Source = Union[FileSource, UrlSource, OtherSource]


@dataclass(frozen=True, slots=True)
class Document:
    """Catalog record for one document.

    Attributes:
        id: Store-assigned identifier, never reused.
        name: Document title.
        authors: Author names in insertion order.
        source: Where the document can be found.
        tags: Free-form labels.
        lang: Language code, empty when unknown.
    """

    id: int
    name: str
    authors: Sequence[str] = ()
    source: Sequence[Source] = ()
    tags: Sequence[str] = ()
    lang: str = ""

    def __post_init__(self) -> None:
        # Normalize to tuples so documents stay hashable and comparable.
        object.__setattr__(self, "authors", tuple(self.authors))
        object.__setattr__(self, "source", tuple(self.source))
        object.__setattr__(self, "tags", tuple(self.tags))

    def source_strings(self) -> list[str]:
        """Return the string rendering of every source."""
        return [str(src) for src in self.source]


@dataclass(frozen=True, slots=True)
class DocumentHints:
    """Metadata suggested for a new document, e.g. from a PDF header."""

    title: str | None = None
    authors: Sequence[str] = ()
    tags: Sequence[str] = ()
