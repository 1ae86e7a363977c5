"""Command implementations for PaperShelf CLI.

Encapsulates business logic for each command, separated from CLI parameter
handling (``ui``) and from catalog lifecycle management (``runner``).
"""

from __future__ import annotations

import dataclasses
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, Sequence

from PaperShelf.core.errors import InvalidSourceError
from PaperShelf.core.models import Document, DocumentHints, FileSource, Source
from PaperShelf.core.query import Query
from PaperShelf.core.sources import export_source, import_source
from PaperShelf.core.store import DocumentStore
from PaperShelf.metadata.pdf import suggest_metadata
from PaperShelf.renderers.console import ConsoleOutputWriter
from PaperShelf.services.search import CatalogSearchService
from PaperShelf.storage.archive import export_archive
from PaperShelf.utils.log import log

# (label, default) -> answer
Prompter = Callable[[str, str], str]
# argv -> None, starts a detached process
Launcher = Callable[[Sequence[str]], None]


class Command(Protocol):
    """A single CLI action operating on a loaded catalog."""

    def execute(self) -> None:
        """Run the command."""


def split_list(text: str) -> list[str]:
    """Split a comma separated answer, dropping empty items."""
    return [item.strip() for item in text.split(",") if item.strip()]


def check_sources(sources: Sequence[Source], base_dir: Path) -> None:
    """Ensure every local file source exists.

    Raises:
        InvalidSourceError: On the first missing file.
    """
    for source in sources:
        if isinstance(source, FileSource) and not Path(export_source(base_dir, source)).exists():
            raise InvalidSourceError(source.path)


def spawn_detached(argv: Sequence[str]) -> None:
    """Start ``argv`` in its own session without waiting for it."""
    subprocess.Popen(  # noqa: S603 - argv comes from user config
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


@dataclass(slots=True)
class SearchCommand:
    """Rank the catalog against a query and print the matches."""

    search_service: CatalogSearchService
    output_writer: ConsoleOutputWriter
    query: Query
    exact_only: bool
    max_results: int | None
    short: bool = False

    def execute(self) -> None:
        ranked = self.search_service.search(
            self.query,
            exact_only=self.exact_only,
            max_results=self.max_results,
        )
        for item in ranked:
            log.debug("doc=%d exact=%.3f fuzzy=%.3f", item.document.id, item.score.exact, item.score.fuzzy)
        self.output_writer.write_documents([item.document for item in ranked], short=self.short)


@dataclass(slots=True)
class AddCommand:
    """Add one document per new source.

    Fields not given on the command line are asked through ``prompter``,
    prefilled with metadata read from the source when available. Sources
    already present in the catalog are skipped.
    """

    store: DocumentStore
    base_dir: Path
    output_writer: ConsoleOutputWriter
    sources: Sequence[str]
    prompter: Prompter
    title: str | None = None
    authors: Sequence[str] | None = None
    tags: Sequence[str] | None = None
    lang: str = ""
    hint_provider: Callable[[Source, Path], DocumentHints] = suggest_metadata

    def execute(self) -> None:
        sources = [import_source(self.base_dir, text) for text in self.sources]
        check_sources(sources, self.base_dir)

        added: list[Document] = []
        for source in sources:
            if self.store.find(lambda doc: source in doc.source) is not None:
                log.info("Source already in catalog, skipping: %s", source)
                continue
            hints = self.hint_provider(source, self.base_dir)
            document = self.store.add(
                name=self._title(hints),
                authors=self._list("Authors (comma separated)", self.authors, hints.authors),
                sources=[source],
                tags=self._list("Tags (comma separated)", self.tags, hints.tags),
                lang=self.lang,
            )
            log.info("Successfully added document # %d", document.id)
            added.append(document)

        self.output_writer.write_documents(added)

    def _title(self, hints: DocumentHints) -> str:
        if self.title is not None:
            return self.title
        return self.prompter("Title", hints.title or "").strip()

    def _list(self, label: str, given: Sequence[str] | None, hinted: Sequence[str]) -> list[str]:
        if given is not None:
            return list(given)
        return split_list(self.prompter(label, ", ".join(hinted)))


@dataclass(slots=True)
class RemoveCommand:
    """Delete documents by id. Unknown ids abort the whole command."""

    store: DocumentStore
    ids: Sequence[int]

    def execute(self) -> None:
        documents = [self.store.get(doc_id) for doc_id in self.ids]
        for document in documents:
            self.store.remove(document)
            log.info("Successfully removed document # %d", document.id)


@dataclass(slots=True)
class ShowCommand:
    """Print documents by id, or the whole catalog sorted by id."""

    store: DocumentStore
    output_writer: ConsoleOutputWriter
    ids: Sequence[int] = ()

    def execute(self) -> None:
        if not self.ids:
            documents = sorted(self.store, key=lambda doc: doc.id)
        else:
            documents = [self.store.get(doc_id) for doc_id in self.ids if doc_id in self.store]
        self.output_writer.write_documents(documents)


@dataclass(slots=True)
class AddSourcesCommand:
    store: DocumentStore
    base_dir: Path
    doc_id: int
    sources: Sequence[str]

    def execute(self) -> None:
        document = self.store.get(self.doc_id)
        sources = [import_source(self.base_dir, text) for text in self.sources]
        check_sources(sources, self.base_dir)
        self.store.update(dataclasses.replace(document, source=(*document.source, *sources)))


@dataclass(slots=True)
class RemoveSourcesCommand:
    """Remove sources by their position in the document's source list."""

    store: DocumentStore
    doc_id: int
    indices: Sequence[int]

    def execute(self) -> None:
        document = self.store.get(self.doc_id)
        for index in self.indices:
            if not 0 <= index < len(document.source):
                log.warning("There is no source with id %d", index)
        kept = [src for idx, src in enumerate(document.source) if idx not in self.indices]
        self.store.update(dataclasses.replace(document, source=kept))


@dataclass(slots=True)
class AddTagsCommand:
    store: DocumentStore
    doc_id: int
    tags: Sequence[str]

    def execute(self) -> None:
        document = self.store.get(self.doc_id)
        self.store.update(dataclasses.replace(document, tags=(*document.tags, *self.tags)))


@dataclass(slots=True)
class RemoveTagsCommand:
    store: DocumentStore
    doc_id: int
    tags: Sequence[str]

    def execute(self) -> None:
        document = self.store.get(self.doc_id)
        kept = [tag for tag in document.tags if tag not in self.tags]
        self.store.update(dataclasses.replace(document, tags=kept))


@dataclass(slots=True)
class SetTitleCommand:
    store: DocumentStore
    doc_id: int
    title: str | None
    prompter: Prompter

    def execute(self) -> None:
        document = self.store.get(self.doc_id)
        title = self.title if self.title is not None else self.prompter("New title", document.name).strip()
        self.store.update(dataclasses.replace(document, name=title))


@dataclass(slots=True)
class SetLangCommand:
    store: DocumentStore
    doc_id: int
    lang: str

    def execute(self) -> None:
        document = self.store.get(self.doc_id)
        self.store.update(dataclasses.replace(document, lang=self.lang.strip()))


@dataclass(slots=True)
class ExportCommand:
    store: DocumentStore
    base_dir: Path
    zip_path: Path
    file_name: str
    ids: Sequence[int] = ()

    def execute(self) -> None:
        export_archive(self.store, self.base_dir, self.zip_path, self.file_name, self.ids)


@dataclass(slots=True)
class OpenCommand:
    """Open sources of a document with the external reader.

    Unknown source indices are reported and skipped.
    """

    store: DocumentStore
    base_dir: Path
    reader: str
    doc_id: int
    indices: Sequence[int] = (0,)
    launcher: Launcher = spawn_detached

    def execute(self) -> None:
        document = self.store.get(self.doc_id)
        for index in self.indices:
            if not 0 <= index < len(document.source):
                log.error("There is no source with id %d", index)
                continue
            target = export_source(self.base_dir, document.source[index])
            log.info("Running '%s %s'", self.reader, target)
            self.launcher([self.reader, target])
