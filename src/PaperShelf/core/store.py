"""In-memory document store.

The store owns every document of a catalog for the duration of one command.
It is populated by :mod:`PaperShelf.storage.catalog` on load and written back
by the same module on exit.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence, TypeVar

from PaperShelf.core.errors import NotFoundError
from PaperShelf.core.models import Document, Source

T = TypeVar("T")


class DocumentStore:
    """Mutable collection of documents keyed by id.

    Ids are allocated as ``max(existing ids) + 1`` (``0`` for an empty store)
    and never drop below the high-water mark ``next_id``, so an id removed from
    the store is never handed out again.
    """

    def __init__(self, documents: Iterable[Document] = (), next_id: int = 0) -> None:
        """Initialize a store.

        Args:
            documents: Initial documents, in traversal order.
            next_id: Persisted high-water mark for id allocation.

        Raises:
            ValueError: If two documents share an id or an id is negative.
        """
        self._documents: dict[int, Document] = {}
        for document in documents:
            if document.id < 0:
                raise ValueError(f"Document id must be non-negative: {document.id}")
            if document.id in self._documents:
                raise ValueError(f"Duplicate document id: {document.id}")
            self._documents[document.id] = document
        self._next_id = max(next_id, self._max_id() + 1)

    @classmethod
    def create(cls) -> DocumentStore:
        """Return an empty store."""
        return cls()

    @property
    def next_id(self) -> int:
        """Id the next ``add`` will allocate."""
        return self._next_id

    def _max_id(self) -> int:
        return max(self._documents, default=-1)

    def add(
        self,
        name: str,
        authors: Sequence[str] = (),
        sources: Sequence[Source] = (),
        tags: Sequence[str] = (),
        lang: str = "",
    ) -> Document:
        """Insert a new document and return it with its allocated id."""
        doc_id = max(self._next_id, self._max_id() + 1)
        document = Document(
            id=doc_id,
            name=name,
            authors=authors,
            source=sources,
            tags=tags,
            lang=lang,
        )
        self._documents[doc_id] = document
        self._next_id = doc_id + 1
        return document

    def get(self, doc_id: int) -> Document:
        """Return the document with ``doc_id``.

        Raises:
            NotFoundError: If no such document exists.
        """
        try:
            return self._documents[doc_id]
        except KeyError:
            raise NotFoundError(doc_id) from None

    def update(self, document: Document) -> None:
        """Replace the stored document sharing ``document.id``.

        Raises:
            NotFoundError: If no document has that id.
        """
        if document.id not in self._documents:
            raise NotFoundError(document.id)
        self._documents[document.id] = document

    def remove(self, document: Document) -> None:
        """Delete a document by id. Removing an absent document is a no-op."""
        self._documents.pop(document.id, None)

    def find(self, predicate: Callable[[Document], bool]) -> Document | None:
        """Return the first document satisfying ``predicate``, if any."""
        for document in self._documents.values():
            if predicate(document):
                return document
        return None

    def fold(self, func: Callable[[Document, T], T], initial: T) -> T:
        """Fold ``func`` over every document in traversal order."""
        acc = initial
        for document in self._documents.values():
            acc = func(document, acc)
        return acc

    def __iter__(self) -> Iterator[Document]:
        return iter(list(self._documents.values()))

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents
