"""Domain errors raised by PaperShelf.

Every error carries the context (id, token, path) needed to print a precise
message at the CLI boundary.
"""

from __future__ import annotations

from pathlib import Path


class PaperShelfError(Exception):
    """Base class for all PaperShelf domain errors."""


class NotFoundError(PaperShelfError):
    """No document with the given id exists in the store."""

    def __init__(self, doc_id: int) -> None:
        super().__init__(f"There is no document with id {doc_id}")
        self.doc_id = doc_id


class QueryParseError(PaperShelfError):
    """A query token could not be parsed."""

    def __init__(self, reason: str, token: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.token = token


class PersistenceError(PaperShelfError):
    """The catalog file is missing or cannot be decoded."""

    def __init__(self, reason: str, path: Path) -> None:
        super().__init__(f"{reason}: {path}")
        self.reason = reason
        self.path = path


class CatalogNotFoundError(PaperShelfError):
    """No catalog exists in a directory or any of its parents."""

    def __init__(self, start: Path) -> None:
        super().__init__(f"{start} is not a PaperShelf catalog (or any parent)")
        self.start = start


class InvalidSourceError(PaperShelfError):
    """A local file given on the command line does not exist."""

    def __init__(self, source: str) -> None:
        super().__init__(f"{source} is not a valid source")
        self.source = source
