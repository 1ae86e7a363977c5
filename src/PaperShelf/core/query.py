from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, Iterable, Union

from PaperShelf.core.errors import QueryParseError


@dataclass(frozen=True, slots=True)
class FreeText:
    """Match against title, authors, sources and tags."""

    text: str


@dataclass(frozen=True, slots=True)
class Id:
    """Match one document id exactly."""

    value: int


@dataclass(frozen=True, slots=True)
class Title:
    text: str


@dataclass(frozen=True, slots=True)
class Author:
    text: str


@dataclass(frozen=True, slots=True)
class SourceText:
    text: str


@dataclass(frozen=True, slots=True)
class Tag:
    text: str


@dataclass(frozen=True, slots=True)
class Lang:
    text: str


QueryElement = Union[FreeText, Id, Title, Author, SourceText, Tag, Lang]
Query = tuple[QueryElement, ...]


def _parse_id(value: str, token: str) -> Id:
    try:
        return Id(int(value))
    except ValueError:
        raise QueryParseError(f"{value} must be an int", token) from None


_PREFIXES: Final[dict[str, Callable[[str, str], QueryElement]]] = {
    "id": _parse_id,
    "title": lambda value, _: Title(value),
    "ti": lambda value, _: Title(value),
    "author": lambda value, _: Author(value),
    "a": lambda value, _: Author(value),
    "au": lambda value, _: Author(value),
    "source": lambda value, _: SourceText(value),
    "s": lambda value, _: SourceText(value),
    "src": lambda value, _: SourceText(value),
    "tag": lambda value, _: Tag(value),
    "ta": lambda value, _: Tag(value),
    "lang": lambda value, _: Lang(value),
}


def parse_query_token(token: str) -> QueryElement:
    """Parse one command-line token into a query element.

    A bare token is free text. ``prefix:value`` selects a field; the split
    happens at the first colon so values may contain colons themselves.
    Prefixes are matched case-insensitively (``Title:go`` is a title
    element). A token with an empty prefix such as ``:foo`` is free text
    kept verbatim, not an unknown-prefix error.

    Args:
        token: Raw token, e.g. ``"au:knuth"``.

    Returns:
        The parsed query element.

    Raises:
        QueryParseError: On an unknown prefix or a non-integer ``id:`` value.
    """
    prefix, sep, value = token.partition(":")
    if not sep or not prefix:
        return FreeText(token)

    build = _PREFIXES.get(prefix.lower())
    if build is None:
        raise QueryParseError(f"Unknown prefix {prefix}", token)
    return build(value, token)


def parse_query(tokens: Iterable[str]) -> Query:
    """Parse command-line tokens into a query, preserving their order."""
    return tuple(parse_query_token(token) for token in tokens)


def format_query_element(element: QueryElement) -> str:
    """Render an element back into the token syntax."""
    if isinstance(element, FreeText):
        return element.text
    if isinstance(element, Id):
        return f"id:{element.value}"
    if isinstance(element, Title):
        return f"title:{element.text}"
    if isinstance(element, Author):
        return f"author:{element.text}"
    if isinstance(element, SourceText):
        return f"source:{element.text}"
    if isinstance(element, Tag):
        return f"tag:{element.text}"
    if isinstance(element, Lang):
        return f"lang:{element.text}"
    raise TypeError(f"Unsupported query element: {element!r}")


def format_query(query: Query) -> str:
    """Render a whole query as space-separated tokens."""
    return " ".join(format_query_element(element) for element in query)
