"""Score documents against queries."""

from __future__ import annotations

from PaperShelf.core.matcher import EXACT, ZERO, Score, match_field, sum_scores
from PaperShelf.core.models import Document
from PaperShelf.core.query import (
    Author,
    FreeText,
    Id,
    Lang,
    Query,
    QueryElement,
    SourceText,
    Tag,
    Title,
)


def evaluate_element(element: QueryElement, document: Document, exact_only: bool) -> Score:
    """Score one document against one query element.

    Free text searches title, authors, sources and tags. The language is only
    reachable through an explicit ``lang:`` element.

    Args:
        element: Query element.
        document: Candidate document.
        exact_only: Disable substring and approximate matching.

    Returns:
        The element score; ``ZERO`` when nothing matches.

    Raises:
        TypeError: If ``element`` is not a known query element type.
    """
    if isinstance(element, Id):
        return EXACT if document.id == element.value else ZERO
    if isinstance(element, FreeText):
        targets = [document.name, *document.authors, *document.source_strings(), *document.tags]
        return match_field(element.text, targets, exact_only)
    if isinstance(element, Title):
        return match_field(element.text, [document.name], exact_only)
    if isinstance(element, Author):
        return match_field(element.text, document.authors, exact_only)
    if isinstance(element, SourceText):
        return match_field(element.text, document.source_strings(), exact_only)
    if isinstance(element, Tag):
        return match_field(element.text, document.tags, exact_only)
    if isinstance(element, Lang):
        return match_field(element.text, [document.lang], exact_only)
    raise TypeError(f"Unsupported query element: {element!r}")


def evaluate(query: Query, document: Document, exact_only: bool) -> Score:
    """Score one document against a whole query.

    Every element must contribute something: a single zero element zeroes the
    whole query. Otherwise element scores are summed, so documents matching
    more elements rank higher.
    """
    scores = [evaluate_element(element, document, exact_only) for element in query]
    if not scores or any(score.is_zero() for score in scores):
        return ZERO
    return sum_scores(scores)
