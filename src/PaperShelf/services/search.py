"""Ranking service: scan the catalog and order matching documents."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable

from PaperShelf.core.evaluate import evaluate
from PaperShelf.core.matcher import Score, compare_scores
from PaperShelf.core.models import Document
from PaperShelf.core.query import Query, format_query
from PaperShelf.core.store import DocumentStore
from PaperShelf.utils.log import log


@dataclass(frozen=True, slots=True)
class RankedDocument:
    """A matching document together with its score."""

    document: Document
    score: Score


def _compare_ranked(left: RankedDocument, right: RankedDocument) -> int:
    # Descending: higher scores first.
    return compare_scores(right.score, left.score)


def rank_documents(
    query: Query,
    documents: Iterable[Document],
    *,
    exact_only: bool = False,
) -> list[RankedDocument]:
    """Score, filter and sort documents.

    Args:
        query: Parsed query.
        documents: Candidates, scanned linearly.
        exact_only: Disable substring and approximate matching.

    Returns:
        Documents with a non-zero score, best first. Documents with equal
        scores keep their input order.
    """
    ranked: list[RankedDocument] = []
    for document in documents:
        score = evaluate(query, document, exact_only)
        if score.is_zero():
            continue
        ranked.append(RankedDocument(document=document, score=score))
    return sorted(ranked, key=cmp_to_key(_compare_ranked))


@dataclass(slots=True)
class CatalogSearchService:
    """Application service that searches one document store."""

    store: DocumentStore

    def search(
        self,
        query: Query,
        *,
        exact_only: bool = False,
        max_results: int | None = None,
    ) -> list[RankedDocument]:
        """Rank every document of the store against ``query``.

        Args:
            query: Parsed query.
            exact_only: Disable substring and approximate matching.
            max_results: Keep only the first N results when set.

        Returns:
            Ranked matches, best first.
        """
        log.debug(
            "Searching %d documents query=%r exact_only=%s",
            len(self.store),
            format_query(query),
            exact_only,
        )
        ranked = rank_documents(query, self.store, exact_only=exact_only)
        log.debug("Matched %d documents", len(ranked))
        if max_results is not None:
            ranked = ranked[:max_results]
        return ranked
