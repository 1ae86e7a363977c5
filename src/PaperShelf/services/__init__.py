"""Search service layer for PaperShelf.

Provides the ranking service over a loaded document store and its factory.
"""

from __future__ import annotations

from PaperShelf.core.store import DocumentStore
from PaperShelf.services.search import CatalogSearchService, RankedDocument, rank_documents


def create_search_service(store: DocumentStore) -> CatalogSearchService:
    """Create a search service bound to a loaded store.

    Args:
        store: Store holding every document of the catalog.

    Returns:
        Configured CatalogSearchService instance.
    """
    return CatalogSearchService(store=store)


__all__ = [
    "CatalogSearchService",
    "RankedDocument",
    "create_search_service",
    "rank_documents",
]
