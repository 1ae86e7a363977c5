"""Search domain configuration: defaults for the search command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PaperShelf.config.common import ConfigSection

UNLIMITED = -1


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Search defaults, overridable per invocation.

    Attributes:
        exact: Default for exact-only matching.
        max_results: Result cap, ``UNLIMITED`` (-1) for none.
    """

    exact: bool
    max_results: int

    @property
    def limit(self) -> int | None:
        """Result cap as expected by the search service."""
        return None if self.max_results == UNLIMITED else self.max_results


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    section = ConfigSection.of(raw, "search")
    return SearchConfig(
        exact=section.flag("exact"),
        max_results=section.integer("max_results"),
    )


def check_search(config: SearchConfig) -> None:
    if config.max_results != UNLIMITED and config.max_results < 1:
        raise ValueError(f"search.max_results must be {UNLIMITED} or positive")
