"""Score a query token against document field values.

Matching is case-insensitive and tiered:

- whole-string equality is exact evidence;
- a contiguous substring is strong fuzzy evidence;
- otherwise every whitespace-separated word of the target is compared by
  normalized edit distance, and close words contribute a partial fuzzy score.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from PaperShelf.core.distance import edit_distance

# Words further apart than this normalized distance contribute nothing.
MAX_NORMALIZED_DISTANCE = 1.0 / 3.0


@dataclass(frozen=True, slots=True)
class Score:
    """Two-component relevance score.

    Attributes:
        exact: Weight accumulated from whole-string matches.
        fuzzy: Weight accumulated from substring and approximate matches.
    """

    exact: float = 0.0
    fuzzy: float = 0.0

    def __add__(self, other: Score) -> Score:
        return Score(self.exact + other.exact, self.fuzzy + other.fuzzy)

    def is_zero(self) -> bool:
        """Return True when the score carries no evidence at all."""
        return self.exact == 0.0 and self.fuzzy == 0.0


ZERO = Score()
EXACT = Score(exact=1.0)
SUBSTRING = Score(fuzzy=1.0)


def compare_scores(left: Score, right: Score) -> int:
    """Order scores by exact component first, then fuzzy.

    Returns:
        Negative if ``left`` ranks below ``right``, positive if above, 0 on tie.
    """
    if left.exact != right.exact:
        return -1 if left.exact < right.exact else 1
    if left.fuzzy != right.fuzzy:
        return -1 if left.fuzzy < right.fuzzy else 1
    return 0


def sum_scores(scores: Iterable[Score]) -> Score:
    """Componentwise sum of scores."""
    total = ZERO
    for score in scores:
        total = total + score
    return total


def word_similarity(token: str, word: str) -> float:
    """Similarity in ``[2/3, 1]`` for close words, else 0.

    Args:
        token: Lowercased query token.
        word: Lowercased target word.
    """
    longest = max(len(token), len(word))
    if longest == 0:
        return 1.0
    normalized = edit_distance(token, word) / longest
    if normalized <= MAX_NORMALIZED_DISTANCE:
        return 1.0 - normalized
    return 0.0


def match_token(token: str, target: str, exact_only: bool) -> Score:
    """Score one query token against one target string.

    Args:
        token: Query token.
        target: Field value.
        exact_only: Skip substring and approximate matching.

    Returns:
        ``(1, 0)`` on equality, ``(0, 1)`` on substring, the summed word
        similarities otherwise.
    """
    token = token.lower()
    target = target.lower()

    if token == target:
        return EXACT
    if exact_only:
        return ZERO
    if token in target:
        return SUBSTRING

    # No whitespace means a single whole-string comparison.
    return Score(fuzzy=sum(word_similarity(token, word) for word in target.split()))


def match_field(token: str, targets: Iterable[str], exact_only: bool) -> Score:
    """Sum ``match_token`` over every value of a field.

    Several matching values accumulate: two partially matching co-authors
    outscore a single one.
    """
    return sum_scores(match_token(token, target, exact_only) for target in targets)
