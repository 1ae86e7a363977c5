"""Parameterized edit distance."""

from __future__ import annotations

import operator
from typing import Callable, Sequence


def edit_distance(
    u: Sequence[str],
    v: Sequence[str],
    *,
    delete_cost: int = 1,
    insert_cost: int = 1,
    substitute_cost: int = 1,
    equal: Callable[[str, str], bool] = operator.eq,
) -> int:
    """Compute the edit distance between two character sequences.

    Classic dynamic-programming table where ``d[i][j]`` holds the distance
    between the first ``i`` characters of ``u`` and the first ``j`` characters
    of ``v``. Only two rows are kept alive at a time.

    Args:
        u: Source sequence.
        v: Target sequence.
        delete_cost: Cost of deleting one character of ``u``.
        insert_cost: Cost of inserting one character of ``v``.
        substitute_cost: Cost of replacing one character.
        equal: Character equality predicate, e.g. a case-folding comparison.

    Returns:
        The minimal total edit cost. With unit costs this lies in
        ``[0, max(len(u), len(v))]``.

    Examples:
        >>> edit_distance("kitten", "sitting")
        3
        >>> edit_distance("Go", "go", equal=lambda a, b: a.lower() == b.lower())
        0
    """
    m, n = len(u), len(v)

    prev_row = [i * delete_cost for i in range(m + 1)]
    for j in range(1, n + 1):
        curr_row = [j * insert_cost] + [0] * m
        for i in range(1, m + 1):
            if equal(u[i - 1], v[j - 1]):
                curr_row[i] = prev_row[i - 1]
            else:
                curr_row[i] = min(
                    curr_row[i - 1] + delete_cost,  # deletion
                    prev_row[i] + insert_cost,  # insertion
                    prev_row[i - 1] + substitute_cost,  # substitution
                )
        prev_row = curr_row

    return prev_row[m]
