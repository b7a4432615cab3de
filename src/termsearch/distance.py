from __future__ import annotations
from typing import List


def levenshtein(a: str, b: str) -> int:
    """
    Classic Levenshtein edit distance (unit cost for insert / delete / substitute).

    Dynamic programming over the (len(a)+1) x (len(b)+1) table, keeping only
    two rows alive at a time. levenshtein(a, "") == len(a), symmetric, and 0
    for identical strings.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev: List[int] = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            cur[j] = min(prev[j] + 1,         # deletion
                         cur[j - 1] + 1,      # insertion
                         prev[j - 1] + cost)  # substitution
        prev = cur
    return prev[-1]
