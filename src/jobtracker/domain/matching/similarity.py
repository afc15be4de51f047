"""Normalised string similarity based on edit distance."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def similarity(a: str | None, b: str | None) -> float:
    """Return ``1 - levenshtein(a, b) / max(len(a), len(b))`` on lower-cased input.

    Insertions, deletions and substitutions each cost 1. Empty or missing input
    scores 0.0 rather than raising, so callers can pass optional record fields
    straight through.
    """

    if not a or not b:
        return 0.0
    left = a.lower()
    right = b.lower()
    distance = Levenshtein.distance(left, right)
    return 1.0 - distance / max(len(left), len(right))
