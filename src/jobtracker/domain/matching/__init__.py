"""Similarity scoring, status progression and job matching policies."""

from __future__ import annotations

from .finder import NO_MATCH, MatchFinder, MatchResult, PotentialMatch, composite_similarity
from .progression import STATUS_RANKS, is_ranked, rank_of, should_adopt
from .similarity import similarity

__all__ = [
    "NO_MATCH",
    "STATUS_RANKS",
    "MatchFinder",
    "MatchResult",
    "PotentialMatch",
    "composite_similarity",
    "is_ranked",
    "rank_of",
    "should_adopt",
    "similarity",
]
