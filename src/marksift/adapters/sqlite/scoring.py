"""Relevance scoring without a term index.

Each result starts from a baseline that decays with its position in the
recency-ordered page (1.0, 0.9, 0.8, ...). Substring matches on high-signal
fields add fixed boosts. The total is capped at 1.0 and results are
re-sorted by score; equal scores keep their recency order.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from marksift.models.response import SearchHit

MAX_SCORE = 1.0


class ScoringProfile(BaseModel):
    """Baseline decay and per-field boosts."""

    decay_step: float = Field(default=0.1, ge=0.0)
    title_boost: float = Field(default=0.5, ge=0.0)
    tag_boost: float = Field(default=0.3, ge=0.0)
    url_boost: float = Field(default=0.0, ge=0.0)


class RankedCandidate(BaseModel):
    """The fields of a matched bookmark that scoring looks at."""

    id: str
    title: str | None = None
    url: str | None = None
    tags: list[str] = Field(default_factory=list)


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle in haystack.lower()


def baseline_score(position: int, decay_step: float) -> float:
    return max(0.0, MAX_SCORE - position * decay_step)


def score_candidate(candidate: RankedCandidate, position: int, query: str, profile: ScoringProfile) -> float:
    needle = query.lower()
    score = baseline_score(position, profile.decay_step)
    if _contains(candidate.title, needle):
        score += profile.title_boost
    if any(_contains(tag, needle) for tag in candidate.tags):
        score += profile.tag_boost
    if profile.url_boost and _contains(candidate.url, needle):
        score += profile.url_boost
    return min(score, MAX_SCORE)


def score_candidates(
    candidates: Sequence[RankedCandidate],
    query: str,
    profile: ScoringProfile | None = None,
) -> list[SearchHit]:
    """Score recency-ordered candidates and return hits sorted best first."""
    profile = profile or ScoringProfile()
    hits = [
        SearchHit(id=candidate.id, score=score_candidate(candidate, position, query, profile))
        for position, candidate in enumerate(candidates)
    ]
    # list.sort is stable, so ties keep recency order
    hits.sort(key=lambda hit: hit.score, reverse=True)
    return hits
