"""
Problem recommender.

Suggests practice problems whose tags overlap the user's weak tags. Works
against a candidate pool supplied by the caller, or against a small fixed
sample list per tier when no pool is available.
"""
from __future__ import annotations

import logging
from typing import Iterable

from .common import CandidateProblem, RecommendedProblem
from .skill import Tier

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
FALLBACK_LIMIT = 3


def _sample(contest_id, index, rating, *tags):
    return CandidateProblem(contest_id=contest_id, index=index, rating=rating, tags=tuple(tags))


_ENTRY_SAMPLES = (
    _sample(1, 'A', 1200, 'implementation', 'math'),
    _sample(1, 'B', 1300, 'greedy', 'implementation'),
    _sample(2, 'A', 1250, 'math', 'implementation'),
)

FALLBACK_PROBLEMS = {
    Tier.BEGINNER: _ENTRY_SAMPLES,
    Tier.PUPIL: _ENTRY_SAMPLES,
    Tier.SPECIALIST: (
        _sample(3, 'A', 1400, 'greedy', 'implementation'),
        _sample(3, 'B', 1500, 'dp', 'implementation'),
        _sample(4, 'A', 1450, 'math', 'greedy'),
    ),
    Tier.EXPERT: (
        _sample(5, 'A', 1600, 'dp', 'greedy'),
        _sample(5, 'B', 1700, 'graphs', 'implementation'),
        _sample(6, 'A', 1650, 'math', 'dp'),
    ),
    Tier.CANDIDATE_MASTER: (
        _sample(7, 'A', 1900, 'graphs', 'dp'),
        _sample(7, 'B', 2000, 'trees', 'implementation'),
        _sample(8, 'A', 1950, 'math', 'graphs'),
    ),
    Tier.MASTER: (
        _sample(9, 'A', 2100, 'advanced', 'dp'),
        _sample(9, 'B', 2200, 'graphs', 'advanced'),
        _sample(10, 'A', 2150, 'math', 'advanced'),
    ),
}


def matches_weak_tags(candidate: CandidateProblem, weak_tags: Iterable[str]) -> bool:
    """True when the candidate shares at least one tag with ``weak_tags``."""
    return not set(candidate.tags).isdisjoint(weak_tags)


class ProblemRecommender:
    """Filters candidate problems by overlap with weak tags."""

    def recommend(
        self,
        pool: Iterable[CandidateProblem],
        weak_tags: Iterable[str],
        limit: int = DEFAULT_LIMIT,
    ) -> list[RecommendedProblem]:
        """Pool-filtered recommendations.

        Keeps candidates with at least one weak tag, in pool order, up to
        ``limit``. An empty ``weak_tags`` can never intersect, so it yields
        an empty list.
        """
        weak = frozenset(weak_tags)
        recommendations = []
        if limit <= 0 or not weak:
            return recommendations
        for candidate in pool:
            if matches_weak_tags(candidate, weak):
                recommendations.append(RecommendedProblem.from_candidate(candidate))
                if len(recommendations) >= limit:
                    break
        return recommendations

    def recommend_fallback(
        self,
        tier: Tier,
        weak_tags: Iterable[str],
        limit: int = FALLBACK_LIMIT,
    ) -> list[RecommendedProblem]:
        """Recommendations from the fixed sample list of ``tier``.

        With weak tags the samples are filtered like the pool; without any,
        the first ``limit`` samples are returned as-is.
        """
        samples = FALLBACK_PROBLEMS.get(tier, ())
        weak = frozenset(weak_tags)
        if weak:
            selected = [p for p in samples if matches_weak_tags(p, weak)]
        else:
            selected = list(samples)
        logger.debug(
            "Fallback recommendations for %s: %d of %d samples selected",
            tier.name, len(selected), len(samples),
        )
        return [RecommendedProblem.from_candidate(p) for p in selected[:max(limit, 0)]]
