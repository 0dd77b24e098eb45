"""
Weak area detection.

Counts accepted solves per tag for problems rated above the user's tier
floor and compares each count against what a user of that tier is expected
to have solved. Tags that fall short are reported with the shortfall as a
percentage of the expectation, largest shortfall first.
"""
from __future__ import annotations

import logging
from typing import Iterable

from .common import SubmissionRecord, WeakArea, is_accepted
from .skill import Tier

logger = logging.getLogger(__name__)

# Expected solved count per tag, by tier. The same value applies to every
# tag of a tier; there is no per-tag baseline yet.
TIER_EXPECTED_COUNTS = {
    Tier.BEGINNER: 5,
    Tier.PUPIL: 8,
    Tier.SPECIALIST: 12,
    Tier.EXPERT: 15,
    Tier.CANDIDATE_MASTER: 20,
    Tier.MASTER: 25,
}


def expected_count_for_tier(tag: str, tier: Tier) -> int:
    """Return how many solves of ``tag`` a user in ``tier`` should have.

    ``tag`` is accepted for signature stability but does not affect the
    result.
    """
    return TIER_EXPECTED_COUNTS.get(tier, 0)


def shortfall_percentage(expected: int, actual: int) -> int:
    """Integer percentage of ``expected`` still missing, truncated toward zero."""
    if expected == 0:
        return 0
    numerator = (expected - actual) * 100
    quotient = abs(numerator) // abs(expected)
    return quotient if (numerator >= 0) == (expected > 0) else -quotient


class WeakAreaAnalyzer:
    """Ranks a user's under-practised tags relative to their tier.

    Args:
        expected_counts: Optional override of the per-tier expectation table.
    """

    def __init__(self, expected_counts: dict[Tier, int] | None = None):
        self.expected_counts = dict(expected_counts or TIER_EXPECTED_COUNTS)

    def analyze(self, submissions: Iterable[SubmissionRecord], tier: Tier) -> list[WeakArea]:
        """Compute weak areas for ``submissions`` at ``tier``.

        Returns:
            WeakArea list sorted by percentage descending. Tags tied on
            percentage keep the order in which they were first seen.
        """
        tag_counts = self.count_qualifying_tags(submissions, tier)

        weak_areas = []
        for tag, count in tag_counts.items():
            expected = self._expected_count(tag, tier)
            percentage = shortfall_percentage(expected, count)
            if percentage > 0:
                weak_areas.append(WeakArea(
                    tag=tag,
                    percentage=percentage,
                    expected_count=expected,
                    actual_count=count,
                ))

        # list.sort is stable, so ties stay in encounter order.
        weak_areas.sort(key=lambda w: w.percentage, reverse=True)
        logger.debug(
            "Weak area analysis at %s: %d tags counted, %d weak",
            tier.name, len(tag_counts), len(weak_areas),
        )
        return weak_areas

    @staticmethod
    def count_qualifying_tags(submissions: Iterable[SubmissionRecord], tier: Tier) -> dict[str, int]:
        """Count accepted solves per tag for problems rated above the tier floor."""
        tag_counts: dict[str, int] = {}
        for submission in submissions:
            if not is_accepted(submission.verdict):
                continue
            rating = submission.problem_rating
            if rating is None or rating <= tier.min_rating:
                continue
            # Tags form a set per problem; repeats count once.
            for tag in dict.fromkeys(submission.problem_tags):
                tag_counts[tag] = tag_counts.get(tag, 0) + 1
        return tag_counts

    def _expected_count(self, tag: str, tier: Tier) -> int:
        # Keyed by tier only, like expected_count_for_tier.
        return self.expected_counts.get(tier, 0)


def analyze(submissions: Iterable[SubmissionRecord], tier: Tier) -> list[WeakArea]:
    """Module-level shortcut for ``WeakAreaAnalyzer().analyze``."""
    return WeakAreaAnalyzer().analyze(submissions, tier)
