"""
Skill tier classification.

Maps a Codeforces rating to one of six fixed tiers. Each tier carries the
rating floor it starts at, the rating the user should aim for next and the
label of that next band.
"""
from __future__ import annotations

from enum import Enum


class Tier(Enum):
    BEGINNER = (0, 1200, 'Pupil')
    PUPIL = (1200, 1400, 'Specialist')
    SPECIALIST = (1400, 1600, 'Expert')
    EXPERT = (1600, 1900, 'Candidate Master')
    CANDIDATE_MASTER = (1900, 2100, 'Master')
    MASTER = (2100, 2500, 'Grandmaster')

    def __init__(self, min_rating: int, target_rating: int, display_name: str):
        self.min_rating = min_rating
        self.target_rating = target_rating
        self.display_name = display_name

    @property
    def skill_level(self) -> str:
        """Lower-case key used to bucket the local problem pool."""
        return self.name.lower()

    @classmethod
    def from_skill_level(cls, skill_level: str) -> Tier | None:
        return cls.__members__.get((skill_level or '').upper())


# Highest threshold first so a rating exactly on a boundary lands in the
# higher tier.
_THRESHOLDS = sorted(Tier, key=lambda t: t.min_rating, reverse=True)


def classify(rating: int) -> Tier:
    """Return the tier for ``rating``. Total over all integers."""
    for tier in _THRESHOLDS:
        if rating >= tier.min_rating:
            return tier
    return Tier.BEGINNER
