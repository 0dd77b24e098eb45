from __future__ import annotations

from dataclasses import dataclass

PROBLEM_URL_TEMPLATE = 'https://codeforces.com/contest/{contest_id}/problem/{index}'

# Verdicts that count as a solve. Codeforces reports "OK".
ACCEPTED_VERDICTS = frozenset({'OK', 'ACCEPTED'})


def is_accepted(verdict: str | None) -> bool:
    if not verdict:
        return False
    return verdict.strip().upper() in ACCEPTED_VERDICTS


def problem_url(contest_id, index: str) -> str:
    return PROBLEM_URL_TEMPLATE.format(contest_id=contest_id, index=index)


@dataclass(frozen=True)
class SubmissionRecord:
    problem_tags: tuple[str, ...] = ()
    problem_rating: int | None = None
    verdict: str = ''
    contest_id: int | None = None
    index: str = ''
    submission_id: int | None = None
    creation_time: int | None = None


@dataclass(frozen=True)
class WeakArea:
    tag: str
    percentage: int
    expected_count: int
    actual_count: int

    def to_dict(self) -> dict:
        return {
            'tag': self.tag,
            'percentage': self.percentage,
            'expected_count': self.expected_count,
            'actual_count': self.actual_count,
        }


@dataclass(frozen=True)
class CandidateProblem:
    contest_id: int
    index: str
    rating: int
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecommendedProblem:
    contest_id: int
    index: str
    rating: int
    tags: tuple[str, ...] = ()
    # Not a ranking signal yet; always 0.0.
    similarity: float = 0.0

    @classmethod
    def from_candidate(cls, candidate: CandidateProblem) -> RecommendedProblem:
        return cls(
            contest_id=candidate.contest_id,
            index=candidate.index,
            rating=candidate.rating,
            tags=tuple(candidate.tags),
        )

    @property
    def url(self) -> str:
        return problem_url(self.contest_id, self.index)

    def to_dict(self) -> dict:
        return {
            'contest_id': self.contest_id,
            'index': self.index,
            'rating': self.rating,
            'tags': list(self.tags),
            'similarity': self.similarity,
            'url': self.url,
        }
