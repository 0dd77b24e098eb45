from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class UserInfo:
    handle: str
    max_rating: int = 0
    max_rank: str = 'unrated'
    title_photo: str = ''
    rating: int | None = None
    rank: str | None = None

    @classmethod
    def from_json(cls, data: dict) -> UserInfo:
        return cls(
            handle=data.get('handle', ''),
            max_rating=int(data.get('maxRating') or 0),
            max_rank=data.get('maxRank') or 'unrated',
            title_photo=data.get('titlePhoto') or '',
            rating=data.get('rating'),
            rank=data.get('rank'),
        )


@dataclass
class RatingChange:
    contest_id: int
    contest_name: str
    handle: str
    rank: int
    rating_update_time_seconds: int
    old_rating: int
    new_rating: int

    @classmethod
    def from_json(cls, data: dict) -> RatingChange:
        return cls(
            contest_id=data.get('contestId', 0),
            contest_name=data.get('contestName', ''),
            handle=data.get('handle', ''),
            rank=data.get('rank', 0),
            rating_update_time_seconds=data.get('ratingUpdateTimeSeconds', 0),
            old_rating=data.get('oldRating', 0),
            new_rating=data.get('newRating', 0),
        )


@dataclass
class ContestInfo:
    id: int
    name: str
    type: str = ''
    phase: str = ''
    frozen: bool = False
    duration_seconds: int = 0
    start_time_seconds: int | None = None
    relative_time_seconds: int | None = None

    @classmethod
    def from_json(cls, data: dict) -> ContestInfo:
        return cls(
            id=data.get('id', 0),
            name=data.get('name', ''),
            type=data.get('type', ''),
            phase=data.get('phase', ''),
            frozen=bool(data.get('frozen', False)),
            duration_seconds=data.get('durationSeconds', 0),
            start_time_seconds=data.get('startTimeSeconds'),
            relative_time_seconds=data.get('relativeTimeSeconds'),
        )


@dataclass
class ContestProblem:
    contest_id: int | None
    index: str
    name: str = ''
    rating: int | None = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> ContestProblem:
        return cls(
            contest_id=data.get('contestId'),
            index=data.get('index', ''),
            name=data.get('name', ''),
            rating=data.get('rating'),
            tags=list(data.get('tags') or []),
        )


@dataclass
class ProblemResult:
    points: float = 0.0
    rejected_attempt_count: int = 0
    type: str = ''
    best_submission_time_seconds: int | None = None

    @classmethod
    def from_json(cls, data: dict) -> ProblemResult:
        return cls(
            points=float(data.get('points', 0.0)),
            rejected_attempt_count=data.get('rejectedAttemptCount', 0),
            type=data.get('type', ''),
            best_submission_time_seconds=data.get('bestSubmissionTimeSeconds'),
        )


@dataclass
class RanklistRow:
    handles: list[str]
    participant_type: str
    rank: int
    points: float
    penalty: int = 0
    successful_hack_count: int = 0
    unsuccessful_hack_count: int = 0
    problem_results: list[ProblemResult] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> RanklistRow:
        party = data.get('party') or {}
        return cls(
            handles=[m.get('handle', '') for m in party.get('members', [])],
            participant_type=party.get('participantType', ''),
            rank=data.get('rank', 0),
            points=float(data.get('points', 0.0)),
            penalty=data.get('penalty', 0),
            successful_hack_count=data.get('successfulHackCount', 0),
            unsuccessful_hack_count=data.get('unsuccessfulHackCount', 0),
            problem_results=[
                ProblemResult.from_json(r) for r in data.get('problemResults', [])
            ],
        )


@dataclass
class ContestStandings:
    contest: ContestInfo
    problems: list[ContestProblem] = field(default_factory=list)
    rows: list[RanklistRow] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> ContestStandings:
        return cls(
            contest=ContestInfo.from_json(data.get('contest') or {}),
            problems=[ContestProblem.from_json(p) for p in data.get('problems', [])],
            rows=[RanklistRow.from_json(r) for r in data.get('rows', [])],
        )
