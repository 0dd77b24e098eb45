from __future__ import annotations

from datetime import datetime

from app.analysis.common import SubmissionRecord
from app.extensions import db
from .problem import split_tags


class Submission(db.Model):
    """A Codeforces submission cached for a handle."""

    __tablename__ = 'local_submissions'

    # Codeforces submission id; globally unique on the platform.
    id = db.Column(db.BigInteger, primary_key=True, autoincrement=False)
    handle = db.Column(db.String(64), nullable=False, index=True)
    contest_id = db.Column(db.Integer, nullable=True)
    problem_index = db.Column('index', db.String(10), nullable=False)
    rating = db.Column(db.Integer, nullable=True)
    tags = db.Column(db.Text, nullable=False, default='')
    verdict = db.Column(db.String(40), nullable=False, default='')
    submission_time = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        db.Index('ix_local_submissions_problem', 'contest_id', 'index'),
    )

    @classmethod
    def from_record(cls, handle: str, record: SubmissionRecord) -> Submission:
        submitted_at = (
            datetime.utcfromtimestamp(record.creation_time)
            if record.creation_time is not None else None
        )
        return cls(
            id=record.submission_id,
            handle=handle,
            contest_id=record.contest_id,
            problem_index=record.index,
            rating=record.problem_rating,
            tags=','.join(record.problem_tags),
            verdict=record.verdict,
            submission_time=submitted_at,
        )

    def to_record(self) -> SubmissionRecord:
        return SubmissionRecord(
            problem_tags=tuple(split_tags(self.tags)),
            problem_rating=self.rating,
            verdict=self.verdict,
            contest_id=self.contest_id,
            index=self.problem_index,
            submission_id=self.id,
            creation_time=(
                int((self.submission_time - datetime(1970, 1, 1)).total_seconds())
                if self.submission_time else None
            ),
        )

    def __repr__(self) -> str:
        return (
            f'<Submission {self.id} {self.handle} '
            f'{self.contest_id}{self.problem_index} verdict={self.verdict!r}>'
        )
