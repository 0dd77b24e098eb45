from __future__ import annotations

from app.analysis.common import CandidateProblem
from app.extensions import db


def split_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag column into trimmed, non-empty tags."""
    if not raw:
        return []
    return [t.strip() for t in raw.split(',') if t.strip()]


def join_tags(tags) -> str:
    return ','.join(t.strip() for t in tags if t and t.strip())


class Problem(db.Model):
    """A cached practice problem bucketed by the tier it suits."""

    __tablename__ = 'local_problems'
    __table_args__ = (
        db.UniqueConstraint(
            'contest_id', 'index', 'skill_level',
            name='uq_local_problem_contest_index_level',
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    contest_id = db.Column(db.Integer, nullable=False)
    problem_index = db.Column('index', db.String(10), nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    tags = db.Column(db.Text, nullable=False, default='')  # comma separated
    skill_level = db.Column(db.String(30), nullable=False, index=True)

    @property
    def tag_list(self) -> list[str]:
        return split_tags(self.tags)

    def to_candidate(self) -> CandidateProblem:
        return CandidateProblem(
            contest_id=self.contest_id,
            index=self.problem_index,
            rating=self.rating,
            tags=tuple(self.tag_list),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'contest_id': self.contest_id,
            'index': self.problem_index,
            'rating': self.rating,
            'tags': self.tag_list,
            'skill_level': self.skill_level,
        }

    def __repr__(self) -> str:
        return f'<Problem {self.contest_id}{self.problem_index} level={self.skill_level!r}>'
