"""Shared test fixtures for the practice coach test suite."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from app import create_app
from app.analysis.common import SubmissionRecord
from app.clients.codeforces import CodeforcesClient
from app.clients.common import RatingChange, UserInfo
from app.extensions import db as _db
from app.models import Problem, Submission, User


@pytest.fixture()
def app():
    """Create a Flask application configured for testing."""
    application = create_app('testing')
    yield application


@pytest.fixture()
def db(app):
    """Provide a clean database for each test."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def client(app, db):
    """Provide a Flask test client."""
    return app.test_client()


def make_submission(tags, rating=1700, verdict='OK', contest_id=1, index='A', submission_id=None):
    return SubmissionRecord(
        problem_tags=tuple(tags),
        problem_rating=rating,
        verdict=verdict,
        contest_id=contest_id,
        index=index,
        submission_id=submission_id,
    )


def make_rating_history(*ratings):
    return [
        RatingChange(
            contest_id=1000 + i,
            contest_name=f'Round {i}',
            handle='tourist',
            rank=100,
            rating_update_time_seconds=1_700_000_000 + i,
            old_rating=0,
            new_rating=r,
        )
        for i, r in enumerate(ratings)
    ]


@pytest.fixture()
def cf_client():
    """A CodeforcesClient double for an Expert-level user (max rating 1750)."""
    mock = MagicMock(spec=CodeforcesClient)
    mock.get_user_info.return_value = UserInfo(
        handle='tourist',
        max_rating=1750,
        max_rank='expert',
        title_photo='https://userpic.codeforces.org/no-title.jpg',
        rating=1700,
        rank='expert',
    )
    mock.get_user_rating.return_value = make_rating_history(1500, 1750, 1680)
    mock.get_user_status.return_value = [
        make_submission(['dp', 'greedy'], submission_id=1),
        make_submission(['dp'], submission_id=2),
        make_submission(['dp'], submission_id=3),
        make_submission(['graphs'], verdict='WRONG_ANSWER', submission_id=4),
        make_submission(['math'], rating=1500, submission_id=5),
    ]
    return mock


@pytest.fixture()
def sample_data(app, db):
    """Seed the problem pool plus one cached user with a few submissions.

    Returns plain values so they survive across request context boundaries.
    """
    from app.services.codeforces_service import CodeforcesService

    seeded = CodeforcesService.seed_sample_problems()

    user = User(handle='tourist', max_rating=1750)
    db.session.add(user)

    now = datetime.utcnow()
    db.session.add_all([
        Submission(
            id=101, handle='tourist', contest_id=5, problem_index='A',
            rating=1600, tags='dp,greedy', verdict='OK', submission_time=now,
        ),
        Submission(
            id=102, handle='tourist', contest_id=5, problem_index='B',
            rating=1700, tags='graphs,implementation', verdict='WRONG_ANSWER',
            submission_time=now,
        ),
    ])
    db.session.commit()

    return {
        'handle': 'tourist',
        'seeded': seeded,
        'problem_ids': [p.id for p in Problem.query.order_by(Problem.id).all()],
        'submission_ids': [101, 102],
    }
