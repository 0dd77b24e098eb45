from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.analysis.common import CandidateProblem, RecommendedProblem, SubmissionRecord, WeakArea
from app.analysis.recommender import FALLBACK_PROBLEMS, ProblemRecommender
from app.analysis.skill import Tier, classify
from app.analysis.weakness import WeakAreaAnalyzer
from app.clients import get_client_instance
from app.clients.codeforces import CodeforcesAPIError, CodeforcesClient
from app.extensions import db
from app.models import Problem, Submission, User
from app.models.problem import join_tags

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """A data-fetching failure the caller should show as an error state."""


@dataclass
class UserProfile:
    handle: str
    max_rating: int
    max_rank: str
    current_rating: int
    target_rating: int
    photo_url: str
    tier: Tier

    def to_dict(self) -> dict:
        return {
            'handle': self.handle,
            'max_rating': self.max_rating,
            'max_rank': self.max_rank,
            'current_rating': self.current_rating,
            'target_rating': self.target_rating,
            'photo_url': self.photo_url,
            'tier': self.tier.name,
            'tier_display_name': self.tier.display_name,
        }


class CodeforcesService:
    """Fetches Codeforces data, keeps the local cache and feeds the analysis core.

    Args:
        client: Optional API client. Defaults to the app's shared client, built
            from the app config on first use.
    """

    def __init__(self, client: CodeforcesClient | None = None):
        self.client = client or _default_client()
        self.analyzer = WeakAreaAnalyzer()
        self.recommender = ProblemRecommender()

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    def get_user_profile(self, handle: str) -> UserProfile:
        """Fetch ``handle``'s profile and remember it in the local cache."""
        try:
            info = self.client.get_user_info(handle)
        except CodeforcesAPIError as e:
            logger.warning(f"Failed to fetch user info for {handle}: {e}")
            raise ServiceError(f"Failed to fetch user info: {e}") from e

        tier = classify(info.max_rating)
        profile = UserProfile(
            handle=info.handle or handle,
            max_rating=info.max_rating,
            max_rank=info.max_rank,
            current_rating=tier.min_rating,
            target_rating=tier.target_rating,
            photo_url=info.title_photo,
            tier=tier,
        )
        self._remember_user(profile.handle, profile.max_rating)
        return profile

    def get_weak_areas(self, handle: str) -> list[WeakArea]:
        """Weak areas of ``handle`` at the tier of their best contest rating."""
        try:
            rating_history = self.client.get_user_rating(handle)
            submissions = self.client.get_user_status(
                handle, count=current_app.config.get('SUBMISSION_FETCH_COUNT', 1000),
            )
        except CodeforcesAPIError as e:
            logger.warning(f"Failed to fetch user data for {handle}: {e}")
            raise ServiceError(f"Failed to fetch user data: {e}") from e

        best_rating = max((c.new_rating for c in rating_history), default=0)
        tier = classify(best_rating)
        weak_areas = self.analyzer.analyze(submissions, tier)
        logger.info(
            f"Weak areas for {handle} at {tier.name}: "
            f"{[w.tag for w in weak_areas]}"
        )
        return weak_areas

    def get_recommended_problems(self, handle: str, weak_tags: Iterable[str]) -> list[RecommendedProblem]:
        """Recommend problems for ``handle`` from the cached pool of their tier.

        Falls back to the fixed sample list when the pool is empty or cannot
        be read.
        """
        try:
            info = self.client.get_user_info(handle)
        except CodeforcesAPIError as e:
            logger.warning(f"Failed to fetch user info for {handle}: {e}")
            raise ServiceError(f"Failed to fetch user info: {e}") from e

        tier = classify(info.max_rating)
        weak_tags = list(weak_tags)

        try:
            pool = [p.to_candidate() for p in self.get_local_problems(tier.skill_level)]
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to read problem pool for {tier.skill_level}: {e}")
            pool = []

        if pool:
            return self.recommender.recommend(
                pool, weak_tags,
                limit=current_app.config.get('RECOMMENDATION_LIMIT', 10),
            )
        logger.info(f"Problem pool for {tier.skill_level} is empty, using fallback list")
        return self.recommender.recommend_fallback(
            tier, weak_tags,
            limit=current_app.config.get('FALLBACK_LIMIT', 3),
        )

    def refresh_submissions(self, handle: str) -> int:
        """Pull ``handle``'s submissions into the local cache. Returns rows written."""
        try:
            records = self.client.get_user_status(
                handle, count=current_app.config.get('SUBMISSION_FETCH_COUNT', 1000),
            )
        except CodeforcesAPIError as e:
            raise ServiceError(f"Failed to fetch submissions: {e}") from e
        return self.save_submissions(handle, records)

    # ------------------------------------------------------------------
    # Local cache
    # ------------------------------------------------------------------

    @staticmethod
    def get_local_problems(skill_level: str) -> list[Problem]:
        return (
            Problem.query.filter_by(skill_level=skill_level)
            .order_by(Problem.id)
            .all()
        )

    @staticmethod
    def save_problems(problems: Iterable[CandidateProblem], skill_level: str) -> int:
        """Insert or replace problems of ``skill_level``. Returns rows written."""
        count = 0
        for candidate in problems:
            problem = Problem.query.filter_by(
                contest_id=candidate.contest_id,
                problem_index=candidate.index,
                skill_level=skill_level,
            ).first()
            if problem is None:
                problem = Problem(
                    contest_id=candidate.contest_id,
                    problem_index=candidate.index,
                    skill_level=skill_level,
                )
                db.session.add(problem)
            problem.rating = candidate.rating
            problem.tags = join_tags(candidate.tags)
            count += 1
        _commit(f"problems for {skill_level}")
        return count

    @staticmethod
    def save_submissions(handle: str, records: Iterable[SubmissionRecord]) -> int:
        """Insert or replace cached submissions. Returns rows written.

        Records without an id are skipped; for a repeated id the last record wins.
        """
        latest = {}
        for record in records:
            if record.submission_id is not None:
                latest[record.submission_id] = record
        for record in latest.values():
            db.session.merge(Submission.from_record(handle, record))
        _commit(f"submissions of {handle}")
        return len(latest)

    @staticmethod
    def get_cached_submissions(handle: str) -> list[SubmissionRecord]:
        rows = (
            Submission.query.filter_by(handle=handle)
            .order_by(Submission.submission_time.desc())
            .all()
        )
        return [row.to_record() for row in rows]

    @staticmethod
    def is_problem_solved(contest_id: int, index: str) -> bool:
        """True when any cached submission exists for the problem."""
        return Submission.query.filter_by(
            contest_id=contest_id, problem_index=index,
        ).first() is not None

    @staticmethod
    def seed_sample_problems() -> int:
        """Populate an empty pool with the per-tier sample problems."""
        if Problem.query.first() is not None:
            return 0
        count = 0
        seen = set()
        for tier, samples in FALLBACK_PROBLEMS.items():
            # BEGINNER shares PUPIL's samples; the source pool files them under pupil.
            level = Tier.PUPIL.skill_level if tier is Tier.BEGINNER else tier.skill_level
            for sample in samples:
                key = (sample.contest_id, sample.index, level)
                if key in seen:
                    continue
                seen.add(key)
                db.session.add(Problem(
                    contest_id=sample.contest_id,
                    problem_index=sample.index,
                    rating=sample.rating,
                    tags=join_tags(sample.tags),
                    skill_level=level,
                ))
                count += 1
        db.session.commit()
        logger.info(f"Seeded {count} sample problems")
        return count

    @staticmethod
    def _remember_user(handle: str, max_rating: int) -> None:
        try:
            user = db.session.get(User, handle)
            if user is None:
                user = User(handle=handle)
                db.session.add(user)
            user.max_rating = max_rating
            user.last_updated = datetime.utcnow()
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to cache user {handle}: {e}")


def _commit(what: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to save {what}: {e}")
        raise ServiceError(f"Failed to save {what}: {e}") from e


def _default_client() -> CodeforcesClient:
    # One client per app so requests share a session and its connection pool.
    client = current_app.extensions.get('codeforces_client')
    if client is None:
        client = get_client_instance(
            'codeforces',
            base_url=current_app.config.get('CODEFORCES_API_BASE'),
            rate_limit=current_app.config.get('CODEFORCES_RATE_LIMIT', 2.0),
            timeout=current_app.config.get('CODEFORCES_TIMEOUT', 30),
        )
        current_app.extensions['codeforces_client'] = client
    return client
