from __future__ import annotations

import logging

import requests

from app.analysis.common import SubmissionRecord, problem_url
from .base import APIError, BaseClient
from .common import ContestStandings, RatingChange, UserInfo
from . import register_client

logger = logging.getLogger(__name__)


class CodeforcesAPIError(APIError):
    pass


@register_client
class CodeforcesClient(BaseClient):
    """Thin client for the public Codeforces REST API.

    Every method call returns parsed records; failures of any kind surface as
    :class:`CodeforcesAPIError`.
    """

    PLATFORM_NAME = "codeforces"
    BASE_URL = "https://codeforces.com/api"

    def get_user_info(self, handle: str) -> UserInfo:
        result = self._call('user.info', handles=handle)
        if not result:
            raise CodeforcesAPIError(f"No user info returned for {handle}")
        return UserInfo.from_json(result[0])

    def get_user_rating(self, handle: str) -> list[RatingChange]:
        result = self._call('user.rating', handle=handle)
        return [RatingChange.from_json(item) for item in result or []]

    def get_user_status(self, handle: str, start: int = 1, count: int = 1000) -> list[SubmissionRecord]:
        result = self._call('user.status', handle=handle, **{'from': start, 'count': count})
        return [self.parse_submission(item) for item in result or []]

    def get_contest_standings(self, contest_id: int, handles: str,
                              show_unofficial: bool = True) -> ContestStandings:
        result = self._call(
            'contest.standings',
            contestId=contest_id,
            showUnofficial='true' if show_unofficial else 'false',
            handles=handles,
        )
        return ContestStandings.from_json(result or {})

    def get_problem_url(self, contest_id: int, index: str) -> str:
        return problem_url(contest_id, index)

    @staticmethod
    def parse_submission(data: dict) -> SubmissionRecord:
        problem = data.get('problem') or {}
        return SubmissionRecord(
            problem_tags=tuple(dict.fromkeys(problem.get('tags') or ())),
            problem_rating=problem.get('rating'),
            verdict=data.get('verdict') or '',
            contest_id=problem.get('contestId', data.get('contestId')),
            index=problem.get('index', ''),
            submission_id=data.get('id'),
            creation_time=data.get('creationTimeSeconds'),
        )

    def _call(self, method: str, **params):
        url = f"{self.base_url}/{method}"
        try:
            resp = self._rate_limited_get(url, params=params)
            payload = resp.json()
        except requests.HTTPError as e:
            raise CodeforcesAPIError(
                self._error_comment(e.response) or f"{method} failed: {e}",
                status_code=e.response.status_code if e.response is not None else None,
            ) from e
        except requests.RequestException as e:
            raise CodeforcesAPIError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise CodeforcesAPIError(f"{method} returned malformed JSON") from e

        if not isinstance(payload, dict):
            raise CodeforcesAPIError(f"{method} returned an unexpected payload")
        if payload.get('status') != 'OK':
            comment = payload.get('comment') or f"{method} returned status {payload.get('status')!r}"
            raise CodeforcesAPIError(comment)
        return payload.get('result')

    @staticmethod
    def _error_comment(response) -> str | None:
        # Codeforces answers bad requests with a JSON envelope and HTTP 400.
        if response is None:
            return None
        try:
            return response.json().get('comment')
        except ValueError:
            return None
