"""Tests for the Codeforces API client, client registry and rate limiter."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from app.clients import get_client_class, get_client_instance
from app.clients.codeforces import CodeforcesAPIError, CodeforcesClient
from app.clients.rate_limiter import RateLimiter, get_platform_limiter


def _response(payload, status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f'{status_code} Client Error', response=resp,
        )
    return resp


@pytest.fixture()
def cf():
    return CodeforcesClient(rate_limit=0)


class TestRegistry:
    def test_codeforces_registered(self):
        assert get_client_class('codeforces') is CodeforcesClient

    def test_unknown_platform(self):
        assert get_client_class('atcoder') is None
        with pytest.raises(ValueError, match='Unknown platform'):
            get_client_instance('atcoder')

    def test_instance_kwargs(self):
        instance = get_client_instance('codeforces', base_url='http://cf.test/api/', rate_limit=0)
        assert instance.base_url == 'http://cf.test/api'


class TestCodeforcesClient:
    def test_user_info(self, cf):
        payload = {'status': 'OK', 'result': [{
            'handle': 'tourist', 'maxRating': 3979, 'maxRank': 'legendary grandmaster',
            'titlePhoto': 'https://userpic.codeforces.org/422/title/50a270ed4a722867.jpg',
            'rating': 3800, 'rank': 'legendary grandmaster',
        }]}
        with patch.object(cf.session, 'request', return_value=_response(payload)) as req:
            info = cf.get_user_info('tourist')
        assert info.handle == 'tourist'
        assert info.max_rating == 3979
        assert info.rating == 3800
        args, kwargs = req.call_args
        assert args == ('GET', 'https://codeforces.com/api/user.info')
        assert kwargs['params'] == {'handles': 'tourist'}

    def test_unrated_user_defaults(self, cf):
        payload = {'status': 'OK', 'result': [{'handle': 'newbie'}]}
        with patch.object(cf.session, 'request', return_value=_response(payload)):
            info = cf.get_user_info('newbie')
        assert info.max_rating == 0
        assert info.max_rank == 'unrated'

    def test_user_rating(self, cf):
        payload = {'status': 'OK', 'result': [
            {'contestId': 1, 'contestName': 'Round 1', 'handle': 'x', 'rank': 10,
             'ratingUpdateTimeSeconds': 1, 'oldRating': 0, 'newRating': 1400},
            {'contestId': 2, 'contestName': 'Round 2', 'handle': 'x', 'rank': 5,
             'ratingUpdateTimeSeconds': 2, 'oldRating': 1400, 'newRating': 1550},
        ]}
        with patch.object(cf.session, 'request', return_value=_response(payload)):
            history = cf.get_user_rating('x')
        assert [c.new_rating for c in history] == [1400, 1550]

    def test_user_status(self, cf):
        payload = {'status': 'OK', 'result': [{
            'id': 987654, 'contestId': 1520, 'creationTimeSeconds': 1620000000,
            'problem': {'contestId': 1520, 'index': 'C', 'name': 'Not Adjacent Matrix',
                        'rating': 1000, 'tags': ['constructive algorithms']},
            'verdict': 'OK',
        }, {
            'id': 987655, 'contestId': 1520, 'creationTimeSeconds': 1620000100,
            'problem': {'contestId': 1520, 'index': 'D', 'name': 'Same Differences'},
            'verdict': 'WRONG_ANSWER',
        }]}
        with patch.object(cf.session, 'request', return_value=_response(payload)) as req:
            records = cf.get_user_status('x', count=50)
        assert req.call_args.kwargs['params'] == {'handle': 'x', 'from': 1, 'count': 50}
        assert records[0].problem_tags == ('constructive algorithms',)
        assert records[0].problem_rating == 1000
        assert records[0].submission_id == 987654
        assert records[1].problem_rating is None
        assert records[1].problem_tags == ()

    def test_parse_submission_drops_repeated_tags(self):
        record = CodeforcesClient.parse_submission({
            'id': 9, 'verdict': 'OK',
            'problem': {'contestId': 4, 'index': 'A', 'rating': 800, 'tags': ['math', 'brute force', 'math']},
        })
        assert record.problem_tags == ('math', 'brute force')

    def test_contest_standings(self, cf):
        payload = {'status': 'OK', 'result': {
            'contest': {'id': 566, 'name': 'VK Cup', 'type': 'ICPC', 'phase': 'FINISHED',
                        'frozen': False, 'durationSeconds': 10800},
            'problems': [{'contestId': 566, 'index': 'A', 'name': 'Matching Names', 'tags': ['strings']}],
            'rows': [{
                'party': {'members': [{'handle': 'tourist'}], 'participantType': 'CONTESTANT'},
                'rank': 1, 'points': 7.0, 'penalty': 500,
                'problemResults': [{'points': 1.0, 'rejectedAttemptCount': 0, 'type': 'FINAL',
                                    'bestSubmissionTimeSeconds': 600}],
            }],
        }}
        with patch.object(cf.session, 'request', return_value=_response(payload)) as req:
            standings = cf.get_contest_standings(566, 'tourist')
        assert req.call_args.kwargs['params']['showUnofficial'] == 'true'
        assert standings.contest.name == 'VK Cup'
        assert standings.problems[0].tags == ['strings']
        assert standings.rows[0].handles == ['tourist']
        assert standings.rows[0].problem_results[0].best_submission_time_seconds == 600

    def test_failed_envelope(self, cf):
        payload = {'status': 'FAILED', 'comment': 'handles: User with handle nobody not found'}
        with patch.object(cf.session, 'request', return_value=_response(payload, status_code=400)):
            with pytest.raises(CodeforcesAPIError, match='not found') as exc:
                cf.get_user_info('nobody')
        assert exc.value.status_code == 400

    def test_failed_status_without_http_error(self, cf):
        payload = {'status': 'FAILED', 'comment': 'Call limit exceeded'}
        with patch.object(cf.session, 'request', return_value=_response(payload)):
            with pytest.raises(CodeforcesAPIError, match='Call limit exceeded'):
                cf.get_user_rating('x')

    def test_empty_user_info(self, cf):
        with patch.object(cf.session, 'request', return_value=_response({'status': 'OK', 'result': []})):
            with pytest.raises(CodeforcesAPIError):
                cf.get_user_info('x')

    def test_unexpected_payload(self, cf):
        with patch.object(cf.session, 'request', return_value=_response(['not', 'a', 'dict'])):
            with pytest.raises(CodeforcesAPIError):
                cf.get_user_rating('x')

    def test_retries_then_raises(self, cf):
        with patch.object(cf.session, 'request', side_effect=requests.ConnectionError('down')) as req, \
                patch('app.clients.base.time.sleep') as sleep:
            with pytest.raises(CodeforcesAPIError, match='down'):
                cf.get_user_rating('x')
        assert req.call_count == 3
        assert [c.args[0] for c in sleep.call_args_list] == [1, 2]

    def test_retry_recovers(self, cf):
        ok = _response({'status': 'OK', 'result': []})
        with patch.object(cf.session, 'request', side_effect=[requests.Timeout('slow'), ok]), \
                patch('app.clients.base.time.sleep'):
            assert cf.get_user_rating('x') == []

    def test_problem_url(self, cf):
        assert cf.get_problem_url(4, 'A') == 'https://codeforces.com/contest/4/problem/A'


class TestRateLimiter:
    def test_waits_for_interval(self):
        limiter = RateLimiter(min_interval=1.0)
        limiter._next_slot = 100.8
        with patch('app.clients.rate_limiter.time.monotonic', return_value=100.0), \
                patch('app.clients.rate_limiter.time.sleep') as sleep:
            delay = limiter.wait()
        assert delay == pytest.approx(0.8)
        sleep.assert_called_once()
        assert sleep.call_args.args[0] == pytest.approx(0.8)

    def test_no_wait_when_idle(self):
        limiter = RateLimiter(min_interval=0.5)
        with patch('app.clients.rate_limiter.time.sleep') as sleep:
            assert limiter.wait() == 0
        sleep.assert_not_called()

    def test_back_to_back_calls_are_spaced(self):
        limiter = RateLimiter(min_interval=2.0)
        with patch('app.clients.rate_limiter.time.monotonic', return_value=50.0), \
                patch('app.clients.rate_limiter.time.sleep') as sleep:
            limiter.wait()
            limiter.wait()
            limiter.wait()
        assert [c.args[0] for c in sleep.call_args_list] == [2.0, 4.0]

    def test_negative_interval_is_clamped(self):
        assert RateLimiter(min_interval=-1).min_interval == 0.0

    def test_platform_limiter_is_shared(self):
        first = get_platform_limiter('test-platform', 1.0)
        second = get_platform_limiter('test-platform', 0.25)
        assert first is second
        assert second.min_interval == 0.25
