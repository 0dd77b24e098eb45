from __future__ import annotations

import logging
import time

import requests

from .rate_limiter import get_platform_limiter


class APIError(Exception):
    """Raised when a remote API call fails or returns an error envelope."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class BaseClient:
    PLATFORM_NAME: str = ""
    BASE_URL: str = ""

    def __init__(self, base_url: str = None, rate_limit: float = 2.0,
                 timeout: float = 30, max_retries: int = 3):
        self.base_url = (base_url or self.BASE_URL).rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.rate_limiter = get_platform_limiter(self.PLATFORM_NAME, rate_limit)
        self.logger = logging.getLogger(f'client.{self.PLATFORM_NAME}')
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'User-Agent': 'cf-practice-coach/1.0 (+https://codeforces.com)',
            'Accept': 'application/json',
        })
        return session

    def _request_with_retry(self, url, method='GET', **kwargs):
        for attempt in range(self.max_retries):
            try:
                self.rate_limiter.wait()
                resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
                resp.raise_for_status()
                return resp
            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                # Client errors other than throttling will not succeed on retry.
                if status is not None and 400 <= status < 500 and status != 429:
                    raise
                self.logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)
                else:
                    raise
            except requests.RequestException as e:
                self.logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)
                else:
                    raise

    def _rate_limited_get(self, url, **kwargs):
        return self._request_with_retry(url, method='GET', **kwargs)
