"""
HTTP GET Unsubscribe Executor

Requests an unsubscribe URL, following redirects, within one overall
time budget.
"""

import time
from typing import Optional
from urllib.parse import urljoin

import requests
from requests.models import REDIRECT_STATI

from src.config import Config
from .base_executor import BaseUnsubscribeExecutor
from .types import ExecutionResult, ERROR_TRANSPORT


class HttpUnsubscribeExecutor(BaseUnsubscribeExecutor):
    """Execute unsubscribe requests via HTTP GET."""

    max_redirects = 10

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        """
        Initialize HTTP GET executor.

        Args:
            timeout: Budget in seconds for the whole request, redirects included (default 5)
            user_agent: User-Agent header for requests
        """
        super().__init__()
        self.timeout = timeout or Config.UNSUBSCRIBE_HTTP_TIMEOUT
        self.user_agent = user_agent or Config.USER_AGENT

    @property
    def method_name(self) -> str:
        return 'http_get'

    def _timed_out(self) -> ExecutionResult:
        return ExecutionResult.failure(
            ERROR_TRANSPORT, f'Request timed out after {self.timeout} seconds'
        )

    def _perform_execution(self, target: str) -> ExecutionResult:
        deadline = time.monotonic() + self.timeout
        url = target

        for _ in range(self.max_redirects + 1):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return self._timed_out()

            # Each hop only gets what is left of the budget; requests applies it
            # to connecting and to every socket read.
            try:
                response = requests.get(
                    url,
                    headers={'User-Agent': self.user_agent},
                    timeout=remaining,
                    allow_redirects=False
                )
            except requests.exceptions.Timeout:
                return self._timed_out()
            except requests.exceptions.RequestException as e:
                return ExecutionResult.failure(ERROR_TRANSPORT, f'Connection error: {str(e)}')

            if response.status_code in REDIRECT_STATI and 'location' in response.headers:
                url = urljoin(url, response.headers['location'])
                continue

            # Consider 2xx status codes as success
            if not 200 <= response.status_code < 300:
                return ExecutionResult.failure(
                    ERROR_TRANSPORT,
                    f'Unexpected status {response.status_code}',
                    status_code=response.status_code
                )
            return ExecutionResult.ok(status_code=response.status_code)

        return ExecutionResult.failure(ERROR_TRANSPORT, f'More than {self.max_redirects} redirects')
