import requests
from typing import Callable

from sitecheck.domain.http_response import HttpResponse
from sitecheck.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for a single status check.

    Requires http_client callable for dependency injection so tests can
    substitute it without patching. The callable is shared by every worker
    and must not keep per-call state (``requests.get`` does not).
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 5):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """GET the URL once and return its status code.

        Any HTTP status is a response. The body is never read: the check is
        done once the status line and headers arrive. Transport failures
        raise HttpFetchError.
        """
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        try:
            return HttpResponse(resp.status_code)
        finally:
            resp.close()
