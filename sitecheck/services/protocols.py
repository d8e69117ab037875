"""Protocol (interface) definitions for services."""

from typing import Protocol

from sitecheck.domain.check_outcome import CheckOutcome
from sitecheck.domain.http_response import HttpResponse


class Fetcher(Protocol):
    """Fetch a URL once and return the HTTP response.

    Implementations raise HttpFetchError for transport failures.
    """

    def fetch(self, url: str) -> HttpResponse: ...


class Checker(Protocol):
    """Produce exactly one outcome for a URL, never raising for unreachable hosts."""

    def check(self, url: str) -> CheckOutcome: ...
