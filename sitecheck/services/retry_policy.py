import logging
import time
from datetime import datetime, timezone
from typing import Callable

from sitecheck.domain.check_outcome import CheckOutcome, Failure, Success
from sitecheck.exceptions import ConfigurationError, HttpFetchError
from sitecheck.services.protocols import Fetcher

logger = logging.getLogger(__name__)

DEFAULT_RETRY_DELAY_SECONDS = 0.1


class RetryPolicy:
    """Bounded re-attempts around a single URL check.

    Makes up to ``retries + 1`` sequential attempts. Any HTTP response ends
    the check as a Success, whatever its status code. Transport errors are
    retried after a fixed delay (no backoff, no jitter); only the last error
    message survives into the Failure.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        retries: int = 0,
        delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        if isinstance(retries, bool) or not isinstance(retries, int) or retries < 0:
            raise ConfigurationError(f"retries must be a non-negative integer, got {retries!r}")
        if delay_seconds < 0:
            raise ConfigurationError(f"retry delay must be non-negative, got {delay_seconds!r}")
        self.fetcher = fetcher
        self.retries = retries
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self._clock = clock
        self._now = now

    @property
    def max_attempts(self) -> int:
        return self.retries + 1

    def check(self, url: str) -> CheckOutcome:
        observed_at = self._now()
        started = self._clock()
        last_error = ""

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self.fetcher.fetch(url)
            except HttpFetchError as e:
                last_error = str(e)
                logger.debug("Attempt %d/%d failed for %s: %s", attempt, self.max_attempts, url, e)
                if attempt < self.max_attempts:
                    self._sleep(self.delay_seconds)
                continue
            return CheckOutcome(
                url=url,
                status=Success(int(response.status_code)),
                elapsed=self._clock() - started,
                observed_at=observed_at,
            )

        if self.retries:
            logger.warning("Giving up on %s after %d attempts", url, self.max_attempts)
        return CheckOutcome(
            url=url,
            status=Failure(last_error),
            elapsed=self._clock() - started,
            observed_at=observed_at,
        )
