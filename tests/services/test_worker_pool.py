import threading
from collections import Counter
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from sitecheck.domain.check_outcome import CheckOutcome, Failure, Success
from sitecheck.domain.http_response import HttpResponse
from sitecheck.exceptions import ConfigurationError, HttpFetchError
from sitecheck.services.dispatcher import Dispatcher
from sitecheck.services.retry_policy import RetryPolicy
from sitecheck.services.worker_pool import WorkerPool


class RecordingChecker:
    """Answers every URL with a status derived from it and records thread names."""

    def __init__(self, delay: float = 0.0):
        self._lock = threading.Lock()
        self.delay = delay
        self.calls = []
        self.threads = set()

    def check(self, url: str) -> CheckOutcome:
        with self._lock:
            self.calls.append(url)
            self.threads.add(threading.current_thread().name)
        if self.delay:
            threading.Event().wait(self.delay)
        status = Failure("unreachable") if "down" in url else Success(200)
        return CheckOutcome(url=url, status=status, elapsed=0.0, observed_at=datetime.now(timezone.utc))


class FlakyFetcher:
    """Fails for hosts containing 'down'; 500 for 'broken'; 200 otherwise."""

    def fetch(self, url: str) -> HttpResponse:
        if "down" in url:
            raise HttpFetchError(url, OSError("connection refused"))
        if "broken" in url:
            return HttpResponse(500)
        return HttpResponse(200)


def _live_workers():
    return [t.name for t in threading.enumerate() if t.name.startswith("sitecheck-worker-")]


JOBS = [f"https://site{i}.test" for i in range(20)] + [
    "https://down.test",
    "https://broken.test",
    "https://site1.test",
]


def test_every_job_yields_exactly_one_outcome():
    checker = RecordingChecker()
    results = WorkerPool(checker, workers=4).run(JOBS)

    assert len(results) == len(JOBS)
    assert Counter(r.url for r in results) == Counter(JOBS)
    assert sorted(checker.calls) == sorted(JOBS)


def test_duplicates_are_checked_independently():
    checker = RecordingChecker()
    results = WorkerPool(checker, workers=2).run(["https://a.test", "https://a.test"])

    assert [r.url for r in results] == ["https://a.test", "https://a.test"]
    assert len(checker.calls) == 2


def test_worker_count_does_not_change_outcomes():
    def run(workers):
        policy = RetryPolicy(FlakyFetcher(), retries=1, sleep=lambda _: None)
        results = WorkerPool(policy, workers=workers).run(JOBS)
        return Counter((r.url, r.status) for r in results)

    assert run(1) == run(8)


def test_work_is_spread_across_workers():
    checker = RecordingChecker(delay=0.05)
    WorkerPool(checker, workers=4).run([f"https://s{i}.test" for i in range(8)])

    assert len(checker.threads) > 1
    assert all(name.startswith("sitecheck-worker-") for name in checker.threads)


def test_more_workers_than_jobs_still_drains():
    checker = RecordingChecker()
    results = WorkerPool(checker, workers=16).run(["https://only.test"])

    assert len(results) == 1
    assert _live_workers() == []


def test_empty_jobs_raise_before_any_worker_starts(monkeypatch):
    started = Mock()
    monkeypatch.setattr(threading.Thread, "start", started)

    with pytest.raises(ConfigurationError):
        WorkerPool(RecordingChecker(), workers=4).run([])
    started.assert_not_called()


def test_failed_thread_start_stops_started_workers(monkeypatch):
    original_start = threading.Thread.start
    calls = []

    def start(self):
        calls.append(self.name)
        if len(calls) == 3:
            raise RuntimeError("can't start new thread")
        original_start(self)

    monkeypatch.setattr(threading.Thread, "start", start)
    checker = RecordingChecker()

    with pytest.raises(RuntimeError, match="can't start new thread"):
        WorkerPool(checker, workers=4).run(["https://a.test"])

    assert _live_workers() == []
    assert checker.calls == []


def test_unexpected_check_error_becomes_failure(caplog):
    checker = Mock()
    checker.check.side_effect = RuntimeError("boom")

    results = WorkerPool(checker, workers=2).run(["https://a.test", "https://b.test"])

    assert len(results) == 2
    assert all(isinstance(r.status, Failure) for r in results)
    assert all("boom" in r.status.message for r in results)
    assert "unexpected error checking" in caplog.text


def test_progress_is_logged_per_check(caplog):
    caplog.set_level("INFO", logger="sitecheck.services.worker_pool")
    WorkerPool(RecordingChecker(), workers=1).run(["https://ok.test", "https://down.test"])

    assert "https://ok.test -> HTTP 200" in caplog.text
    assert "https://down.test -> error: unreachable" in caplog.text


def test_uses_injected_dispatcher():
    dispatcher = Mock(wraps=Dispatcher())
    WorkerPool(RecordingChecker(), workers=3, dispatcher=dispatcher).run(["https://a.test"])

    dispatcher.dispatch.assert_called_once()
    assert dispatcher.dispatch.call_args.kwargs["consumers"] == 3


@pytest.mark.parametrize("workers", [0, -2, 1.5, True])
def test_rejects_invalid_worker_count(workers):
    with pytest.raises(ConfigurationError):
        WorkerPool(RecordingChecker(), workers=workers)
