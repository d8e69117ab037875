import logging
import queue
import threading
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from sitecheck.domain.check_outcome import CheckOutcome, Failure, Success
from sitecheck.exceptions import ConfigurationError
from sitecheck.services.dispatcher import CLOSED, Dispatcher
from sitecheck.services.protocols import Checker
from sitecheck.services.result_aggregator import ResultAggregator

logger = logging.getLogger(__name__)


class WorkerPool:
    """Runs checks for a list of URLs on a fixed number of threads.

    `run` owns the whole concurrent phase: it starts the workers, feeds the
    queue, joins every thread and only then hands back the sealed results.
    """

    def __init__(self, checker: Checker, workers: int, dispatcher: Optional[Dispatcher] = None):
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ConfigurationError(f"workers must be a positive integer, got {workers!r}")
        self.checker = checker
        self.workers = workers
        self.dispatcher = dispatcher or Dispatcher()

    def run(self, jobs: Sequence[str]) -> Tuple[CheckOutcome, ...]:
        jobs = list(jobs)
        if not jobs:
            raise ConfigurationError("No URLs provided. Use --file or provide URLs as arguments.")

        job_queue: queue.Queue = queue.Queue()
        aggregator = ResultAggregator()
        threads: List[threading.Thread] = []
        try:
            for worker_id in range(self.workers):
                t = threading.Thread(
                    target=self._work,
                    args=(worker_id, job_queue, aggregator),
                    name=f"sitecheck-worker-{worker_id}",
                )
                t.start()
                threads.append(t)
        except BaseException:
            logger.error("Failed to start worker %d of %d", len(threads), self.workers)
            self._stop(threads, job_queue)
            raise

        self.dispatcher.dispatch(jobs, job_queue, consumers=len(threads))

        for t in threads:
            t.join()

        results = aggregator.seal()
        logger.info("All checks complete: %d results", len(results))
        return results

    def _stop(self, threads: List[threading.Thread], job_queue: queue.Queue) -> None:
        for _ in threads:
            job_queue.put(CLOSED)
        for t in threads:
            t.join()

    def _work(self, worker_id: int, job_queue: queue.Queue, aggregator: ResultAggregator) -> None:
        while True:
            url = job_queue.get()
            if url is CLOSED:
                break
            outcome = self._check_one(worker_id, url)
            self._log_progress(worker_id, outcome)
            aggregator.append(outcome)
        logger.debug("[worker %d] exiting", worker_id)

    def _check_one(self, worker_id: int, url: str) -> CheckOutcome:
        try:
            return self.checker.check(url)
        except Exception as e:
            # A bug in one check must not lose the job or kill the worker.
            logger.error("[worker %d] unexpected error checking %s: %s", worker_id, url, e, exc_info=True)
            return CheckOutcome(
                url=url,
                status=Failure(f"unexpected error: {e}"),
                elapsed=0.0,
                observed_at=datetime.now(timezone.utc),
            )

    def _log_progress(self, worker_id: int, outcome: CheckOutcome) -> None:
        if isinstance(outcome.status, Success):
            logger.info(
                "[worker %d] %s -> HTTP %d (%d ms)",
                worker_id,
                outcome.url,
                outcome.status.code,
                outcome.response_time_ms,
            )
        else:
            logger.info(
                "[worker %d] %s -> error: %s (%d ms)",
                worker_id,
                outcome.url,
                outcome.status.message,
                outcome.response_time_ms,
            )
