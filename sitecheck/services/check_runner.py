import logging
from typing import NamedTuple, Sequence, Tuple

from sitecheck.domain.check_outcome import CheckOutcome
from sitecheck.services.report_serializer import ReportSerializer
from sitecheck.services.worker_pool import WorkerPool

logger = logging.getLogger(__name__)


class RunReport(NamedTuple):
    """Result of a check run."""
    results: Tuple[CheckOutcome, ...]
    output_path: str

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded


class CheckRunner:
    """Executes a run given configured collaborators.

    Runs every job through the worker pool, then writes the report. Does
    not construct dependencies (that stays in the DI layer) and never exits
    the process: configuration and write errors propagate to the caller.
    """

    def __init__(self, *, worker_pool: WorkerPool, serializer: ReportSerializer):
        self.worker_pool = worker_pool
        self.serializer = serializer

    def run(self, jobs: Sequence[str], output_path: str) -> RunReport:
        logger.info("Starting %d checks with %d workers", len(jobs), self.worker_pool.workers)
        results = self.worker_pool.run(jobs)
        self.serializer.write(results, output_path)
        report = RunReport(results=results, output_path=str(output_path))
        logger.info("Run finished: %d succeeded, %d failed", report.succeeded, report.failed)
        return report
