import logging
import queue
from typing import Iterable

logger = logging.getLogger(__name__)

# Put once per consumer after the last job; a worker that dequeues it exits.
CLOSED = object()


class Dispatcher:
    """Feeds jobs into the shared queue, then closes it for every consumer."""

    def dispatch(self, jobs: Iterable[str], job_queue: queue.Queue, consumers: int) -> int:
        count = 0
        for url in jobs:
            job_queue.put(url)
            count += 1
        for _ in range(consumers):
            job_queue.put(CLOSED)
        logger.debug("Dispatched %d jobs to %d consumers", count, consumers)
        return count
