from __future__ import annotations

import threading
from typing import List, Tuple

from sitecheck.domain.check_outcome import CheckOutcome


class ResultAggregator:
    """Thread-safe, append-only collection of check outcomes.

    Workers only append. The pool seals the collection once every worker
    has been joined; appending after that is a programming error.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._outcomes: List[CheckOutcome] = []
        self._sealed = False

    def append(self, outcome: CheckOutcome) -> None:
        with self._lock:
            if self._sealed:
                raise RuntimeError("cannot append to a sealed result set")
            self._outcomes.append(outcome)

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)

    def seal(self) -> Tuple[CheckOutcome, ...]:
        """Freeze the collection and return it in append order."""
        with self._lock:
            self._sealed = True
            return tuple(self._outcomes)
