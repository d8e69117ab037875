import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

from sitecheck.domain.check_outcome import CheckOutcome, Success
from sitecheck.exceptions import SerializationError

logger = logging.getLogger(__name__)


class ReportSerializer:
    """Renders outcomes as the status.json array.

    Each entry has exactly ``url``, ``status``, ``response_time_ms`` and
    ``timestamp``. ``status`` is the bare integer code for a Success and the
    error message for a Failure, with double quotes turned into single quotes.
    Entries keep the order of the given results.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_entry(self, outcome: CheckOutcome) -> Dict[str, Any]:
        if isinstance(outcome.status, Success):
            status: Any = outcome.status.code
        else:
            status = outcome.status.message.replace('"', "'")
        return {
            "url": outcome.url,
            "status": status,
            "response_time_ms": outcome.response_time_ms,
            "timestamp": int(outcome.observed_at.timestamp()),
        }

    def to_entries(self, results: Iterable[CheckOutcome]) -> List[Dict[str, Any]]:
        return [self.to_entry(o) for o in results]

    def render(self, results: Iterable[CheckOutcome]) -> str:
        return json.dumps(self.to_entries(results), indent=self.indent)

    def write(self, results: Sequence[CheckOutcome], path) -> Path:
        target = Path(path)
        text = self.render(results)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise SerializationError(str(target), e, results) from e
        logger.info("Results written to %s", target)
        return target
