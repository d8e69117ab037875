from __future__ import annotations

import os
from dataclasses import dataclass, field

from sitecheck.exceptions import ConfigurationError


DEFAULT_TIMEOUT_SECONDS = 5
DEFAULT_RETRIES = 0
DEFAULT_OUTPUT_PATH = "status.json"


def default_workers() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class CheckSettings:
    """Validated knobs for a single check run."""

    workers: int = field(default_factory=default_workers)
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    retries: int = DEFAULT_RETRIES
    output_path: str = DEFAULT_OUTPUT_PATH

    def __post_init__(self):
        _require_int("workers", self.workers, minimum=1)
        _require_int("timeout", self.timeout_seconds, minimum=1)
        _require_int("retries", self.retries, minimum=0)
        if not self.output_path or not str(self.output_path).strip():
            raise ConfigurationError("output path must not be empty")


def _require_int(name: str, value, *, minimum: int) -> None:
    # bool is an int subclass; `workers: true` in YAML is still a mistake.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"invalid --{name} value: {value!r}")
    if value < minimum:
        raise ConfigurationError(f"--{name} must be >= {minimum}, got {value}")
