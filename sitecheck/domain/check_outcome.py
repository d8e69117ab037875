"""Check outcome data model."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Success:
    """The server answered; any status code counts, 4xx and 5xx included."""

    code: int

    def __post_init__(self):
        if not 100 <= int(self.code) <= 599:
            raise ValueError(f"HTTP status code out of range: {self.code!r}")


@dataclass(frozen=True)
class Failure:
    """No HTTP response was obtained; `message` is the last attempt's error."""

    message: str


CheckStatus = Union[Success, Failure]


@dataclass(frozen=True)
class CheckOutcome:
    url: str
    status: CheckStatus
    elapsed: float
    """Seconds from the start of the first attempt to the end of the last one"""

    observed_at: datetime
    """Wall-clock time captured when the first attempt started"""

    def __post_init__(self):
        if self.elapsed < 0:
            raise ValueError("elapsed must be non-negative")

    @property
    def succeeded(self) -> bool:
        return isinstance(self.status, Success)

    @property
    def response_time_ms(self) -> int:
        return int(self.elapsed * 1000)
