"""
Dataclass for tracking fetch session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class FetchStats:
    """Tracks the outcome of one fetch run."""

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    bytes_written: int = 0
    failed_packages: list[str] = field(default_factory=list)
    _start_time: float = field(default_factory=time.monotonic, repr=False)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed + self.skipped

    @property
    def duration_s(self) -> float:
        return time.monotonic() - self._start_time

    def record_success(self, size: int) -> None:
        self.succeeded += 1
        self.bytes_written += size

    def record_failure(self, name: str) -> None:
        self.failed += 1
        self.failed_packages.append(name)

    def record_skip(self) -> None:
        self.skipped += 1
