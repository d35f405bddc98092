"""
Dataclasses tracking the state of cache refreshes.
"""

import time
from dataclasses import dataclass
from enum import Enum


class RefreshState(Enum):
    """The two states of the single-flight refresh guard."""

    IDLE = "idle"
    REFRESHING = "refreshing"


@dataclass
class RefreshStatus:
    """Outcome of the most recent cache refresh, for observability."""

    last_attempt_at: float | None = None
    last_success_at: float | None = None
    last_error: str | None = None
    attempts: int = 0
    failures: int = 0

    @property
    def ok(self) -> bool:
        """True unless the most recent attempt failed."""
        return self.last_error is None

    def record_success(self) -> None:
        now = time.time()
        self.attempts += 1
        self.last_attempt_at = now
        self.last_success_at = now
        self.last_error = None

    def record_failure(self, error: Exception) -> None:
        self.attempts += 1
        self.failures += 1
        self.last_attempt_at = time.time()
        self.last_error = f"{type(error).__name__}: {error}"
