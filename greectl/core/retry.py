"""Retry policy for datagram exchanges."""

from __future__ import annotations

from dataclasses import dataclass

from greectl.core.errors import InputValidationError


@dataclass(frozen=True)
class RetryPolicy:
    """How many times a frame is written and how long to pause between writes.

    `try_limit` counts retries, so a frame is written `try_limit + 1` times.
    The default of no backoff matches what the devices have always been sent.
    """

    try_limit: int = 3
    backoff_s: float = 0.0
    max_backoff_s: float = 1.0

    def __post_init__(self) -> None:
        if self.try_limit < 0:
            raise InputValidationError(f"try_limit must be >= 0, got {self.try_limit}")
        if self.backoff_s < 0 or self.max_backoff_s < 0:
            raise InputValidationError("Backoff values must be >= 0")

    @property
    def attempts(self) -> int:
        return self.try_limit + 1

    def delay(self, attempt: int) -> float:
        """Pause before the zero-based `attempt`."""
        if attempt <= 0 or self.backoff_s == 0:
            return 0.0
        return min(self.backoff_s * 2 ** (attempt - 1), self.max_backoff_s)

    def deadline(self, timeout_s: float) -> float:
        """Upper bound in seconds for one exchange when every read times out."""
        return self.attempts * timeout_s + sum(self.delay(a) for a in range(self.attempts))
