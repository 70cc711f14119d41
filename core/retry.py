"""Per-destination retry policy."""

from dataclasses import dataclass

import httpx

from core.exceptions import ForwardError

RETRYABLE_STATUSES = frozenset({408})


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with exponential backoff, applied to each destination.

    Attributes:
        max_attempts: Total attempts per destination, including the first
        base_delay: Seconds to wait before the first retry
        multiplier: Growth factor applied to the delay on every further retry
        timeout: Per-attempt timeout in seconds
    """

    max_attempts: int = 3
    base_delay: float = 0.1
    multiplier: float = 2.0
    timeout: float = 10.0

    def delay_for(self, retry_number: int) -> float:
        """Seconds to sleep before retry ``retry_number`` (1-based)."""
        return self.base_delay * self.multiplier ** (retry_number - 1)

    def can_retry(self, attempt: int) -> bool:
        """Whether another attempt is allowed after ``attempt`` finished."""
        return attempt < self.max_attempts

    def should_retry(self, error: Exception, idempotent: bool) -> bool:
        """Decide whether a failed attempt is worth repeating."""
        if isinstance(error, ForwardError):
            return error.status_code in RETRYABLE_STATUSES
        if isinstance(error, httpx.TransportError):
            return True
        if isinstance(error, httpx.RequestError):
            return idempotent
        return False
