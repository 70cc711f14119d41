"""Shared protocol definitions."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from core.request_types import ForwardOutcome


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard, ConsoleLogger)."""

    def log_forward(self, method: str, url: str) -> None: ...
    def log_retry(self, url: str, attempt: int, error: str, delay: float) -> None: ...
    def log_outcome(
        self,
        method: str,
        path: str,
        outcomes: "list[ForwardOutcome]",
        status: int,
    ) -> None: ...
    def log_warning(self, route: str, message: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
