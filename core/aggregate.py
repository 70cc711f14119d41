"""Fold per-destination outcomes into one client-facing response."""

from dataclasses import dataclass

from core.protocols import RequestLogger
from core.request_types import ForwardOutcome

MSG_OK = "Ok"
MSG_RESOLUTION_FAILED = "Failed to resolve target host"
MSG_NO_TARGETS = "No targets resolved for host"
MSG_BODY_READ_FAILED = "Failed to read request body"
MSG_ALL_FAILED = "Failed to forward request to any resolved target"


@dataclass(frozen=True)
class FanoutResult:
    """Status and plain-text body returned to the original client."""

    status_code: int
    message: str

    @classmethod
    def resolution_failed(cls) -> "FanoutResult":
        return cls(502, MSG_RESOLUTION_FAILED)

    @classmethod
    def no_targets(cls) -> "FanoutResult":
        return cls(502, MSG_NO_TARGETS)

    @classmethod
    def body_read_failed(cls) -> "FanoutResult":
        return cls(500, MSG_BODY_READ_FAILED)


def is_success_status(status: int | None) -> bool:
    return status is not None and 200 <= status < 400


class Aggregator:
    """Derive the client response from a complete set of ForwardOutcomes."""

    def __init__(self, logger: RequestLogger) -> None:
        self._logger = logger

    def aggregate(self, route: str, outcomes: list[ForwardOutcome]) -> FanoutResult:
        """Return 200 if any destination succeeded, 502 otherwise.

        Failures are only ever logged; the client sees the coarse result.
        """
        if not outcomes:
            self._logger.log_error(route, 502, "no addresses resolved")
            return FanoutResult.no_targets()

        failures = [o for o in outcomes if not o.success]
        summary = "; ".join(o.describe() for o in failures)

        if len(failures) < len(outcomes):
            if failures:
                self._logger.log_warning(
                    route,
                    f"{len(failures)}/{len(outcomes)} destinations failed: {summary}",
                )
            return FanoutResult(200, MSG_OK)

        self._logger.log_error(
            route,
            502,
            f"all {len(outcomes)} destinations failed: {summary}",
        )
        return FanoutResult(502, MSG_ALL_FAILED)
