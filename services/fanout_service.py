"""Fan-out orchestration for inbound requests."""

from starlette.requests import Request

from core.aggregate import Aggregator, FanoutResult
from core.exceptions import BodyReadError, ResolutionError
from core.protocols import RequestLogger
from core.request_types import FanoutRequest, ForwardOutcome
from core.target import TargetDescriptor
from services.body import capture_body
from services.dispatcher import FanoutDispatcher
from services.resolver import Resolver


class FanoutService:
    """Resolve, capture, dispatch and aggregate one inbound request."""

    def __init__(
        self,
        target: TargetDescriptor,
        logger: RequestLogger,
        resolver: Resolver,
        dispatcher: FanoutDispatcher,
        aggregator: Aggregator | None = None,
    ) -> None:
        self._target = target
        self._logger = logger
        self._resolver = resolver
        self._dispatcher = dispatcher
        self._aggregator = aggregator or Aggregator(logger)

    async def handle(self, request: Request) -> tuple[FanoutResult, list[ForwardOutcome]]:
        """Forward ``request`` to every resolved address.

        Returns the client-facing result and the per-destination outcomes,
        which are empty when the request aborted before dispatch.
        """
        route = str(self._target)
        method = request.method
        path = path_with_query(request)

        try:
            addresses = await self._resolver.resolve(self._target.hostname)
        except ResolutionError as e:
            self._logger.log_error(route, 502, f"resolution failed: {e}")
            return FanoutResult.resolution_failed(), []

        if not addresses:
            return self._aggregator.aggregate(route, []), []

        try:
            body = await capture_body(request)
        except BodyReadError as e:
            self._logger.log_error(route, 500, f"body read failed: {e}")
            return FanoutResult.body_read_failed(), []

        fanout = FanoutRequest(
            method=method,
            path=path,
            headers=tuple(request.headers.raw),
            body=body,
        )
        outcomes = await self._dispatcher.dispatch(fanout, addresses)
        result = self._aggregator.aggregate(route, outcomes)
        self._logger.log_outcome(method, path, outcomes, result.status_code)
        return result, outcomes


def path_with_query(request: Request) -> str:
    """Original path and query string, without re-encoding."""
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.url.path
    query = request.scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path
