"""Concurrent fan-out of one request to every resolved address."""

import asyncio
from collections.abc import Awaitable, Callable

import httpx

from core.aggregate import is_success_status
from core.exceptions import ForwardError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import FanoutRequest, ForwardOutcome, HeaderPairs
from core.retry import RetryPolicy
from core.target import TargetDescriptor

Sleep = Callable[[float], Awaitable[None]]


class FanoutDispatcher:
    """Send an identical copy of a request to each address, with retries."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        target: TargetDescriptor,
        logger: RequestLogger,
        policy: RetryPolicy | None = None,
        header_builder: HeaderBuilder | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._target = target
        self._logger = logger
        self._policy = policy or RetryPolicy()
        self._headers = header_builder or HeaderBuilder()
        self._sleep = sleep

    async def dispatch(
        self,
        request: FanoutRequest,
        addresses: list[str],
    ) -> list[ForwardOutcome]:
        """Forward to all addresses concurrently and wait for every outcome.

        Forwards never raise, so no sibling is cancelled early.
        """
        headers = self._headers.build_forward_headers(request.headers, request.body)
        return list(
            await asyncio.gather(
                *(self._forward(request, headers, address) for address in addresses)
            )
        )

    async def _forward(
        self,
        request: FanoutRequest,
        headers: HeaderPairs,
        address: str,
    ) -> ForwardOutcome:
        """Run the retry loop for a single destination."""
        url = self._target.url_for(address, request.path)
        self._logger.log_forward(request.method, url)

        attempt = 0
        while True:
            attempt += 1
            try:
                status = await self._attempt(request, headers, url)
                return ForwardOutcome(
                    address=address,
                    url=url,
                    status=status,
                    success=True,
                    attempts=attempt,
                )
            except (ForwardError, httpx.RequestError) as e:
                error = _describe_error(e)
                if not (
                    self._policy.can_retry(attempt)
                    and self._policy.should_retry(e, request.is_idempotent)
                ):
                    return _failed(address, url, e, attempt)
                delay = self._policy.delay_for(attempt)
                self._logger.log_retry(url, attempt, error, delay)
                await self._sleep(delay)
            except Exception as e:
                # One destination must never break the join for its siblings.
                return _failed(address, url, e, attempt)

    async def _attempt(
        self,
        request: FanoutRequest,
        headers: HeaderPairs,
        url: str,
    ) -> int:
        """Send one attempt; return the status or raise ForwardError."""
        outbound = self._client.build_request(
            request.method,
            url,
            headers=list(headers),
            content=request.body.data,
            timeout=self._policy.timeout,
        )
        self._strip_client_defaults(outbound, headers)
        if request.body.is_absent:
            # httpx adds "Content-Length: 0" to bodiless POST/PUT/PATCH.
            outbound.headers.pop("content-length", None)

        response = await self._client.send(outbound)
        if not is_success_status(response.status_code):
            raise ForwardError(
                f"{url} responded {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response.status_code

    def _strip_client_defaults(self, outbound: httpx.Request, headers: HeaderPairs) -> None:
        """Drop headers httpx merged in that the inbound request never carried."""
        sent = {key.lower() for key, _ in headers}
        for name in self._client.headers.keys():
            if name.encode("latin-1") not in sent:
                outbound.headers.pop(name, None)


def _failed(address: str, url: str, error: Exception, attempt: int) -> ForwardOutcome:
    return ForwardOutcome(
        address=address,
        url=url,
        status=getattr(error, "status_code", None),
        success=False,
        error=_describe_error(error),
        attempts=attempt,
    )


def _describe_error(error: Exception) -> str:
    if isinstance(error, ForwardError):
        return str(error)
    return f"{type(error).__name__}: {error}" if str(error) else type(error).__name__
