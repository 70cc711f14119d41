"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_fanout, handle_health, handle_version
from core.aggregate import Aggregator
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.dispatcher import FanoutDispatcher
from services.fanout_service import FanoutService
from services.resolver import Resolver


def create_app(
    config: Config,
    logger: RequestLogger,
    resolver: Resolver | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    target = config.target_descriptor
    version = config.version

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # No keep-alive: each fan-out opens fresh connections to the current peers.
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=0)
        client = httpx.AsyncClient(
            timeout=config.retry.timeout,
            limits=limits,
            transport=transport,
        )
        dispatcher = FanoutDispatcher(
            client,
            target,
            logger,
            policy=config.retry.to_policy(),
            header_builder=HeaderBuilder(),
        )
        app.state.fanout_service = FanoutService(
            target=target,
            logger=logger,
            resolver=resolver or Resolver(),
            dispatcher=dispatcher,
            aggregator=Aggregator(logger),
        )
        try:
            yield
        finally:
            await client.aclose()

    # Every path except the status endpoints belongs to the fan-out route.
    app = FastAPI(
        title="DNS Fan-out Proxy",
        version=version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/version")
    async def version_endpoint():
        return await handle_version(version)

    @app.get("/health")
    async def health_endpoint():
        return await handle_health(version)

    async def fanout(request: Request):
        return await handle_fanout(request, config)

    # A plain Starlette route with no method list accepts any verb (PURGE, TRACE, ...).
    app.add_route("/{path:path}", fanout, include_in_schema=False)

    return app
