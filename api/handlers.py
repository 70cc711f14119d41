"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from core.config import Config
from ui.log_utils import write_fanout_log


async def handle_fanout(request: Request, config: Config) -> Response:
    """Forward the request to every address the target resolves to."""
    fanout_service = request.app.state.fanout_service
    result, outcomes = await fanout_service.handle(request)

    if config.proxy.debug:
        write_fanout_log(
            request.method,
            request.url.path,
            dict(request.headers),
            outcomes,
            result.status_code,
        )

    return PlainTextResponse(result.message, status_code=result.status_code)


async def handle_version(version: str) -> Response:
    """Report the running version."""
    return JSONResponse({"version": version})


async def handle_health(version: str) -> Response:
    """Liveness check; never touches the target."""
    return JSONResponse({"status": "ok", "version": version})
