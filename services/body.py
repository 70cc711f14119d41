"""Capture the inbound request body once so it can be replayed."""

from starlette.requests import ClientDisconnect, Request

from core.exceptions import BodyReadError
from core.request_types import BODYLESS_METHODS, CapturedBody

MAX_BODY_SIZE = 50 * 1024 * 1024  # 50MB


async def capture_body(request: Request, max_size: int = MAX_BODY_SIZE) -> CapturedBody:
    """Read the request body to completion into one immutable buffer.

    GET and HEAD never carry a body. For other methods, a body the framework
    has already buffered is reused; otherwise the stream is drained here.

    Raises:
        BodyReadError: on disconnect, I/O failure, or an oversized body
    """
    if request.method.upper() in BODYLESS_METHODS:
        return CapturedBody.absent()

    buffer = bytearray()
    try:
        # Starlette replays an already-buffered body through stream().
        async for chunk in request.stream():
            buffer.extend(chunk)
            if len(buffer) > max_size:
                raise BodyReadError(f"Request body exceeds {max_size} bytes")
    except ClientDisconnect as e:
        raise BodyReadError("Client disconnected while sending body") from e
    except (OSError, RuntimeError) as e:
        raise BodyReadError(f"Failed to read request body: {e}") from e

    return CapturedBody.of(buffer)
