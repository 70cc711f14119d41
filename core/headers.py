"""Header construction for forwarded requests."""

from collections.abc import Iterable

from core.request_types import CapturedBody, HeaderPairs

# Recomputed (content-length) or meaningless for a buffered replay.
DROPPED_HEADERS = frozenset({b"content-length", b"transfer-encoding"})


class HeaderBuilder:
    """Build outbound headers for each destination."""

    def build_forward_headers(
        self,
        headers: Iterable[tuple[bytes, bytes]],
        body: CapturedBody,
    ) -> HeaderPairs:
        """Copy inbound header pairs verbatim, recomputing content-length.

        Repeated headers and their order are preserved; values stay raw bytes.
        """
        upstream = [
            (key, value)
            for key, value in headers
            if key.lower() not in DROPPED_HEADERS
        ]
        if not body.is_absent:
            upstream.append((b"content-length", str(len(body)).encode("ascii")))
        return tuple(upstream)
