from core.headers import HeaderBuilder
from core.request_types import CapturedBody


def test_absent_body_drops_content_length():
    headers = HeaderBuilder().build_forward_headers(
        [(b"content-length", b"12"), (b"x-trace", b"abc"), (b"accept", b"*/*")],
        CapturedBody.absent(),
    )

    assert headers == ((b"x-trace", b"abc"), (b"accept", b"*/*"))


def test_content_length_matches_replayed_body():
    body = CapturedBody.of('{"a":1}'.encode())
    headers = HeaderBuilder().build_forward_headers(
        [(b"Content-Length", b"999"), (b"content-type", b"application/json")],
        body,
    )

    assert headers == ((b"content-type", b"application/json"), (b"content-length", b"7"))


def test_headers_are_copied_verbatim():
    inbound = [
        (b"host", b"api.example"),
        (b"cookie", b"a=1"),
        (b"x-forwarded-for", b"10.1.1.1"),
        (b"cookie", b"b=2"),
        (b"x-name", "café".encode("latin-1")),
    ]

    headers = HeaderBuilder().build_forward_headers(inbound, CapturedBody.absent())

    assert headers == tuple(inbound)


def test_transfer_encoding_is_not_copied():
    headers = HeaderBuilder().build_forward_headers(
        [(b"transfer-encoding", b"chunked"), (b"authorization", b"Bearer x")],
        CapturedBody.of(b"data"),
    )

    assert headers == ((b"authorization", b"Bearer x"), (b"content-length", b"4"))


def test_captured_body_variants():
    assert CapturedBody.of(b"").is_absent
    assert CapturedBody.of(None).is_absent
    assert len(CapturedBody.absent()) == 0
    body = CapturedBody.of(bytearray(b"abc"))
    assert body.data == b"abc"
    assert isinstance(body.data, bytes)
    assert len(body) == 3
