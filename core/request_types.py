"""Shared request data types."""

from dataclasses import dataclass

BODYLESS_METHODS = frozenset({"GET", "HEAD"})
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "PUT", "DELETE", "OPTIONS"})

# Raw (name, value) header pairs, in arrival order, repeats included.
HeaderPairs = tuple[tuple[bytes, bytes], ...]


@dataclass(frozen=True)
class CapturedBody:
    """Inbound request body, captured once and replayed to every destination.

    ``data`` is ``None`` when the body is absent. An empty buffer is never
    stored; use :meth:`of` to build instances.
    """

    data: bytes | None = None

    @classmethod
    def absent(cls) -> "CapturedBody":
        return cls(None)

    @classmethod
    def of(cls, data: bytes | bytearray | None) -> "CapturedBody":
        if not data:
            return cls(None)
        return cls(bytes(data))

    @property
    def is_absent(self) -> bool:
        return self.data is None

    def __len__(self) -> int:
        return 0 if self.data is None else len(self.data)


@dataclass(frozen=True)
class FanoutRequest:
    """The inbound request as it is replayed to each destination."""

    method: str
    path: str
    headers: HeaderPairs
    body: CapturedBody

    @property
    def is_idempotent(self) -> bool:
        return self.method.upper() in IDEMPOTENT_METHODS


@dataclass(frozen=True)
class ForwardOutcome:
    """Terminal result of forwarding one request to one address."""

    address: str
    url: str
    status: int | None = None
    success: bool = False
    error: str | None = None
    attempts: int = 1

    def describe(self) -> str:
        """One-line failure summary for logs."""
        detail = self.error or f"status {self.status}"
        return f"{self.address} ({self.url}): {detail} after {self.attempts} attempt(s)"
