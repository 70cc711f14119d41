"""Custom exception hierarchy for the fan-out proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class ResolutionError(ProxyError):
    """Raised when the target hostname cannot be resolved.

    Attributes:
        hostname: Hostname that failed to resolve
    """

    def __init__(self, message: str, hostname: str | None = None) -> None:
        super().__init__(message)
        self.hostname = hostname


class BodyReadError(ProxyError):
    """Raised when the inbound request body cannot be read."""


class ForwardError(ProxyError):
    """Raised when a single destination rejects a forwarded request.

    Attributes:
        message: Error message
        url: Destination URL the request was sent to
        status_code: HTTP status code from the destination (optional)
    """

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
