"""Upstream target parsing."""

from dataclasses import dataclass

from core.exceptions import ConfigurationError

DEFAULT_PORT = 80


@dataclass(frozen=True)
class TargetDescriptor:
    """Hostname and port every inbound request is fanned out to."""

    hostname: str
    port: int = DEFAULT_PORT

    def url_for(self, address: str, path: str) -> str:
        """Build the outbound URL for one resolved address."""
        return f"http://{address}:{self.port}{path}"

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"


def parse_target(target: str | None) -> TargetDescriptor:
    """Parse ``host`` or ``host:port`` into a TargetDescriptor."""
    target = (target or "").strip()
    if not target:
        raise ConfigurationError("TARGET is not set")

    if ":" not in target:
        return TargetDescriptor(hostname=target)

    hostname, raw_port = target.split(":", 1)
    hostname = hostname.strip()
    if not hostname:
        raise ConfigurationError(f"TARGET has no hostname: {target!r}")

    try:
        port = int(raw_port)
    except ValueError as e:
        raise ConfigurationError(f"TARGET has an invalid port: {target!r}") from e
    if not 0 < port < 65536:
        raise ConfigurationError(f"TARGET port out of range: {port}")

    return TargetDescriptor(hostname=hostname, port=port)
