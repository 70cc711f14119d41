"""Per-request IPv4 resolution of the target hostname."""

import asyncio
import socket

from core.exceptions import ResolutionError


class Resolver:
    """Look up the current IPv4 addresses of a hostname.

    Nothing is cached: the address set is expected to change as peers come
    and go, so every call performs a fresh lookup.
    """

    async def resolve(self, hostname: str) -> list[str]:
        """Return the distinct IPv4 addresses bound to ``hostname``.

        An empty list is a valid result and is left for the caller to check.

        Raises:
            ResolutionError: if the lookup itself fails
        """
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(
                hostname,
                None,
                family=socket.AF_INET,
                type=socket.SOCK_STREAM,
            )
        except (OSError, UnicodeError) as e:
            raise ResolutionError(f"Failed to resolve {hostname}: {e}", hostname) from e

        addresses: list[str] = []
        for family, _type, _proto, _canonname, sockaddr in infos:
            if family != socket.AF_INET:
                continue
            address = str(sockaddr[0])
            if address not in addresses:
                addresses.append(address)
        return addresses
