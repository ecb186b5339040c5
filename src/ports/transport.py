"""Transport port definition (interface)."""

from __future__ import annotations

from typing import Protocol

from aiohttp import ClientResponse

from src.ports.http import HttpPort

__all__ = ["TransportPort"]


class TransportPort(Protocol):
    """Interface for sending one authenticated HTTP request.

    Implementations own authentication and connection handling. Errors are
    propagated to the caller as raised by the underlying HTTP library.
    """

    async def request(self, req: HttpPort, /) -> ClientResponse:
        """Send a request and return the raw response.

        Args:
            req: Request descriptor.

        Returns:
            HTTP response, unmodified.
        """
        ...
