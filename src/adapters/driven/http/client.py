"""HTTP client adapter with Basic auth and metrics integration."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import BasicAuth, ClientResponse, ClientTimeout

from src.ports.http import HttpPort
from src.ports.metrics import HttpAttemptDto, MetricsPort
from src.ports.settings import SettingsPort
from src.ports.transport import TransportPort

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)

# Raised by the transport without a response; recorded, then re-raised.
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class HttpClient(TransportPort):
    """Authenticated HTTP transport for the platform API.

    Features:
    - HTTP Basic auth on every request.
    - Metrics collection (per-method counts, failures, latency).
    - Context manager for proper resource cleanup.

    Errors raised by aiohttp, timeouts included, are propagated unchanged.
    """

    def __init__(self, settings: SettingsPort, metrics: MetricsPort | None = None) -> None:
        """Initialize HTTP client.

        Args:
            settings: Platform configuration providing credentials and timeout.
            metrics: Optional metrics collector to track attempts.
        """
        self.auth = BasicAuth(settings.username, settings.password)
        self.timeout = ClientTimeout(total=settings.timeout_sec)
        self.metrics = metrics
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession(auth=self.auth, timeout=self.timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()
            self.session = None

    async def _raw_request(self, req: HttpPort) -> ClientResponse:
        """Single HTTP request.

        Args:
            req: Request descriptor.

        Returns:
            HTTP response.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Network/timeout errors.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        headers = {"Accept": "application/json"}
        if req.body is not None:
            headers["Content-Type"] = req.content_type
        return await self.session.request(req.method, req.url, data=req.body, headers=headers)

    async def request(self, req: HttpPort) -> ClientResponse:
        """Send HTTP request and record metrics.

        Args:
            req: Request descriptor.

        Returns:
            HTTP response.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()

        try:
            resp = await self._raw_request(req=req)
        except TRANSPORT_ERRORS as exc:
            self._record(req, started, loop.time(), error=type(exc).__name__)
            raise

        self._record(req, started, loop.time(), status=resp.status)
        return resp

    def _record(
        self,
        req: HttpPort,
        started: float,
        finished: float,
        status: int | None = None,
        error: str | None = None,
    ) -> None:
        if not self.metrics:
            return
        self.metrics.update(
            HttpAttemptDto(
                method=req.method,
                elapsed_ms=max(0.0, finished - started) * 1_000.0,
                status_code=status,
                error=error,
            )
        )
        logger.info(f"HTTP metrics: {self.metrics}")
