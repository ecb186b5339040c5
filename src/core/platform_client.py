"""Facade exposing one coroutine per platform REST operation."""

import json
import logging
from urllib.parse import quote

from aiohttp import ClientResponse

from src.core.errors import InvalidParameterError
from src.ports.callback import CallbackRegistration
from src.ports.downlink import DEFAULT_DOWNLINK_PORT, DownlinkMessage
from src.ports.http import JSON_CONTENT_TYPE, TEXT_CONTENT_TYPE, HttpPort
from src.ports.settings import SettingsPort
from src.ports.transport import TransportPort

__all__ = ["PlatformClient", "build_downlink_query"]

logger = logging.getLogger(__name__)

PUSHMODE_START_PATH = "/rest/pushmode/start"
PUSHMODE_STOP_PATH = "/rest/pushmode/stop"
NODES_PATH = "/rest/nodes"


def build_downlink_query(message: DownlinkMessage) -> str:
    """Build the downlink query string, leading ``?`` included.

    Parameters appear in the order port, fcnt, confirmed. ``fcnt`` is
    skipped when unset or empty and ``confirmed`` is only sent for a real
    bool.

    Args:
        message: Downlink message carrying the query values.

    Returns:
        Query string such as ``?port=1&fcnt=f1&confirmed=false``.
    """
    port = DEFAULT_DOWNLINK_PORT if message.port is None else message.port
    parts = [f"port={port}"]
    if message.fcnt is not None and str(message.fcnt) != "":
        parts.append(f"fcnt={quote(str(message.fcnt), safe='')}")
    if isinstance(message.confirmed, bool):
        parts.append(f"confirmed={'true' if message.confirmed else 'false'}")
    return "?" + "&".join(parts)


class PlatformClient:
    """Request builder for the platform REST API.

    Each method validates its arguments, builds an ``HttpPort`` and hands
    it to the transport. Responses and transport errors are passed back
    unchanged.
    """

    def __init__(self, settings: SettingsPort, transport: TransportPort) -> None:
        """Initialize the facade.

        Args:
            settings: Immutable platform configuration.
            transport: Transport used to send requests.
        """
        self._settings = settings
        self._transport = transport

    def _url(self, path: str) -> str:
        return f"{self._settings.base_url}{path}"

    async def _send(self, req: HttpPort) -> ClientResponse:
        logger.debug(f"{req.method} {req.url}")
        return await self._transport.request(req)

    async def register_callback(
        self, callback: CallbackRegistration | None = None
    ) -> ClientResponse:
        """Register the webhook the platform pushes uplinks to.

        Args:
            callback: Endpoint to register; the configured default is used
                when omitted.

        Returns:
            Transport response.

        Raises:
            InvalidParameterError: If no callback resolves, or it lacks
                ``host`` or ``path_prefix``.
        """
        resolved = callback or self._settings.default_callback
        if resolved is None:
            raise InvalidParameterError(
                "callback", "No callback given and no default callback configured"
            )
        if not resolved.host:
            raise InvalidParameterError("host")
        if not resolved.path_prefix:
            raise InvalidParameterError("path_prefix")

        body = json.dumps(resolved.with_defaults().to_body())
        return await self._send(
            HttpPort(
                url=self._url(PUSHMODE_START_PATH),
                method="PUT",
                body=body,
                content_type=JSON_CONTENT_TYPE,
            )
        )

    async def unregister_callbacks(self) -> ClientResponse:
        """Stop every push callback registered for this account."""
        return await self._send(HttpPort(url=self._url(PUSHMODE_STOP_PATH), method="PUT"))

    async def get_latest_payload(self, deveui: str) -> ClientResponse:
        """Fetch the most recent uplink payload of a node.

        Raises:
            InvalidParameterError: If ``deveui`` is empty.
        """
        self._require_deveui(deveui)
        return await self._send(
            HttpPort(url=self._url(f"{NODES_PATH}/{deveui}/payloads/ul/latest"))
        )

    async def list_payloads(self, deveui: str) -> ClientResponse:
        """Fetch the uplink payload history of a node.

        Raises:
            InvalidParameterError: If ``deveui`` is empty.
        """
        self._require_deveui(deveui)
        return await self._send(HttpPort(url=self._url(f"{NODES_PATH}/{deveui}/payloads/ul")))

    async def list_nodes(self) -> ClientResponse:
        return await self._send(HttpPort(url=self._url(NODES_PATH)))

    async def send_data(self, dto: DownlinkMessage | None) -> ClientResponse:
        """Queue a downlink message for a node.

        The payload is sent base64-encoded as the request body.

        Args:
            dto: Message to send.

        Returns:
            Transport response.

        Raises:
            InvalidParameterError: If ``dto``, its payload or its deveui is missing.
        """
        if dto is None:
            raise InvalidParameterError("dto")
        if not dto.payload:
            raise InvalidParameterError("payload")
        self._require_deveui(dto.deveui)

        url = self._url(f"{NODES_PATH}/{dto.deveui}/payloads/dl") + build_downlink_query(dto)
        return await self._send(
            HttpPort(
                url=url,
                method="POST",
                body=dto.encoded_payload(),
                content_type=TEXT_CONTENT_TYPE,
            )
        )

    @staticmethod
    def _require_deveui(deveui: str | None) -> None:
        if not deveui:
            raise InvalidParameterError("deveui")
