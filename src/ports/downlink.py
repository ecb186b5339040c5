"""Downlink message DTO."""

from __future__ import annotations

import base64
from dataclasses import dataclass

__all__ = ["DownlinkMessage", "DEFAULT_DOWNLINK_PORT"]

DEFAULT_DOWNLINK_PORT = 1


@dataclass(slots=True, frozen=True)
class DownlinkMessage:
    """Message queued by the platform for delivery to a device.

    Attributes:
        deveui: Device EUI of the target node.
        payload: Raw payload; text is UTF-8 encoded before base64.
        port: Application port (defaults to 1).
        fcnt: Optional frame counter value.
        confirmed: True/False to request (un)confirmed delivery; None leaves
            the choice to the platform.
    """

    deveui: str | None = None
    payload: str | bytes | None = None
    port: int | None = None
    fcnt: str | int | None = None
    confirmed: bool | None = None

    def encoded_payload(self) -> str:
        """Return the payload as a base64 ASCII string."""
        raw = self.payload or b""
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        return base64.b64encode(raw).decode("ascii")
