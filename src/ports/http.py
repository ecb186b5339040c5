"""HTTP port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["HttpPort", "JSON_CONTENT_TYPE", "TEXT_CONTENT_TYPE"]

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"


@dataclass(slots=True, frozen=True)
class HttpPort:
    """HTTP request to be sent by the transport.

    Built fresh by the facade for every call; decouples request
    construction from the HTTP implementation.

    Attributes:
        url: Fully qualified target URL, query string included.
        method: HTTP verb (GET, PUT, POST).
        body: Optional request body, already serialized.
        content_type: MIME type of ``body``; ignored when there is no body.
    """

    url: str
    method: str = "GET"
    body: str | None = None
    content_type: str = JSON_CONTENT_TYPE
