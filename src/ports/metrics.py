"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["HttpAttemptDto", "MetricsPort", "FIRST_FAILING_HTTP_CODE"]

FIRST_FAILING_HTTP_CODE = 400


@dataclass(slots=True, frozen=True)
class HttpAttemptDto:
    """Outcome of one request sent to the platform.

    Exactly one of ``status_code`` and ``error`` is set: a response
    arrived, or the transport raised before one did.

    Attributes:
        method: HTTP verb of the request.
        elapsed_ms: Time from sending the request to its outcome.
        status_code: HTTP status of the response.
        error: Exception class name when no response arrived.
    """

    method: str
    elapsed_ms: float
    status_code: int | None = None
    error: str | None = None

    @property
    def is_failed(self) -> bool:
        """True on transport errors and on status >= 400."""
        if self.status_code is None:
            return True
        return self.status_code >= FIRST_FAILING_HTTP_CODE


class MetricsPort(Protocol):
    """Sink for request outcomes reported by the transport."""

    def update(self, attempt: HttpAttemptDto, /) -> None:
        """Record one request outcome."""
        ...

    def __str__(self) -> str:
        """Return a one-line summary for logs."""
        ...
