"""Callback (pushmode) registration DTO."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any

__all__ = ["CallbackRegistration", "DEFAULT_RETRY_POLICY"]

DEFAULT_RETRY_POLICY = 1


@dataclass(slots=True, frozen=True)
class CallbackRegistration:
    """Webhook endpoint the platform pushes uplink events to.

    State lives only on the platform; nothing is kept locally.

    Attributes:
        host: Host name or address of the receiving endpoint.
        port: TCP port of the receiving endpoint.
        path_prefix: URL path prefix the platform posts to.
        auth_string: Optional value the platform sends for authentication.
        retry_policy: 0 = no retry, 1 = retry; None means "use the default" (1).
    """

    host: str | None = None
    port: int | None = None
    path_prefix: str | None = None
    auth_string: str | None = None
    retry_policy: int | None = None

    def with_defaults(self) -> CallbackRegistration:
        """Return a copy where unset optional fields carry their defaults."""
        if self.retry_policy is not None:
            return self
        return replace(self, retry_policy=DEFAULT_RETRY_POLICY)

    def to_body(self) -> dict[str, Any]:
        """Return the JSON object sent to the platform, unset fields dropped."""
        return {key: value for key, value in asdict(self).items() if value is not None}
