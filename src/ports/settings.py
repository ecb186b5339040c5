"""Settings port definition (DTO)."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.ports.callback import CallbackRegistration

__all__ = ["SettingsPort"]


@dataclass(slots=True, frozen=True)
class SettingsPort:
    """Immutable runtime configuration for the platform client.

    Decouples the facade from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        base_url: Root URL of the platform, without trailing slash.
        username: Basic auth user.
        password: Basic auth password.
        default_callback: Callback used when register is called without one.
        timeout_sec: Total timeout applied to each request.
    """

    base_url: str
    username: str
    password: str = field(repr=False)
    default_callback: CallbackRegistration | None = None
    timeout_sec: float = 10.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
