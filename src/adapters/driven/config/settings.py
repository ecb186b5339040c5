"""Configuration loading from environment variables."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

from src.ports.callback import CallbackRegistration
from src.ports.settings import SettingsPort

__all__ = ["CallbackSettings", "Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)


class CallbackSettings(BaseModel):
    """Default pushmode callback taken from the environment.

    Attributes:
        host: Host the platform pushes to.
        port: Port the platform pushes to.
        path_prefix: Path prefix the platform pushes to.
        auth_string: Optional auth value sent by the platform.
        retry_policy: 0 = no retry, 1 = retry.
    """

    host: str = Field(..., min_length=1)
    port: int | None = Field(default=None, gt=0, lt=65536)
    path_prefix: str = Field(..., min_length=1)
    auth_string: str | None = None
    retry_policy: int | None = Field(default=None, ge=0, le=1)

    def to_registration(self) -> CallbackRegistration:
        """Return the callback as a facade DTO."""
        return CallbackRegistration(
            host=self.host,
            port=self.port,
            path_prefix=self.path_prefix,
            auth_string=self.auth_string,
            retry_policy=self.retry_policy,
        )


class Settings(BaseModel):
    """Runtime configuration for the platform client.

    Attributes:
        base_url: Root URL of the platform REST API.
        username: Basic auth user.
        password: Basic auth password.
        timeout_sec: Total timeout for each request.
        callback: Optional default pushmode callback.
    """

    base_url: str = Field(..., description="Root URL of the platform REST API.")
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)
    timeout_sec: float = Field(default=10.0, gt=0, description="Per-request timeout.")
    callback: CallbackSettings | None = None

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that the base URL is a valid HTTP(S) URL.

        Args:
            v: URL to validate.

        Returns:
            The URL without trailing slash.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http:// and https:// URLs allowed")
        except Exception as e:
            raise ValueError(f"Invalid base URL: {e}") from e
        return v.rstrip("/")

    def to_port(self) -> SettingsPort:
        """Return the immutable settings consumed by the core."""
        return SettingsPort(
            base_url=self.base_url,
            username=self.username,
            password=self.password,
            default_callback=self.callback.to_registration() if self.callback else None,
            timeout_sec=self.timeout_sec,
        )


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer (got: {raw})") from e


def _load_callback() -> CallbackSettings | None:
    host = os.getenv("CALLBACK_HOST")
    if not host:
        return None
    return CallbackSettings(
        host=host,
        port=_optional_int("CALLBACK_PORT"),
        path_prefix=os.getenv("CALLBACK_PATH_PREFIX", ""),
        auth_string=os.getenv("CALLBACK_AUTH_STRING") or None,
        retry_policy=_optional_int("CALLBACK_RETRY_POLICY"),
    )


def load_settings() -> Settings:
    """Load and validate settings from the environment (and ``.env``).

    Required environment variables:
    - PLATFORM_BASE_URL: http(s) root URL of the platform.
    - PLATFORM_USERNAME: Basic auth user.
    - PLATFORM_PASSWORD: Basic auth password.

    Optional:
    - PLATFORM_TIMEOUT_SECONDS: Positive number, defaults to 10.
    - CALLBACK_HOST, CALLBACK_PORT, CALLBACK_PATH_PREFIX,
      CALLBACK_AUTH_STRING, CALLBACK_RETRY_POLICY: default callback,
      enabled when CALLBACK_HOST is set.

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars missing or not numeric.
        ValueError: If configuration is invalid.
    """
    try:
        base_url = os.environ["PLATFORM_BASE_URL"]
        username = os.environ["PLATFORM_USERNAME"]
        password = os.environ["PLATFORM_PASSWORD"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    timeout_raw = os.getenv("PLATFORM_TIMEOUT_SECONDS", "10")
    try:
        timeout_sec = float(timeout_raw)
        if timeout_sec <= 0:
            raise ValueError("Must be positive")
    except ValueError as e:
        raise RuntimeError(
            f"PLATFORM_TIMEOUT_SECONDS must be a positive number (got: {timeout_raw})"
        ) from e

    settings = Settings(
        base_url=base_url,
        username=username,
        password=password,
        timeout_sec=timeout_sec,
        callback=_load_callback(),
    )

    logger.info(
        f"Platform client configured: base_url={settings.base_url}, "
        f"timeout={settings.timeout_sec}s, "
        f"default_callback={settings.callback.host if settings.callback else '<none>'}"
    )

    return settings
