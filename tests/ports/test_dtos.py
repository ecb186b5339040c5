"""Tests for port DTOs."""

import dataclasses

import pytest

from src.ports.callback import CallbackRegistration
from src.ports.downlink import DownlinkMessage
from src.ports.settings import SettingsPort

__all__ = []


def test_callback_with_defaults_sets_retry_policy() -> None:
    """Unset retry_policy should become 1."""
    callback = CallbackRegistration(host="h", path_prefix="p").with_defaults()

    assert callback.retry_policy == 1


def test_callback_to_body_drops_unset_fields() -> None:
    """Only set fields should be serialized."""
    body = CallbackRegistration(host="h", path_prefix="p", retry_policy=0).to_body()

    assert body == {"host": "h", "path_prefix": "p", "retry_policy": 0}


def test_downlink_encodes_text_and_bytes() -> None:
    """Text payloads are UTF-8 encoded, bytes are used as-is."""
    assert DownlinkMessage(deveui="d", payload="abc").encoded_payload() == "YWJj"
    assert DownlinkMessage(deveui="d", payload=b"\x01\x02").encoded_payload() == "AQI="


def test_settings_port_strips_trailing_slash_and_is_frozen() -> None:
    """Base URL should lose its trailing slash and settings stay immutable."""
    settings = SettingsPort(base_url="http://x/", username="u", password="s3cret-value")

    assert settings.base_url == "http://x"
    assert "s3cret-value" not in repr(settings)
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.username = "other"  # type: ignore[misc]
