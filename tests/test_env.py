"""Tests for settings loaded from environment variables."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lndpay.env import Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LND_REST_URL", "LND_MACAROON_HEX", "LND_MACAROON_PATH", "BROADCAST_REDIS_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.lnd_rest_url == "https://127.0.0.1:8080"
    assert settings.lnd_macaroon_hex == ""
    assert settings.broadcast_redis_url is None
    assert settings.lnd_timeout_seconds == 60.0


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LND_REST_URL", "https://lnd:8080")
    monkeypatch.setenv("LND_MACAROON_HEX", "0201")
    monkeypatch.setenv("LND_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("BROADCAST_REDIS_URL", "redis://redis:6379/0")
    monkeypatch.setenv("API_CORS_ORIGINS", "http://a,http://b")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.lnd_rest_url == "https://lnd:8080"
    assert settings.lnd_macaroon_hex == "0201"
    assert settings.lnd_timeout_seconds == 5.0
    assert settings.broadcast_redis_url == "redis://redis:6379/0"
    assert settings.api_cors_origins == ["http://a", "http://b"]
    assert settings.log_level == "DEBUG"


def test_macaroon_read_from_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    macaroon = tmp_path / "admin.macaroon"
    macaroon.write_bytes(b"\x02\x01\xff")
    monkeypatch.delenv("LND_MACAROON_HEX", raising=False)
    monkeypatch.setenv("LND_MACAROON_PATH", str(macaroon))

    assert get_settings().lnd_macaroon_hex == "0201ff"


@pytest.mark.parametrize(
    "field,value",
    [
        ("lnd_macaroon_hex", "not-hex"),
        ("lnd_timeout_seconds", 0),
        ("log_level", "LOUD"),
    ],
)
def test_invalid_values_are_rejected(field: str, value: object) -> None:
    with pytest.raises(ValidationError):
        Settings(**{field: value})
