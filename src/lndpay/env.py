from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    """Typed application settings built from environment variables."""

    lnd_rest_url: str = "https://127.0.0.1:8080"
    lnd_macaroon_hex: str = ""
    lnd_tls_cert_path: Optional[str] = None
    lnd_timeout_seconds: float = 60.0

    broadcast_redis_url: Optional[str] = None
    broadcast_channel: str = "lndpay:payments"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_workers: int = 1
    api_cors_origins: list[str] = ["*"]

    app_name: str = "lndpay"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    @field_validator("lnd_macaroon_hex")
    @classmethod
    def validate_macaroon_hex(cls, v: str) -> str:
        if not v:
            return v
        try:
            bytes.fromhex(v)
        except ValueError as e:
            raise ValueError(f"LND macaroon must be hex encoded: {e}") from e
        return v

    @field_validator("lnd_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("LND timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


def _read_macaroon() -> str:
    macaroon_hex = os.environ.get("LND_MACAROON_HEX")
    if macaroon_hex:
        return macaroon_hex
    macaroon_path = os.environ.get("LND_MACAROON_PATH")
    if macaroon_path:
        with open(macaroon_path, "rb") as f:
            return f.read().hex()
    return ""


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        lnd_rest_url=os.environ.get("LND_REST_URL", "https://127.0.0.1:8080"),
        lnd_macaroon_hex=_read_macaroon(),
        lnd_tls_cert_path=os.environ.get("LND_TLS_CERT_PATH") or None,
        lnd_timeout_seconds=float(os.environ.get("LND_TIMEOUT_SECONDS", "60")),
        broadcast_redis_url=os.environ.get("BROADCAST_REDIS_URL") or None,
        broadcast_channel=os.environ.get("BROADCAST_CHANNEL", "lndpay:payments"),
        api_host=os.environ.get("API_HOST", "0.0.0.0"),
        api_port=int(os.environ.get("API_PORT", "8000")),
        api_debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        api_workers=int(os.environ.get("API_WORKERS", "1")),
        api_cors_origins=os.environ.get("API_CORS_ORIGINS", "*").split(","),
        app_name=os.environ.get("APP_NAME", "lndpay"),
        app_version=os.environ.get("APP_VERSION", "0.1.0"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
