"""FastAPI dependencies for the payments API."""

from __future__ import annotations

from typing import Optional, Union

from fastapi import Depends

from ..application.use_cases.payment import PaymentService
from ..application.use_cases.payment_request import PaymentRequestService
from ..domain.shared import LightningNodeProtocol, PaymentObserverProtocol
from ..env import Settings, get_settings
from ..infrastructure.broadcast.redis_broadcaster import RedisPaymentBroadcaster
from ..infrastructure.database import close_redis_client, get_redis_client
from ..infrastructure.lnd.lnd_rest_client import AsyncLndRestClient


# Global node client instance
_lnd_client: Union[AsyncLndRestClient, None] = None
_broadcaster: Union[RedisPaymentBroadcaster, None] = None


def get_node_client(
    settings: Settings = Depends(get_settings),
) -> LightningNodeProtocol:
    """Get or create the LND REST client singleton."""
    global _lnd_client
    if _lnd_client is None:
        _lnd_client = AsyncLndRestClient(
            settings.lnd_rest_url,
            settings.lnd_macaroon_hex,
            tls_cert_path=settings.lnd_tls_cert_path,
            timeout=settings.lnd_timeout_seconds,
        )
    return _lnd_client


def get_payment_observer(
    settings: Settings = Depends(get_settings),
) -> Optional[PaymentObserverProtocol]:
    """Get the payment broadcaster, or None when broadcasting is disabled."""
    global _broadcaster
    if not settings.broadcast_redis_url:
        return None
    if _broadcaster is None:
        _broadcaster = RedisPaymentBroadcaster(
            get_redis_client(settings), settings.broadcast_channel
        )
    return _broadcaster


def get_payment_service(
    node: LightningNodeProtocol = Depends(get_node_client),
    observer: Optional[PaymentObserverProtocol] = Depends(get_payment_observer),
) -> PaymentService:
    """Get payment service."""
    return PaymentService(node, observer=observer)


def get_payment_request_service(
    node: LightningNodeProtocol = Depends(get_node_client),
) -> PaymentRequestService:
    """Get payment request service."""
    return PaymentRequestService(node)


async def close_clients() -> None:
    """Release the node client and drain pending broadcasts."""
    global _lnd_client, _broadcaster
    if _broadcaster is not None:
        await _broadcaster.drain()
        _broadcaster = None
        await close_redis_client()
    if _lnd_client is not None:
        await _lnd_client.aclose()
        _lnd_client = None
