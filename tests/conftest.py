"""Shared pytest fixtures for payment tests."""

from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

from lndpay.domain.entities import Hop, PaymentPath, PaymentRoute
from tests.fixtures import InMemoryNodeClient, RecordingObserver, channel_number


@pytest.fixture
def preimage() -> bytes:
    """A 32 byte payment preimage."""
    return bytes(range(32))


@pytest.fixture
def payment_hash() -> str:
    """A payment hash unrelated to the preimage fixture."""
    return "ab" * 32


@pytest.fixture
def success_response(preimage: bytes) -> Callable[..., Dict[str, Any]]:
    """Factory for a successful send response, with overridable route fields."""

    def make(**route_overrides: Any) -> Dict[str, Any]:
        route: Dict[str, Any] = {
            "hops": [
                {
                    "amt_to_forward": "1000",
                    "amt_to_forward_msat": "1000000",
                    "chan_id": channel_number(100, 5, 2),
                    "chan_capacity": "500000",
                    "expiry": 600000,
                    "fee": "1",
                    "fee_msat": "1000",
                }
            ],
            "total_amt": "1001",
            "total_amt_msat": "1001000",
            "total_fees": "1",
            "total_fees_msat": "1000",
            "total_time_lock": 600040,
        }
        route.update(route_overrides)
        return {
            "payment_error": "",
            "payment_preimage": preimage,
            "payment_route": route,
        }

    return make


@pytest.fixture
def make_route() -> Callable[..., PaymentRoute]:
    """Factory for a single hop route with the given fee and channel."""

    def make(fee: int = 10, channel: str = "100x5x2") -> PaymentRoute:
        return PaymentRoute(
            fee=fee,
            fee_mtokens=str(fee * 1000),
            hops=[
                Hop(
                    channel=channel,
                    channel_capacity=500000,
                    fee=fee,
                    fee_mtokens=str(fee * 1000),
                    forward=1000,
                    forward_mtokens="1000000",
                    public_key="02" + "11" * 32,
                    timeout=600000,
                )
            ],
            mtokens=str((1000 + fee) * 1000),
            timeout=600040,
            tokens=1000 + fee,
        )

    return make


@pytest.fixture
def make_path(
    payment_hash: str, make_route: Callable[..., PaymentRoute]
) -> Callable[..., PaymentPath]:
    """Factory for a payment path over routes with the given fees."""

    def make(*fees: int) -> PaymentPath:
        return PaymentPath(
            id=payment_hash, routes=[make_route(fee=fee) for fee in fees or (10,)]
        )

    return make


@pytest.fixture
def node_client() -> InMemoryNodeClient:
    """An in-memory node client with no configured responses."""
    return InMemoryNodeClient()


@pytest.fixture
def observer() -> RecordingObserver:
    """An observer that records broadcast rows."""
    return RecordingObserver()
