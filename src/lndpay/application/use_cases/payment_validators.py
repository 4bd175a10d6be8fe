"""Pure validation and request-building functions for payment execution.

These functions contain the route rules that can be tested in isolation
without a node client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ...domain.channels import to_numeric
from ...domain.entities import PaymentRoute


def validate_route_channel_ids(routes: Sequence[PaymentRoute]) -> None:
    """Validate that every hop channel converts to its numeric form.

    Raises:
        InvalidChannelIdError: On the first malformed hop channel.
    """
    for route in routes:
        for hop in route.hops:
            to_numeric(hop.channel)


def filter_routes_by_max_fee(
    routes: Sequence[PaymentRoute], max_fee: Optional[int]
) -> List[PaymentRoute]:
    """Drop routes whose total fee exceeds ``max_fee``. Keeps all when unset."""
    if max_fee is None:
        return list(routes)
    return [route for route in routes if route.fee <= max_fee]


def _route_to_wire(route: PaymentRoute) -> Dict[str, Any]:
    return {
        "hops": [
            {
                "amt_to_forward": str(hop.forward),
                "amt_to_forward_msat": hop.forward_mtokens,
                "chan_id": to_numeric(hop.channel),
                "chan_capacity": str(hop.channel_capacity),
                "expiry": hop.timeout,
                "fee": str(hop.fee),
                "fee_msat": hop.fee_mtokens,
                "pub_key": hop.public_key or None,
            }
            for hop in route.hops
        ],
        "total_amt": str(route.tokens),
        "total_amt_msat": route.mtokens,
        "total_fees": str(route.fee),
        "total_fees_msat": route.fee_mtokens,
        "total_time_lock": route.timeout,
    }


def build_send_to_route_request(
    payment_hash: str, routes: Sequence[PaymentRoute]
) -> Dict[str, Any]:
    """Build the node send-to-route request for already validated routes.

    Raises:
        ValueError: If ``payment_hash`` is not hex.
    """
    return {
        "payment_hash": bytes.fromhex(payment_hash),
        "payment_hash_string": payment_hash,
        "routes": [_route_to_wire(route) for route in routes],
    }


def build_send_payment_request(
    request: str,
    *,
    tokens: Optional[int] = None,
    max_fee: Optional[int] = None,
    out: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the node send-payment request for a BOLT 11 payment request.

    Raises:
        InvalidChannelIdError: If ``out`` is not a valid channel id.
    """
    payload: Dict[str, Any] = {"payment_request": request}
    if tokens is not None:
        payload["amt"] = str(tokens)
    if max_fee is not None:
        payload["fee_limit"] = {"fixed": str(max_fee)}
    if out is not None:
        payload["outgoing_chan_id"] = to_numeric(out)
    return payload
