"""Protocol interfaces for the Lightning node client and payment observers.

These protocols define the contracts that collaborator implementations must
satisfy. Use cases depend only on them, so tests can inject in-memory fakes.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities import PaymentRow


NodeResponse = Mapping[str, Any]


class LightningNodeProtocol(Protocol):
    """Protocol defining the payment capabilities of a Lightning node client.

    Responses use the node's wire field names. Byte fields such as
    ``payment_preimage`` are returned as ``bytes``. Implementations raise
    when the call itself fails.
    """

    async def decode_pay_req(self, pay_req: str) -> Optional[NodeResponse]:
        """Decode a BOLT 11 payment request.

        Args:
            pay_req: Serialized payment request

        Returns:
            Mapping with ``destination``, ``payment_hash`` and ``num_satoshis``
        """
        ...

    async def send_to_route_sync(
        self, request: Mapping[str, Any]
    ) -> Optional[NodeResponse]:
        """Send a payment over explicit routes and wait for the outcome.

        Args:
            request: ``payment_hash``, ``payment_hash_string`` and ``routes``

        Returns:
            Mapping with ``payment_error``, ``payment_preimage`` and ``payment_route``
        """
        ...

    async def send_payment_sync(
        self, request: Mapping[str, Any]
    ) -> Optional[NodeResponse]:
        """Pay a BOLT 11 payment request and wait for the outcome.

        Args:
            request: ``payment_request`` plus optional ``amt``, ``fee_limit``
                and ``outgoing_chan_id``

        Returns:
            Same shape as ``send_to_route_sync``
        """
        ...


class PaymentObserverProtocol(Protocol):
    """Receives finalized payment rows for side-channel notification."""

    def broadcast(self, row: "PaymentRow") -> None:
        """Notify about a settled payment. Must return without waiting."""
        ...
