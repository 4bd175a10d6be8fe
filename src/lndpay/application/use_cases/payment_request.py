"""Use case for decoding BOLT 11 payment requests."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...domain.entities import DecodedPaymentRequest
from ...domain.results import ErrorKind, Result
from ...domain.shared import LightningNodeProtocol
from ..dtos import DecodePaymentRequestDTO

logger = logging.getLogger(__name__)


def parse_tokens(value: Any) -> Optional[int]:
    """Parse a non-negative integer token amount, or return None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip(), 10)
    return None


class PaymentRequestService:
    """Service for decoding payment requests through the node."""

    def __init__(self, node: LightningNodeProtocol):
        self.node = node

    async def decode_payment_request(
        self, dto: DecodePaymentRequestDTO
    ) -> Result[DecodedPaymentRequest]:
        """Decode a payment request into its destination, hash and tokens."""
        if self.node is None or not callable(getattr(self.node, "decode_pay_req", None)):
            return Result.fail(ErrorKind.EXPECTED_LND_TO_DECODE_PAYMENT_REQUEST)

        if not dto.payment_request:
            return Result.fail(ErrorKind.EXPECTED_PAYMENT_REQUEST_TO_DECODE)

        try:
            response = await self.node.decode_pay_req(dto.payment_request)
        except Exception as e:
            logger.warning("Decoding payment request failed: %s", e)
            return Result.fail(ErrorKind.UNEXPECTED_ERROR_DECODING_PAYMENT_REQUEST, str(e))

        if not response:
            return Result.fail(ErrorKind.EXPECTED_RESPONSE_FOR_DECODE)

        if not response.get("destination"):
            return Result.fail(ErrorKind.EXPECTED_DESTINATION, dict(response))

        if not response.get("payment_hash"):
            return Result.fail(ErrorKind.EXPECTED_PAYMENT_HASH, dict(response))

        tokens = parse_tokens(response.get("num_satoshis"))
        if tokens is None:
            return Result.fail(ErrorKind.EXPECTED_TOKENS, dict(response))

        return Result.ok(
            DecodedPaymentRequest(
                destination=response["destination"],
                id=response["payment_hash"],
                tokens=tokens,
            )
        )
