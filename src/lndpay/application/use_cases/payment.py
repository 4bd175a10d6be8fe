"""Use cases for executing Lightning payments."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...domain.entities import PaymentPath, PaymentRow
from ...domain.errors import InvalidChannelIdError
from ...domain.results import ErrorKind, Result
from ...domain.shared import LightningNodeProtocol, PaymentObserverProtocol
from ..dtos import ExecutePaymentDTO
from .payment_validators import (
    build_send_payment_request,
    build_send_to_route_request,
    filter_routes_by_max_fee,
    validate_route_channel_ids,
)
from .response_classifier import classify_payment_response

logger = logging.getLogger(__name__)


def _exposes(node: Any, *methods: str) -> bool:
    return node is not None and all(
        callable(getattr(node, method, None)) for method in methods
    )


class PaymentService:
    """Service for paying over explicit routes or BOLT 11 payment requests."""

    def __init__(
        self,
        node: LightningNodeProtocol,
        *,
        observer: Optional[PaymentObserverProtocol] = None,
    ):
        self.node = node
        self.observer = observer

    async def execute_payment(self, dto: ExecutePaymentDTO) -> Result[PaymentRow]:
        """Execute a payment. Exactly one of ``dto.path`` or ``dto.request`` is used."""
        if dto.path is None and not dto.request:
            return Result.fail(ErrorKind.EXPECTED_PATH_OR_REQUEST_TO_PAY)

        if dto.path is not None and dto.request:
            return Result.fail(ErrorKind.UNEXPECTED_PATH_AND_REQUEST_TOGETHER)

        if not _exposes(self.node, "send_payment_sync", "send_to_route_sync"):
            return Result.fail(ErrorKind.EXPECTED_LND_FOR_PAYMENT_EXECUTION)

        if dto.path is None:
            return await self._pay_payment_request(dto)

        return await self._pay_path(dto.path, dto.fee)

    async def _pay_path(
        self, path: PaymentPath, max_fee: Optional[int]
    ) -> Result[PaymentRow]:
        if not path.id:
            return Result.fail(ErrorKind.EXPECTED_PAYMENT_HASH_STRING)

        if not path.routes:
            return Result.fail(ErrorKind.EXPECTED_ROUTES_TO_EXECUTE_PAYMENT_OVER)

        try:
            validate_route_channel_ids(path.routes)
        except InvalidChannelIdError as e:
            return Result.fail(ErrorKind.EXPECTED_VALID_ROUTE_CHANNEL_IDS, str(e))

        routes = filter_routes_by_max_fee(path.routes, max_fee)

        try:
            request = build_send_to_route_request(path.id, routes)
        except ValueError:
            return Result.fail(ErrorKind.EXPECTED_PAYMENT_HASH_STRING, path.id)

        try:
            response = await self.node.send_to_route_sync(request)
        except Exception as e:
            logger.warning("Send to route failed for %s: %s", path.id, e)
            return Result.fail(ErrorKind.PAYMENT_ERROR, str(e))

        return self._finalize(classify_payment_response(response), path.id)

    async def _pay_payment_request(self, dto: ExecutePaymentDTO) -> Result[PaymentRow]:
        assert dto.request is not None

        try:
            request = build_send_payment_request(
                dto.request, tokens=dto.tokens, max_fee=dto.fee, out=dto.out
            )
        except InvalidChannelIdError as e:
            return Result.fail(ErrorKind.EXPECTED_VALID_OUTGOING_CHANNEL_ID, str(e))

        try:
            response = await self.node.send_payment_sync(request)
        except Exception as e:
            logger.warning("Send payment failed: %s", e)
            return Result.fail(ErrorKind.PAYMENT_ERROR, str(e))

        return self._finalize(classify_payment_response(response), None)

    def _finalize(
        self, result: Result[PaymentRow], payment_hash: Optional[str]
    ) -> Result[PaymentRow]:
        if not result.is_ok:
            assert result.error is not None
            logger.info(
                "Payment %s failed: %s %s",
                payment_hash or "by request",
                result.error.code,
                result.error.kind.value,
            )
            return result

        row = result.value
        logger.debug("Payment %s settled with fee %s", row.id, row.fee)

        if self.observer is not None:
            try:
                self.observer.broadcast(row)
            except Exception:
                logger.warning("Failed to broadcast payment %s", row.id, exc_info=True)

        return result
