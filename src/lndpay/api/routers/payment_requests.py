"""Payment request API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from ...application.dtos import DecodePaymentRequestDTO
from ...application.use_cases.payment_request import PaymentRequestService
from ...domain.entities import DecodedPaymentRequest
from ..dependencies import get_payment_request_service
from ..errors import failure_to_http

router = APIRouter(prefix="/payment-requests", tags=["payment-requests"])


@router.get("/{payment_request}", response_model=DecodedPaymentRequest)
async def decode_payment_request(
    payment_request: str = Path(..., description="BOLT 11 payment request"),
    service: PaymentRequestService = Depends(get_payment_request_service),
) -> DecodedPaymentRequest:
    """Decode a payment request into destination, hash and tokens."""
    result = await service.decode_payment_request(
        DecodePaymentRequestDTO(payment_request=payment_request)
    )
    if result.error is not None:
        raise failure_to_http(result.error)
    return result.value
