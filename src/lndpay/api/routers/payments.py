"""Payment execution API routes."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, status
from prometheus_client import Counter, Histogram

from ...application.dtos import ExecutePaymentDTO
from ...application.use_cases.payment import PaymentService
from ...domain.entities import PaymentRow
from ..dependencies import get_payment_service
from ..errors import failure_to_http

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


payment_executions_total = Counter(
    "payment_executions_total",
    "Total payment executions processed",
    ["status"],
)

payment_failures_total = Counter(
    "payment_failures_total",
    "Payment executions that ended in a classified failure",
    ["kind"],
)

payment_execution_duration_seconds = Histogram(
    "payment_execution_duration_seconds",
    "Wall time to execute a payment",
    ["status"],
)


@router.post("/", response_model=PaymentRow, status_code=status.HTTP_201_CREATED)
async def execute_payment(
    payment_data: ExecutePaymentDTO,
    payment_service: PaymentService = Depends(get_payment_service),
) -> PaymentRow:
    """Execute a payment over a fixed path or a BOLT 11 payment request."""
    start_time = time.perf_counter()
    try:
        result = await payment_service.execute_payment(payment_data)
    except Exception as e:
        logger.exception("Failed to execute payment")
        payment_executions_total.labels(status="server_error").inc()
        elapsed = time.perf_counter() - start_time
        payment_execution_duration_seconds.labels(status="server_error").observe(
            elapsed
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to execute payment: {str(e)}",
        )

    elapsed = time.perf_counter() - start_time
    if result.error is not None:
        label = "client_error" if result.error.code < 500 else "payment_error"
        payment_executions_total.labels(status=label).inc()
        payment_failures_total.labels(kind=result.error.kind.value).inc()
        payment_execution_duration_seconds.labels(status=label).observe(elapsed)
        raise failure_to_http(result.error)

    payment_executions_total.labels(status="success").inc()
    payment_execution_duration_seconds.labels(status="success").observe(elapsed)
    return result.value
