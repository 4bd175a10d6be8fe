"""Translation of use case failures into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder

from ..domain.results import PaymentFailure


def failure_to_http(failure: PaymentFailure) -> HTTPException:
    """Build an ``HTTPException`` carrying the failure kind and its context."""
    details = jsonable_encoder(
        failure.details, custom_encoder={bytes: lambda value: value.hex()}
    )
    return HTTPException(
        status_code=failure.code,
        detail={
            "kind": failure.kind.value,
            "category": failure.category.value,
            "details": details,
        },
    )
