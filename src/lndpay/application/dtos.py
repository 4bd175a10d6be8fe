"""Data Transfer Objects for the payment application layer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.entities import PaymentPath


class ExecutePaymentDTO(BaseModel):
    """DTO for executing a payment over a fixed path or a payment request."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "fee": 20,
                "path": {
                    "id": "a" * 64,
                    "routes": [
                        {
                            "fee": 10,
                            "fee_mtokens": "10000",
                            "hops": [
                                {
                                    "channel": "100x5x2",
                                    "channel_capacity": 500000,
                                    "fee": 10,
                                    "fee_mtokens": "10000",
                                    "forward": 1000,
                                    "forward_mtokens": "1000000",
                                    "timeout": 600000,
                                }
                            ],
                            "mtokens": "1010000",
                            "timeout": 600040,
                            "tokens": 1010,
                        }
                    ],
                },
            }
        }
    )

    fee: Optional[int] = Field(
        None, ge=0, description="Maximum additional fee tokens to pay"
    )
    out: Optional[str] = Field(
        None, description="Force payment through this outbound channel id"
    )
    path: Optional[PaymentPath] = None
    request: Optional[str] = Field(None, description="BOLT 11 payment request")
    tokens: Optional[int] = Field(
        None, ge=0, description="Tokens to pay to a zero amount payment request"
    )


class DecodePaymentRequestDTO(BaseModel):
    """DTO for decoding a payment request."""

    payment_request: Optional[str] = None
