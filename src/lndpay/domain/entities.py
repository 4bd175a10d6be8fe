"""Payment domain entities: routes, hops, payment rows and decoded requests."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RowType(str, Enum):
    """Type tags carried by records returned to callers."""

    CHANNEL_TRANSACTION = "channel_transaction"
    PAYMENT_REQUEST = "payment_request"


class Hop(BaseModel):
    """One channel traversal of a route, as supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    channel: str = Field(..., description="Standard format channel id")
    channel_capacity: int = Field(..., ge=0)
    fee: int = Field(..., ge=0)
    fee_mtokens: str
    forward: int = Field(..., ge=0)
    forward_mtokens: str
    public_key: Optional[str] = None
    timeout: int = Field(..., ge=0, description="Timeout block height")


class PaymentRoute(BaseModel):
    """A candidate route with its aggregate amounts."""

    model_config = ConfigDict(frozen=True)

    fee: int = Field(..., ge=0)
    fee_mtokens: str
    hops: List[Hop] = Field(..., min_length=1)
    mtokens: str
    timeout: int = Field(..., ge=0, description="Expiration block height")
    tokens: int = Field(..., ge=0)


class PaymentPath(BaseModel):
    """Payment hash plus candidate routes to pay it over."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Payment hash hex string")
    routes: List[PaymentRoute] = Field(default_factory=list)


class PaymentRowHop(BaseModel):
    """A hop of a settled payment, reshaped from the node response."""

    model_config = ConfigDict(frozen=True)

    channel: str
    channel_capacity: int
    fee_mtokens: str
    forward_mtokens: str
    timeout: int


class PaymentRow(BaseModel):
    """Record of a successfully executed outgoing payment."""

    model_config = ConfigDict(frozen=True)

    fee: int
    fee_mtokens: str
    hops: List[PaymentRowHop]
    id: str = Field(..., description="sha256 of the preimage, hex encoded")
    is_confirmed: bool = True
    is_outgoing: bool = True
    mtokens: str
    secret: str = Field(..., description="Payment preimage hex string")
    tokens: int
    type: RowType = RowType.CHANNEL_TRANSACTION


class DecodedPaymentRequest(BaseModel):
    """Normalized view of a decoded BOLT 11 payment request."""

    model_config = ConfigDict(frozen=True)

    destination: str
    id: str
    tokens: int
    type: RowType = RowType.PAYMENT_REQUEST
