"""Discriminated results and the failure taxonomy returned by use cases."""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator


class ErrorCategory(str, Enum):
    """Broad class of a failure, which tells the caller what can be retried."""

    INPUT = "input"
    TRANSPORT = "transport"
    CLASSIFICATION = "classification"
    RESPONSE_SHAPE = "response_shape"


class ErrorKind(str, Enum):
    """Symbolic failure kinds surfaced at the boundary."""

    # Caller arguments
    EXPECTED_PATH_OR_REQUEST_TO_PAY = "ExpectedPathOrRequestToPay"
    UNEXPECTED_PATH_AND_REQUEST_TOGETHER = "UnexpectedPathAndRequestTogether"
    EXPECTED_LND_FOR_PAYMENT_EXECUTION = "ExpectedLndForPaymentExecution"
    EXPECTED_PAYMENT_HASH_STRING = "ExpectedPaymentHashStringToExecutePayment"
    EXPECTED_ROUTES_TO_EXECUTE_PAYMENT_OVER = "ExpectedRoutesToExecutePaymentOver"
    EXPECTED_VALID_ROUTE_CHANNEL_IDS = "ExpectedValidRouteChannelIds"
    EXPECTED_VALID_OUTGOING_CHANNEL_ID = "ExpectedValidOutgoingChannelId"
    EXPECTED_LND_TO_DECODE_PAYMENT_REQUEST = "ExpectedLndToDecodePaymentRequest"
    EXPECTED_PAYMENT_REQUEST_TO_DECODE = "ExpectedPaymentRequestToDecode"

    # Node call
    PAYMENT_ERROR = "PaymentError"
    EXPECTED_RESPONSE_WHEN_SENDING_PAYMENT = "ExpectedResponseWhenSendingPayment"
    UNEXPECTED_ERROR_DECODING_PAYMENT_REQUEST = "UnexpectedErrorDecodingPaymentRequest"
    EXPECTED_RESPONSE_FOR_DECODE = "ExpectedResponseForDecodePaymentRequest"

    # Payment error text
    UNKNOWN_PAYMENT_HASH = "UnknownPaymentHash"
    PAYMENT_IS_PENDING_RESOLUTION = "PaymentIsPendingResolution"
    UNKNOWN_PATH_TO_DESTINATION = "UnknownPathToDestination"
    NEXT_HOP_CHANNEL_DISABLED = "NextHopChannelDisabled"
    EXPIRY_TOO_FAR = "ExpiryTooFar"
    REJECTED_TOO_NEAR_TIMEOUT = "RejectedTooNearTimeout"
    REJECTED_UNACCEPTABLE_FEE = "RejectedUnacceptableFee"
    REJECTED_UNACCEPTABLE_CLTV = "RejectedUnacceptableCltv"
    TEMPORARY_CHANNEL_FAILURE = "TemporaryChannelFailure"
    TEMPORARY_NODE_FAILURE = "TemporaryNodeFailure"
    UNKNOWN_NEXT_HOP_CHANNEL = "UnknownNextHopChannel"
    UNABLE_TO_COMPLETE_PAYMENT = "UnableToCompletePayment"

    # Node response shape
    EXPECTED_PAYMENT_ROUTE_INFORMATION = "ExpectedPaymentRouteInformation"
    EXPECTED_PAYMENT_ROUTE_HOPS = "ExpectedPaymentRouteHops"
    EXPECTED_PAYMENT_PREIMAGE_BUFFER = "ExpectedPaymentPreimageBuffer"
    EXPECTED_PAYMENT_TOTAL_SENT_AMOUNT = "ExpectedPaymentTotalSentAmount"
    EXPECTED_PAYMENT_TOTAL_MILLITOKENS = "ExpectedPaymentTotalMillitokensSentAmount"
    EXPECTED_ROUTE_FEES_PAID_VALUE = "ExpectedRouteFeesPaidValue"
    EXPECTED_ROUTE_FEES_MILLITOKENS = "ExpectedRouteFeesMillitokensPaidValue"
    EXPECTED_NUMERIC_CHANNEL_ID = "ExpectedNumericChannelIdInPaymentResponse"
    EXPECTED_NUMERIC_PAYMENT_AMOUNTS = "ExpectedNumericAmountsInPaymentResponse"
    EXPECTED_DESTINATION = "ExpectedDestinationInDecodedPaymentRequest"
    EXPECTED_PAYMENT_HASH = "ExpectedPaymentHashInDecodedPaymentRequest"
    EXPECTED_TOKENS = "ExpectedTokensInDecodedPaymentRequest"


_INPUT_KINDS = frozenset(
    {
        ErrorKind.EXPECTED_PATH_OR_REQUEST_TO_PAY,
        ErrorKind.UNEXPECTED_PATH_AND_REQUEST_TOGETHER,
        ErrorKind.EXPECTED_LND_FOR_PAYMENT_EXECUTION,
        ErrorKind.EXPECTED_PAYMENT_HASH_STRING,
        ErrorKind.EXPECTED_ROUTES_TO_EXECUTE_PAYMENT_OVER,
        ErrorKind.EXPECTED_VALID_ROUTE_CHANNEL_IDS,
        ErrorKind.EXPECTED_VALID_OUTGOING_CHANNEL_ID,
        ErrorKind.EXPECTED_LND_TO_DECODE_PAYMENT_REQUEST,
        ErrorKind.EXPECTED_PAYMENT_REQUEST_TO_DECODE,
    }
)

_TRANSPORT_KINDS = frozenset(
    {
        ErrorKind.PAYMENT_ERROR,
        ErrorKind.EXPECTED_RESPONSE_WHEN_SENDING_PAYMENT,
        ErrorKind.UNEXPECTED_ERROR_DECODING_PAYMENT_REQUEST,
        ErrorKind.EXPECTED_RESPONSE_FOR_DECODE,
    }
)

_CLASSIFICATION_KINDS = frozenset(
    {
        ErrorKind.UNKNOWN_PAYMENT_HASH,
        ErrorKind.PAYMENT_IS_PENDING_RESOLUTION,
        ErrorKind.UNKNOWN_PATH_TO_DESTINATION,
        ErrorKind.NEXT_HOP_CHANNEL_DISABLED,
        ErrorKind.EXPIRY_TOO_FAR,
        ErrorKind.REJECTED_TOO_NEAR_TIMEOUT,
        ErrorKind.REJECTED_UNACCEPTABLE_FEE,
        ErrorKind.REJECTED_UNACCEPTABLE_CLTV,
        ErrorKind.TEMPORARY_CHANNEL_FAILURE,
        ErrorKind.TEMPORARY_NODE_FAILURE,
        ErrorKind.UNKNOWN_NEXT_HOP_CHANNEL,
        ErrorKind.UNABLE_TO_COMPLETE_PAYMENT,
    }
)

_STATUS_CODES = {
    ErrorKind.UNKNOWN_PAYMENT_HASH: 404,
    ErrorKind.PAYMENT_IS_PENDING_RESOLUTION: 409,
}


def category_of(kind: ErrorKind) -> ErrorCategory:
    """Return the category a failure kind belongs to."""
    if kind in _INPUT_KINDS:
        return ErrorCategory.INPUT
    if kind in _TRANSPORT_KINDS:
        return ErrorCategory.TRANSPORT
    if kind in _CLASSIFICATION_KINDS:
        return ErrorCategory.CLASSIFICATION
    return ErrorCategory.RESPONSE_SHAPE


def status_code_of(kind: ErrorKind) -> int:
    """Return the default status-like code for a failure kind."""
    if kind in _STATUS_CODES:
        return _STATUS_CODES[kind]
    if kind in _INPUT_KINDS:
        return 400
    return 503


class PaymentFailure(BaseModel):
    """A typed failure: status-like code, symbolic kind and optional context."""

    model_config = ConfigDict(frozen=True)

    code: int
    kind: ErrorKind
    category: ErrorCategory
    details: Any = None

    @classmethod
    def of(cls, kind: ErrorKind, details: Any = None) -> "PaymentFailure":
        """Build a failure with the default code and category for ``kind``."""
        return cls(
            code=status_code_of(kind),
            kind=kind,
            category=category_of(kind),
            details=details,
        )

    def as_tuple(self) -> tuple:
        """Return ``(code, kind)`` or ``(code, kind, details)`` when present."""
        if self.details is None:
            return (self.code, self.kind.value)
        return (self.code, self.kind.value, self.details)


T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Either a value or a failure, never both."""

    model_config = ConfigDict(frozen=True)

    value: Optional[T] = None
    error: Optional[PaymentFailure] = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "Result[T]":
        if (self.value is None) == (self.error is None):
            raise ValueError("Result must carry exactly one of value or error")
        return self

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, details: Any = None) -> "Result[T]":
        return cls(error=PaymentFailure.of(kind, details))

    @property
    def is_ok(self) -> bool:
        return self.error is None
