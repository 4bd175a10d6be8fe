"""Classification of node payment responses into payment rows or typed failures.

The functions here are pure: the same response always yields the same result.
Nothing is retried; retry policy belongs to the caller.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Any, Final, Mapping, Optional

from ...domain.channels import encode_chan_id, to_human
from ...domain.entities import PaymentRow, PaymentRowHop
from ...domain.errors import InvalidChannelIdError
from ...domain.results import ErrorKind, Result


CHANNEL_LOCATOR: Final[re.Pattern[str]] = re.compile(r"(\d+[x:]\d+[:x]\d+)", re.I)
CHANNEL_LOCATOR_SPLIT: Final[re.Pattern[str]] = re.compile(r"[:x,]", re.I)

# Keys the route must define even when their value is zero
_ROUTE_TOTALS: Final[tuple[tuple[str, ErrorKind], ...]] = (
    ("total_amt", ErrorKind.EXPECTED_PAYMENT_TOTAL_SENT_AMOUNT),
    ("total_amt_msat", ErrorKind.EXPECTED_PAYMENT_TOTAL_MILLITOKENS),
    ("total_fees", ErrorKind.EXPECTED_ROUTE_FEES_PAID_VALUE),
    ("total_fees_msat", ErrorKind.EXPECTED_ROUTE_FEES_MILLITOKENS),
)


@dataclass(frozen=True)
class ErrorRule:
    """One entry of the ordered payment error table.

    ``exact`` rules compare the whole text, the others look for a substring.
    ``with_channel`` rules report the channel recovered from the text when
    there is one. ``fallback`` names the payload used otherwise: the raw
    ``"error"`` text, the raw ``"route"`` or nothing.
    """

    pattern: str
    kind: ErrorKind
    exact: bool = False
    with_channel: bool = False
    fallback: Optional[str] = None

    def matches(self, payment_error: str) -> bool:
        if self.exact:
            return payment_error == self.pattern
        return self.pattern in payment_error


# First match wins. Some patterns appear inside each other in node errors
# (IncorrectCltvExpiry is part of FinalIncorrectCltvExpiry), so order matters.
PAYMENT_ERROR_RULES: Final[tuple[ErrorRule, ...]] = (
    ErrorRule("UnknownPaymentHash", ErrorKind.UNKNOWN_PAYMENT_HASH, exact=True),
    ErrorRule(
        "payment is in transition",
        ErrorKind.PAYMENT_IS_PENDING_RESOLUTION,
        exact=True,
    ),
    ErrorRule(
        "unable to find a path to destination",
        ErrorKind.UNKNOWN_PATH_TO_DESTINATION,
        exact=True,
    ),
    ErrorRule("UnknownPaymentHash", ErrorKind.UNKNOWN_PAYMENT_HASH),
    ErrorRule(
        "ChannelDisabled",
        ErrorKind.NEXT_HOP_CHANNEL_DISABLED,
        with_channel=True,
        fallback="route",
    ),
    ErrorRule(
        "ExpiryTooFar",
        ErrorKind.EXPIRY_TOO_FAR,
        with_channel=True,
        fallback="error",
    ),
    ErrorRule(
        "ExpiryTooSoon",
        ErrorKind.REJECTED_TOO_NEAR_TIMEOUT,
        with_channel=True,
        fallback="error",
    ),
    ErrorRule(
        "FeeInsufficient",
        ErrorKind.REJECTED_UNACCEPTABLE_FEE,
        with_channel=True,
        fallback="error",
    ),
    ErrorRule("FinalIncorrectCltvExpiry", ErrorKind.EXPIRY_TOO_FAR, fallback="error"),
    ErrorRule(
        "IncorrectCltvExpiry",
        ErrorKind.REJECTED_UNACCEPTABLE_CLTV,
        with_channel=True,
        fallback="error",
    ),
    ErrorRule(
        "TemporaryChannelFailure",
        ErrorKind.TEMPORARY_CHANNEL_FAILURE,
        with_channel=True,
        fallback="error",
    ),
    ErrorRule(
        "TemporaryNodeFailure", ErrorKind.TEMPORARY_NODE_FAILURE, fallback="error"
    ),
    ErrorRule(
        "UnknownNextPeer",
        ErrorKind.UNKNOWN_NEXT_HOP_CHANNEL,
        with_channel=True,
        fallback="error",
    ),
)


def extract_failed_channel(payment_error: Optional[str]) -> Optional[str]:
    """Recover a ``HxIxO`` channel id embedded in free-form error text.

    Best effort: returns None when there is no locator or it does not encode.
    """
    if not payment_error:
        return None

    match = CHANNEL_LOCATOR.search(payment_error)
    if not match:
        return None

    parts = CHANNEL_LOCATOR_SPLIT.split(match.group(1))
    if len(parts) != 3:
        return None

    try:
        block_height, block_index, output_index = (int(part, 10) for part in parts)
        return encode_chan_id(block_height, block_index, output_index).channel
    except (InvalidChannelIdError, ValueError):
        # Unstructured text, nothing more to recover
        return None


def classify_payment_error(
    payment_error: str,
    payment_route: Any = None,
) -> Result[PaymentRow]:
    """Map a non-empty ``payment_error`` onto a typed failure."""
    failed_channel = extract_failed_channel(payment_error)

    for rule in PAYMENT_ERROR_RULES:
        if not rule.matches(payment_error):
            continue

        if rule.with_channel and failed_channel:
            return Result.fail(rule.kind, {"channel": failed_channel})

        if rule.fallback == "route":
            return Result.fail(rule.kind, payment_route)
        if rule.fallback == "error":
            return Result.fail(rule.kind, payment_error)
        return Result.fail(rule.kind)

    return Result.fail(ErrorKind.UNABLE_TO_COMPLETE_PAYMENT, payment_error)


def _is_defined(route: Mapping[str, Any], key: str) -> bool:
    return key in route and route[key] is not None


def build_payment_row(
    payment_route: Mapping[str, Any], payment_preimage: bytes
) -> PaymentRow:
    """Assemble the payment row from an already validated route and preimage."""
    return PaymentRow(
        fee=int(str(payment_route["total_fees"]), 10),
        fee_mtokens=str(payment_route["total_fees_msat"]),
        hops=[
            PaymentRowHop(
                channel=to_human(hop["chan_id"]),
                channel_capacity=int(str(hop["chan_capacity"]), 10),
                fee_mtokens=str(hop["fee_msat"]),
                forward_mtokens=str(hop["amt_to_forward_msat"]),
                timeout=int(hop["expiry"]),
            )
            for hop in payment_route["hops"]
        ],
        id=hashlib.sha256(payment_preimage).hexdigest(),
        mtokens=str(payment_route["total_amt_msat"]),
        secret=payment_preimage.hex(),
        tokens=int(str(payment_route["total_amt"]), 10),
    )


def classify_payment_response(
    response: Optional[Mapping[str, Any]],
) -> Result[PaymentRow]:
    """Turn a node send response into a payment row or a typed failure.

    Args:
        response: Mapping with ``payment_error``, ``payment_route`` and
            ``payment_preimage``, or None when the node returned nothing

    Returns:
        ``Result`` holding either a ``PaymentRow`` or a ``PaymentFailure``
    """
    if response is None:
        return Result.fail(ErrorKind.EXPECTED_RESPONSE_WHEN_SENDING_PAYMENT)

    payment_error = response.get("payment_error")
    if payment_error:
        return classify_payment_error(str(payment_error), response.get("payment_route"))

    payment_route = response.get("payment_route")
    if not payment_route or not isinstance(payment_route, Mapping):
        return Result.fail(ErrorKind.EXPECTED_PAYMENT_ROUTE_INFORMATION, dict(response))

    hops = payment_route.get("hops")
    if not isinstance(hops, (list, tuple)) or not hops:
        return Result.fail(ErrorKind.EXPECTED_PAYMENT_ROUTE_HOPS)

    payment_preimage = response.get("payment_preimage")
    if not isinstance(payment_preimage, (bytes, bytearray)):
        return Result.fail(ErrorKind.EXPECTED_PAYMENT_PREIMAGE_BUFFER)

    for key, kind in _ROUTE_TOTALS:
        if not _is_defined(payment_route, key):
            return Result.fail(kind)

    try:
        for hop in hops:
            to_human(hop.get("chan_id"))
    except (InvalidChannelIdError, AttributeError) as e:
        return Result.fail(ErrorKind.EXPECTED_NUMERIC_CHANNEL_ID, str(e))

    try:
        row = build_payment_row(payment_route, bytes(payment_preimage))
    except (KeyError, TypeError, ValueError) as e:
        return Result.fail(ErrorKind.EXPECTED_NUMERIC_PAYMENT_AMOUNTS, str(e))

    return Result.ok(row)
