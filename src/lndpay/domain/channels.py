"""Short channel id codec.

A channel id has two representations:

- numeric: the 64-bit integer LND uses on the wire (``chan_id``), carried as a
  decimal string to avoid precision loss.
- human: ``"{block_height}x{block_index}x{output_index}"`` as in BOLT 7.

The numeric form packs the three components as
``block_height << 40 | block_index << 16 | output_index``.
"""

from __future__ import annotations

import re
from typing import Final, Union

from pydantic import BaseModel

from .errors import InvalidChannelIdError


BLOCK_HEIGHT_BITS: Final[int] = 24
BLOCK_INDEX_BITS: Final[int] = 24
OUTPUT_INDEX_BITS: Final[int] = 16

MAX_BLOCK_HEIGHT: Final[int] = (1 << BLOCK_HEIGHT_BITS) - 1
MAX_BLOCK_INDEX: Final[int] = (1 << BLOCK_INDEX_BITS) - 1
MAX_OUTPUT_INDEX: Final[int] = (1 << OUTPUT_INDEX_BITS) - 1
MAX_CHANNEL_NUMBER: Final[int] = (1 << 64) - 1

_HUMAN_CHANNEL: Final[re.Pattern[str]] = re.compile(r"^(\d+)[x:](\d+)[x:](\d+)$")
_DECIMAL: Final[re.Pattern[str]] = re.compile(r"^\d+$")


class ChannelId(BaseModel):
    """A channel id in all of its representations."""

    channel: str
    id: str
    number: str


def _check_components(block_height: int, block_index: int, output_index: int) -> None:
    for name, value, limit in (
        ("block height", block_height, MAX_BLOCK_HEIGHT),
        ("block index", block_index, MAX_BLOCK_INDEX),
        ("output index", output_index, MAX_OUTPUT_INDEX),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidChannelIdError(f"Expected numeric {name}, got {value!r}")
        if value < 0 or value > limit:
            raise InvalidChannelIdError(f"Channel {name} {value} is out of range")


def encode_chan_id(block_height: int, block_index: int, output_index: int) -> ChannelId:
    """Encode channel components into a ``ChannelId``.

    Raises:
        InvalidChannelIdError: If a component is not an integer or does not
            fit in its bit width.
    """
    _check_components(block_height, block_index, output_index)

    number = (
        (block_height << (BLOCK_INDEX_BITS + OUTPUT_INDEX_BITS))
        | (block_index << OUTPUT_INDEX_BITS)
        | output_index
    )

    return ChannelId(
        channel=f"{block_height}x{block_index}x{output_index}",
        id=f"{number:016x}",
        number=str(number),
    )


def to_numeric(channel: str) -> str:
    """Convert a human channel id into its numeric decimal string.

    Accepts ``HxIxO`` and the colon separated ``H:I:O`` form.

    Raises:
        InvalidChannelIdError: If the channel is in neither form.
    """
    if not isinstance(channel, str):
        raise InvalidChannelIdError(f"Expected channel id string, got {channel!r}")

    match = _HUMAN_CHANNEL.match(channel)
    if not match:
        raise InvalidChannelIdError(f"Malformed channel id: {channel!r}")

    block_height, block_index, output_index = (int(part) for part in match.groups())

    return encode_chan_id(block_height, block_index, output_index).number


def to_human(number: Union[int, str]) -> str:
    """Convert a numeric channel id (int or decimal string) into ``HxIxO`` form.

    Raises:
        InvalidChannelIdError: If the value is not an unsigned 64-bit integer.
    """
    if isinstance(number, bool):
        raise InvalidChannelIdError(f"Expected numeric channel id, got {number!r}")

    if isinstance(number, str):
        if not _DECIMAL.match(number):
            raise InvalidChannelIdError(f"Expected numeric channel id, got {number!r}")
        value = int(number)
    elif isinstance(number, int):
        value = number
    else:
        raise InvalidChannelIdError(f"Expected numeric channel id, got {number!r}")

    if value < 0 or value > MAX_CHANNEL_NUMBER:
        raise InvalidChannelIdError(f"Channel number {value} is out of range")

    block_height = value >> (BLOCK_INDEX_BITS + OUTPUT_INDEX_BITS)
    block_index = (value >> OUTPUT_INDEX_BITS) & MAX_BLOCK_INDEX
    output_index = value & MAX_OUTPUT_INDEX

    return f"{block_height}x{block_index}x{output_index}"
