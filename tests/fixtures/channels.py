"""Channel id helpers for building node responses."""

from __future__ import annotations


def channel_number(block_height: int, block_index: int, output_index: int) -> str:
    """Numeric channel id for the given components, as LND sends it."""
    return str(block_height << 40 | block_index << 16 | output_index)
