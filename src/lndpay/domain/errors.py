"""Domain-specific exceptions."""

from __future__ import annotations


class InvalidChannelIdError(ValueError):
    """Raised when a channel id cannot be converted between its forms."""


class NodeClientError(Exception):
    """Raised by node client implementations when the node call itself fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
