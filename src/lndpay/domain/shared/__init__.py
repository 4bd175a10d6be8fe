"""Shared domain utilities.

This package is domain-accessible and should not depend on application code.
"""

from .node_client_protocol import (
    LightningNodeProtocol,
    NodeResponse,
    PaymentObserverProtocol,
)

__all__ = ["LightningNodeProtocol", "NodeResponse", "PaymentObserverProtocol"]
