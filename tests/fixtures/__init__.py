"""Test fixtures for in-memory implementations."""

from .channels import channel_number
from .in_memory_node_client import InMemoryNodeClient
from .recording_observer import FailingObserver, RecordingObserver

__all__ = [
    "FailingObserver",
    "InMemoryNodeClient",
    "RecordingObserver",
    "channel_number",
]
