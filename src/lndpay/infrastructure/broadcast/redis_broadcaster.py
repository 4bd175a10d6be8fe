"""Redis pub/sub implementation of ``PaymentObserverProtocol``."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncContextManager, Protocol, Set

from ...domain.entities import PaymentRow

logger = logging.getLogger(__name__)


class HasConnection(Protocol):
    def get_connection(self) -> AsyncContextManager[Any]: ...


class RedisPaymentBroadcaster:
    """Publishes settled payment rows as JSON on a Redis channel.

    ``broadcast`` schedules the publish on the running loop and returns at
    once. Publish failures are logged and never reach the payer.
    """

    def __init__(self, redis_client: HasConnection, channel: str):
        self._redis_client = redis_client
        self._channel = channel
        self._pending: Set[asyncio.Task[None]] = set()

    def broadcast(self, row: PaymentRow) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, payment %s not broadcast", row.id)
            return

        task = loop.create_task(self._publish(row))
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    async def _publish(self, row: PaymentRow) -> None:
        async with self._redis_client.get_connection() as conn:
            await conn.publish(self._channel, row.model_dump_json())

    def _on_done(self, task: "asyncio.Task[None]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Failed to publish payment row: %s", exc)

    async def drain(self) -> None:
        """Wait for scheduled publishes to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
