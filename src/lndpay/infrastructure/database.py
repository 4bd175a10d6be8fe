"""Redis connection used by the payment broadcaster."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Protocol, Union

import redis.asyncio as redis


class HasBroadcastSettings(Protocol):
    broadcast_redis_url: Optional[str]


class RedisClient:
    """Lazily connected asyncio Redis client."""

    def __init__(self, settings: HasBroadcastSettings):
        self.settings = settings
        self._redis: Optional[redis.Redis] = None

    def initialize(self) -> None:
        """Create the Redis connection pool. No schema to create."""
        if not self.settings.broadcast_redis_url:
            raise ValueError("Broadcast Redis URL is not configured")
        # Expecting URL like: redis://host:port/0
        self._redis = redis.from_url(
            self.settings.broadcast_redis_url, decode_responses=True
        )

    @asynccontextmanager
    async def get_connection(self) -> AsyncGenerator[redis.Redis, None]:
        """Yield a Redis connection (async client)."""
        if self._redis is None:
            self.initialize()
        assert self._redis is not None
        try:
            yield self._redis
        finally:
            # Keep pooled connection alive; do not close here
            pass

    async def aclose(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None


# Global redis client instance
_redis_client: Union[RedisClient, None] = None


def get_redis_client(settings: HasBroadcastSettings) -> RedisClient:
    """Get or create the Redis client singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient(settings)
    return _redis_client


async def close_redis_client() -> None:
    """Close and forget the Redis client singleton."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
