"""
Redis-backed store for raw feed entries.

Provides key discovery through SCAN and batched reads through MGET over a
redis.asyncio client.
"""

from typing import Optional, Sequence

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..config.defaults import StoreParams
from ..errors import ConfigurationMissingError, FetchError
from ..logging import get_logger
from .base import SnapshotStore

logger = get_logger(__name__)


class RedisSnapshotStore(SnapshotStore):
    """Redis connection scoped to one request."""

    def __init__(self, url: str, password: Optional[str] = None, scan_count: int = 100,
                 client: Optional[redis.Redis] = None):
        self.url = url
        self.password = password
        self.scan_count = scan_count
        self.client = client

    @classmethod
    def from_params(cls, params: StoreParams) -> "RedisSnapshotStore":
        """Create a store from configuration, requiring both credentials."""
        missing = [name for name, value in (("REDIS_URL", params.url),
                                            ("REDIS_PASSWORD", params.password)) if not value]
        if missing:
            raise ConfigurationMissingError("Redis configuration is missing", missing=missing)
        return cls(url=params.url, password=params.password, scan_count=params.scan_count)

    def connect(self) -> redis.Redis:
        """Create the client on first use."""
        if self.client is None:
            self.client = redis.from_url(
                self.url,
                password=self.password,
                decode_responses=True,
            )
        return self.client

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    async def list_keys(self, prefix: str) -> list[str]:
        client = self.connect()
        try:
            keys = [key async for key in client.scan_iter(match=f"{prefix}*", count=self.scan_count)]
        except RedisError as e:
            raise FetchError(f"Key discovery failed for '{prefix}': {e}", operation="scan") from e

        # SCAN may return a key more than once
        return sorted(set(keys))

    async def get_many(self, keys: Sequence[str]) -> list[str]:
        if not keys:
            return []

        client = self.connect()
        try:
            values = await client.mget(list(keys))
        except RedisError as e:
            raise FetchError(f"Batch read failed: {e}", operation="mget", keys=list(keys)) from e

        missing = [key for key, value in zip(keys, values) if value is None]
        if missing:
            raise FetchError(f"Keys without value: {', '.join(missing)}", operation="mget", keys=missing)

        logger.debug("Fetched batch", keys=len(keys))
        return values
