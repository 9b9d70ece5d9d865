"""
Key-value store access for raw feed entries.
"""
from .base import SnapshotStore
from .redis_store import RedisSnapshotStore

__all__ = ["SnapshotStore", "RedisSnapshotStore"]
