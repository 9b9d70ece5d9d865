"""Base class for stores holding raw feed entries."""

from abc import ABC, abstractmethod
from typing import Sequence


class SnapshotStore(ABC):
    """Read-only view of the cache populated by the feed."""

    @abstractmethod
    async def list_keys(self, prefix: str) -> list[str]:
        """
        Discover the keys starting with prefix.

        Args:
            prefix: Key prefix, e.g. "CBOT:ZS"

        Returns:
            Matching keys, sorted
        """
        pass

    @abstractmethod
    async def get_many(self, keys: Sequence[str]) -> list[str]:
        """
        Fetch the raw values of keys in one batch.

        Args:
            keys: Keys to read

        Returns:
            Values in the same order as keys

        Raises:
            FetchError: If the store fails or a key has no value
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store."""

    async def __aenter__(self) -> "SnapshotStore":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
