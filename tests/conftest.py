"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone
from typing import Dict, List, Sequence

from cbot_app.config.defaults import get_default_config
from cbot_app.errors import FetchError
from cbot_app.service import MarketDataService
from cbot_app.store.base import SnapshotStore


SOYBEAN_ENTRIES = [
    "ZSF25|JAN/25|1002.25S|1001.50|1010.00|995.75|998.00|1001.50|512345|10234|0.75|-1.2345|-8.5|1714564800000",
    "ZSH25|MAR/25|1012.00|1011.25|1020.50|1005.00|1008.25|1010.75|312000|8123|-1.25|2.5|3.1|1714564700000",
]

CORN_ENTRIES = [
    "ZCH25|MAR/25|452.50|452.00|455.75|449.25|450.00|451.00|800100|20111|1.50|0.4|-12.75|1714564800000",
]

CURRENCY_ENTRIES = [
    "WDOFUT-DOL|5.1234|0.0123|+0.24%|1714564800000",
    "EURO-BRL|5.5678|-0.0101|-0.18%|1714564800000",
]


class InMemoryStore(SnapshotStore):
    """Dictionary-backed store with optional failing prefixes."""

    def __init__(self, data: Dict[str, str], failing_prefixes: Sequence[str] = ()):
        self.data = dict(data)
        self.failing_prefixes = tuple(failing_prefixes)
        self.closed = False

    async def list_keys(self, prefix: str) -> List[str]:
        if any(prefix.startswith(failing) for failing in self.failing_prefixes):
            raise FetchError(f"Store unreachable for {prefix}", operation="scan")
        return sorted(key for key in self.data if key.startswith(prefix))

    async def get_many(self, keys: Sequence[str]) -> List[str]:
        missing = [key for key in keys if key not in self.data]
        if missing:
            raise FetchError("Keys without value", operation="mget", keys=missing)
        return [self.data[key] for key in keys]

    async def close(self) -> None:
        self.closed = True


def store_data(soybean=SOYBEAN_ENTRIES, corn=CORN_ENTRIES, currency=CURRENCY_ENTRIES) -> Dict[str, str]:
    """Lay entries out under the default key prefixes."""
    data = {}
    data.update({f"CBOT:ZS{i:02d}": entry for i, entry in enumerate(soybean)})
    data.update({f"CBOT:ZC{i:02d}": entry for i, entry in enumerate(corn)})
    data.update({f"B3:FX:{i:02d}": entry for i, entry in enumerate(currency)})
    return data


@pytest.fixture
def fixed_now() -> datetime:
    """02:30 UTC, which is still the previous day in Brasília."""
    return datetime(2024, 5, 1, 2, 30, 15, tzinfo=timezone.utc)


@pytest.fixture
def soybean_entries() -> List[str]:
    return list(SOYBEAN_ENTRIES)


@pytest.fixture
def currency_entries() -> List[str]:
    return list(CURRENCY_ENTRIES)


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore(store_data())


@pytest.fixture
def service_factory():
    """Build a MarketDataService over an in-memory store."""
    def factory(store: SnapshotStore, **kwargs) -> MarketDataService:
        return MarketDataService(get_default_config(), store_factory=lambda: store, **kwargs)
    return factory
