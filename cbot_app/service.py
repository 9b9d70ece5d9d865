"""
Request orchestration for the snapshot and table endpoints.

MarketDataService discovers and fetches raw entries from the store, runs
them through the parsers, and hands the typed records to the aggregator or
to the table builder and renderer. Every call opens its own store and
shares nothing with other requests.

Two join policies are used and kept apart:
- data batches are joined fail-fast: one failing fetch fails the request;
- table tasks are joined isolated: a failing table degrades to "".
"""

import asyncio
import base64
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .config.defaults import DefaultConfig, get_default_config
from .data.aggregator import aggregate
from .data.currency import resolve_currency
from .data.models import CurrencyPair, CurrencyRecord, MarketRecord, Snapshot
from .data.ordering import sort_by_time
from .data.parsers import parse_currency_data, parse_many, parse_market_data
from .layout.builder import TableLayoutBuilder
from .logging import get_logger
from .logging.config import log_batch_counts
from .render.raster import TableRenderer
from .store.base import SnapshotStore
from .store.redis_store import RedisSnapshotStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class Commodity:
    """One futures curve served by the tables endpoint."""
    symbol: str            # Feed root symbol, e.g. "ZS"
    title: str             # Table title
    image_key: str         # Field of the tables response


class MarketDataService:
    """
    Fetches, parses and assembles market data for one request at a time.

    Args:
        config: Service configuration, defaults when omitted
        store_factory: Creates the per-request store; Redis from config by default
        builder: Table layout builder
        renderer: Raster renderer
    """

    def __init__(self,
                 config: Optional[DefaultConfig] = None,
                 store_factory: Optional[Callable[[], SnapshotStore]] = None,
                 builder: Optional[TableLayoutBuilder] = None,
                 renderer: Optional[TableRenderer] = None):
        self.config = config or get_default_config()
        feed = self.config.feed
        render = self.config.render

        self.store_factory = store_factory or (lambda: RedisSnapshotStore.from_params(self.config.store))
        self.builder = builder or TableLayoutBuilder(
            style=self.config.style,
            feed_name=feed.feed_name,
            logo_src=render.logo_src,
            settlement_flag=feed.settlement_flag,
        )
        self.renderer = renderer or TableRenderer.from_params(render)
        self.commodities = (
            Commodity(feed.soybean_symbol, "SOJA", "base64_soja"),
            Commodity(feed.corn_symbol, "MILHO", "base64_milho"),
        )

    # Key discovery and fetching

    async def contract_keys(self, store: SnapshotStore, symbol: str) -> list[str]:
        return await store.list_keys(f"{self.config.store.contract_key_prefix}{symbol}")

    async def currency_keys(self, store: SnapshotStore) -> list[str]:
        return await store.list_keys(self.config.store.currency_key_prefix)

    async def fetch_raw(self, store: SnapshotStore, keys: Sequence[str]) -> list[str]:
        return await store.get_many(keys)

    # Parsing

    def parse_market(self, raws: Sequence[str]) -> list[MarketRecord]:
        feed = self.config.feed
        return parse_many(raws, lambda raw: parse_market_data(
            raw, delimiter=feed.delimiter, settlement_flag=feed.settlement_flag))

    def parse_currency(self, raws: Sequence[str]) -> list[CurrencyRecord]:
        delimiter = self.config.feed.delimiter
        return parse_many(raws, lambda raw: parse_currency_data(raw, delimiter=delimiter))

    def resolve(self, records: Sequence[CurrencyRecord]) -> CurrencyPair:
        feed = self.config.feed
        return resolve_currency(records, dollar_tag=feed.dollar_tag, euro_tag=feed.euro_tag)

    # Market data snapshot

    async def market_snapshot(self) -> Snapshot:
        """
        Fetch both curves and the FX quotes into one snapshot.

        Records are returned in store order, without sorting or timestamp
        deduplication.

        Raises:
            ConfigurationMissingError: If store credentials are absent
            FetchError: If any discovery or fetch fails
        """
        soybean, corn = self.commodities

        async with self.store_factory() as store:
            soybean_keys, corn_keys, currency_keys = await asyncio.gather(
                self.contract_keys(store, soybean.symbol),
                self.contract_keys(store, corn.symbol),
                self.currency_keys(store),
            )
            log_batch_counts(logger, "keys", {
                "soybean": len(soybean_keys), "corn": len(corn_keys), "currency": len(currency_keys),
            })

            soybean_raw, corn_raw, currency_raw = await asyncio.gather(
                self.fetch_raw(store, soybean_keys),
                self.fetch_raw(store, corn_keys),
                self.fetch_raw(store, currency_keys),
            )
            log_batch_counts(logger, "raw", {
                "soybean": len(soybean_raw), "corn": len(corn_raw), "currency": len(currency_raw),
            })

        soybean_records = self.parse_market(soybean_raw)
        corn_records = self.parse_market(corn_raw)
        currency_records = self.parse_currency(currency_raw)
        log_batch_counts(logger, "parsed", {
            "soybean": len(soybean_records), "corn": len(corn_records), "currency": len(currency_records),
        })

        return aggregate(soybean_records, corn_records, self.resolve(currency_records))

    # Table images

    async def market_tables(self) -> dict[str, str]:
        """
        Render one base64 PNG per commodity.

        The FX quotes are fetched first and any failure there propagates.
        Each table is then built independently; a table that fails yields
        an empty string without affecting the other.
        """
        async with self.store_factory() as store:
            currency_raw = await self.fetch_raw(store, await self.currency_keys(store))
            currency = self.resolve(self.parse_currency(currency_raw))

            images = await asyncio.gather(*(
                self.table_image(store, commodity, currency) for commodity in self.commodities
            ))

        return {commodity.image_key: image for commodity, image in zip(self.commodities, images)}

    async def table_image(self, store: SnapshotStore, commodity: Commodity,
                          currency: CurrencyPair) -> str:
        """Build and render one table, degrading to "" on any failure."""
        try:
            keys = await self.contract_keys(store, commodity.symbol)
            records = sort_by_time(self.parse_market(await self.fetch_raw(store, keys)))

            model = self.builder.build(records, commodity.title, currency.dollar, currency.euro)
            png = await self.renderer.render_async(model)

            logger.info("Table rendered", title=commodity.title, contracts=len(model.expirations),
                        size=len(png))
            return base64.b64encode(png).decode("ascii")

        except Exception as e:
            logger.error("Table generation failed", title=commodity.title,
                         error=str(e), error_type=type(e).__name__)
            return ""
