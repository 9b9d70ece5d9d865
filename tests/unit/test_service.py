"""Unit tests for MarketDataService."""

import asyncio
import base64
from dataclasses import replace

import pytest

from cbot_app.config.defaults import get_default_config
from cbot_app.errors import ConfigurationMissingError
from cbot_app.layout.builder import TableLayoutBuilder
from cbot_app.service import MarketDataService

from conftest import CURRENCY_ENTRIES, InMemoryStore, SOYBEAN_ENTRIES, store_data


class StubRenderer:
    """Renderer double returning fixed bytes and recording titles."""

    def __init__(self):
        self.titles = []

    async def render_async(self, model):
        self.titles.append(model.title)
        return f"png:{model.title}".encode()


class TestMarketSnapshot:
    """Test market_snapshot."""

    def test_collects_all_curves(self, service_factory, memory_store):
        snapshot = asyncio.run(service_factory(memory_store).market_snapshot())

        assert snapshot.error is False
        assert snapshot.message == "Success"
        assert [r.symbol for r in snapshot.soybean] == ["ZSF25", "ZSH25"]
        assert [r.symbol for r in snapshot.corn] == ["ZCH25"]
        assert snapshot.currency.dollar.symbol == "WDOFUT-DOL"
        assert snapshot.currency.euro.symbol == "EURO-BRL"
        assert memory_store.closed is True

    def test_drops_malformed_entries(self, service_factory):
        store = InMemoryStore(store_data(soybean=SOYBEAN_ENTRIES + ["broken|entry"]))

        snapshot = asyncio.run(service_factory(store).market_snapshot())

        assert len(snapshot.soybean) == 2

    def test_keeps_store_order_and_duplicates(self, service_factory):
        late, early = SOYBEAN_ENTRIES
        store = InMemoryStore(store_data(soybean=[late, early, late]))

        snapshot = asyncio.run(service_factory(store).market_snapshot())

        assert [r.timestamp for r in snapshot.soybean] == [
            1714564800000, 1714564700000, 1714564800000]

    def test_empty_store(self, service_factory):
        snapshot = asyncio.run(service_factory(InMemoryStore({})).market_snapshot())

        assert snapshot.soybean == [] and snapshot.corn == []
        assert snapshot.currency.dollar is None and snapshot.currency.euro is None

    def test_missing_credentials_from_default_store(self):
        service = MarketDataService(get_default_config())

        with pytest.raises(ConfigurationMissingError):
            asyncio.run(service.market_snapshot())


class TestMarketTables:
    """Test market_tables."""

    def test_renders_both_tables(self, service_factory, memory_store):
        renderer = StubRenderer()

        tables = asyncio.run(service_factory(memory_store, renderer=renderer).market_tables())

        assert set(tables) == {"base64_soja", "base64_milho"}
        assert base64.b64decode(tables["base64_soja"]) == b"png:SOJA"
        assert base64.b64decode(tables["base64_milho"]) == b"png:MILHO"
        assert sorted(renderer.titles) == ["MILHO", "SOJA"]

    def test_table_sorts_and_dedupes_records(self, service_factory):
        late, early = SOYBEAN_ENTRIES
        store = InMemoryStore(store_data(soybean=[late, early, late]))
        built = {}

        class RecordingBuilder(TableLayoutBuilder):
            def build(self, records, title, dollar, euro, now=None):
                model = super().build(records, title, dollar, euro, now)
                built[title] = model
                return model

        asyncio.run(service_factory(store, builder=RecordingBuilder(),
                                    renderer=StubRenderer()).market_tables())

        assert built["SOJA"].expirations == ("MAR/25", "JAN/25")

    def test_failing_table_is_isolated(self, service_factory, memory_store):
        class FailingBuilder(TableLayoutBuilder):
            def build(self, records, title, dollar, euro, now=None):
                if title == "MILHO":
                    raise ValueError("layout failed")
                return super().build(records, title, dollar, euro, now)

        tables = asyncio.run(service_factory(
            memory_store, builder=FailingBuilder(), renderer=StubRenderer()).market_tables())

        assert tables["base64_milho"] == ""
        assert base64.b64decode(tables["base64_soja"]) == b"png:SOJA"

    def test_missing_currency_still_renders(self, service_factory):
        store = InMemoryStore(store_data(currency=[]))
        built = {}

        class RecordingBuilder(TableLayoutBuilder):
            def build(self, records, title, dollar, euro, now=None):
                built[title] = (dollar, euro)
                return super().build(records, title, dollar, euro, now)

        tables = asyncio.run(service_factory(store, builder=RecordingBuilder(),
                                             renderer=StubRenderer()).market_tables())

        assert tables["base64_soja"] != ""
        assert built["SOJA"] == (None, None)


class TestDefaults:
    """Test collaborators built from configuration."""

    def test_default_renderer_uses_render_config(self, memory_store):
        config = get_default_config()
        config = replace(config, render=replace(config.render, width=640,
                                                font_family="Liberation Sans",
                                                mono_font_family="Liberation Mono"))

        renderer = MarketDataService(config, store_factory=lambda: memory_store).renderer

        assert renderer.width == 640
        assert renderer.font_family == "Liberation Sans"
        assert renderer.mono_font_family == "Liberation Mono"


class TestParsingHelpers:
    """Test the configured parsing helpers."""

    def test_parse_currency_uses_configured_delimiter(self, service_factory, memory_store):
        service = service_factory(memory_store)
        raws = [entry.replace("|", ";") for entry in CURRENCY_ENTRIES]

        assert service.parse_currency(raws) == []

    def test_resolve_uses_configured_tags(self, service_factory, memory_store):
        service = service_factory(memory_store)
        pair = service.resolve(service.parse_currency(CURRENCY_ENTRIES))

        assert pair.dollar.last_price == "5.1234"
        assert pair.euro.last_price == "5.5678"
