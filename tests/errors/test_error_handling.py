"""
Error handling tests for the snapshot pipeline.

Tests cover the error classification and how malformed entries, missing
keys and render failures are contained.
"""

import asyncio

import pytest

from cbot_app.errors import (
    ConfigurationMissingError,
    DataQualityError,
    FetchError,
    MalformedDataError,
    MissingDataError,
    RenderError,
    SystemFailureError,
)
from cbot_app.data.parsers import parse_currency_data, parse_market_data

from conftest import InMemoryStore, store_data


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Test that data quality errors are recoverable."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        malformed = MalformedDataError("bad entry", raw_data="x|y", expected_format="14 fields")
        assert isinstance(malformed, DataQualityError)
        assert malformed.raw_data == "x|y"
        assert malformed.expected_format == "14 fields"

        missing = MissingDataError("no symbol", data_type="market", context={"field": "symbol"})
        assert missing.data_type == "market"
        assert missing.context == {"field": "symbol"}

    def test_system_failure_hierarchy(self):
        """Test that system failures are not recoverable."""
        for error in (
            FetchError("down", operation="scan"),
            ConfigurationMissingError("missing", missing=["REDIS_URL"]),
            RenderError("failed", title="SOJA"),
        ):
            assert isinstance(error, SystemFailureError)
            assert error.recoverable is False

    def test_fetch_error_defaults(self):
        error = FetchError("down")
        assert error.operation is None
        assert error.keys == []


class TestMalformedEntries:
    """Test that malformed entries never escape the parsers."""

    @pytest.mark.parametrize("raw", [
        "", "|||", "ZSF25|JAN/25", "{not json", '{"symbol": 1}', "null", "ZSF25|" * 20,
    ])
    def test_market_parser_returns_none(self, raw):
        assert parse_market_data(raw) is None

    @pytest.mark.parametrize("raw", ["", "A|B", "A|1|2|3|x", '["DOL", 1]'])
    def test_currency_parser_returns_none(self, raw):
        assert parse_currency_data(raw) is None


class TestFetchFailures:
    """Test how store failures reach the service caller."""

    def test_snapshot_fails_fast_on_unreachable_store(self, service_factory):
        store = InMemoryStore(store_data(), failing_prefixes=["B3:FX:"])

        with pytest.raises(FetchError):
            asyncio.run(service_factory(store).market_snapshot())
        assert store.closed is True

    def test_snapshot_fails_on_key_without_value(self, service_factory):
        class VanishingStore(InMemoryStore):
            async def list_keys(self, prefix):
                return await super().list_keys(prefix) + [f"{prefix}gone"]

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(service_factory(VanishingStore(store_data())).market_snapshot())
        assert exc_info.value.operation == "mget"

    def test_table_degrades_on_contract_failure(self, service_factory):
        store = InMemoryStore(store_data(), failing_prefixes=["CBOT:ZC"])

        tables = asyncio.run(service_factory(store).market_tables())

        assert tables["base64_milho"] == ""
        assert tables["base64_soja"] != ""

    def test_tables_fail_on_currency_failure(self, service_factory):
        store = InMemoryStore(store_data(), failing_prefixes=["B3:FX:"])

        with pytest.raises(FetchError):
            asyncio.run(service_factory(store).market_tables())
