"""Tests for feed entry parsing."""

import json
import pytest

from cbot_app.data.models import CurrencyRecord, MarketRecord
from cbot_app.data.parsers import (
    parse_currency_data,
    parse_many,
    parse_market_data,
    strip_settlement_flag,
)


MARKET_ENTRY = "ZSF25|JAN/25|1002.25S|1001.50|1010.00|995.75|998.00|1001.50|512345|10234|0.75|-1.2345|-8.5|1714564800000"
CURRENCY_ENTRY = "WDOFUT-DOL|5.1234|0.0123|+0.24%|1714564800000"


class TestParseMarketData:
    """Test parse_market_data."""

    def test_parses_delimited_entry(self):
        record = parse_market_data(MARKET_ENTRY)

        assert isinstance(record, MarketRecord)
        assert record.symbol == "ZSF25"
        assert record.expiration_date == "JAN/25"
        assert record.last_price == "1002.25S"
        assert record.volume == "512345"
        assert record.contracts_traded == "10234"
        assert record.month_change == "-1.2345"
        assert record.timestamp == 1714564800000

    def test_parses_json_entry(self):
        raw = json.dumps({
            "symbol": "ZCH25", "expirationDate": "MAR/25", "lastPrice": "452.50",
            "adjustment": "452.00", "high": 455.75, "low": "449.25", "open": "450.00",
            "close": "451.00", "volume": "800100", "contractsTraded": "20111",
            "change": "1.50", "monthChange": "0.4", "yearChange": "-12.75",
            "timestamp": 1714564800000,
        })

        record = parse_market_data(raw)

        assert record is not None
        assert record.high == "455.75"
        assert record.timestamp == 1714564800000

    def test_strips_surrounding_whitespace(self):
        record = parse_market_data(f"  {MARKET_ENTRY}\n")
        assert record is not None
        assert record.symbol == "ZSF25"

    def test_custom_delimiter(self):
        record = parse_market_data(MARKET_ENTRY.replace("|", ";"), delimiter=";")
        assert record is not None
        assert record.close == "1001.50"

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "   ",
        "garbage",
        MARKET_ENTRY.rsplit("|", 1)[0],                       # missing timestamp
        MARKET_ENTRY + "|extra",                              # too many fields
        MARKET_ENTRY.replace("1001.50|1010.00", "abc|1010.00"),  # non-numeric adjustment
        MARKET_ENTRY.replace("1714564800000", "17145.5"),    # non-integer timestamp
        MARKET_ENTRY.replace("1002.25S", "1002.25X"),        # unknown flag
        MARKET_ENTRY.replace("ZSF25", ""),                    # empty symbol
        MARKET_ENTRY.replace("|0.75|", "|nan|"),              # not finite
        "{not json",
        "[1, 2, 3]",
        json.dumps({"symbol": "ZSF25"}),
        MARKET_ENTRY.replace("|512345|", "|512_345|"),        # digit separator
        MARKET_ENTRY.replace("|0.75|", "|\u0661\u0662|"),     # non-ASCII digits
        MARKET_ENTRY.replace("1714564800000", "1" + "0" * 5000),  # oversized timestamp
        '{"symbol": "ZSF25", "timestamp": 1' + "0" * 5000 + "}",
        '{"symbol": ' + "[" * 100000,
    ])
    def test_malformed_entries_return_none(self, raw):
        assert parse_market_data(raw) is None

    def test_never_raises_on_non_string(self):
        assert parse_market_data(12345) is None  # type: ignore[arg-type]


class TestParseCurrencyData:
    """Test parse_currency_data."""

    def test_parses_delimited_entry(self):
        record = parse_currency_data(CURRENCY_ENTRY)

        assert isinstance(record, CurrencyRecord)
        assert record.symbol == "WDOFUT-DOL"
        assert record.last_price == "5.1234"
        assert record.change == "0.0123"
        assert record.percent_change == "+0.24%"
        assert record.timestamp == 1714564800000

    def test_percent_change_is_kept_verbatim(self):
        record = parse_currency_data("EURO|5.5|-0.01|-0,18 %|1")
        assert record is not None
        assert record.percent_change == "-0,18 %"

    @pytest.mark.parametrize("raw", [
        "",
        "WDOFUT-DOL|5.1234|0.0123|+0.24%",
        "WDOFUT-DOL|abc|0.0123|+0.24%|1714564800000",
        "WDOFUT-DOL|5.1234|x|+0.24%|1714564800000",
        "|5.1234|0.0123|+0.24%|1714564800000",
        MARKET_ENTRY,
        "WDOFUT-DOL|5_1234|0.0123|+0.24%|1714564800000",
        "WDOFUT-DOL|\u0665.1|0.0123|+0.24%|1714564800000",
        '{"symbol": "WDOFUT-DOL", "lastPrice": "5.1", "change": "0.1", '
        '"percentChange": "+1%", "timestamp": 1' + "0" * 5000 + "}",
        '{"symbol": ' + "[" * 100000,
    ])
    def test_malformed_entries_return_none(self, raw):
        assert parse_currency_data(raw) is None


class TestParseMany:
    """Test parse_many filtering."""

    def test_drops_exactly_the_malformed_entries(self):
        raws = [MARKET_ENTRY, "broken", MARKET_ENTRY.replace("1714564800000", "1714564900000"), ""]

        records = parse_many(raws, parse_market_data)

        assert len(records) == len(raws) - 2
        assert [r.timestamp for r in records] == [1714564800000, 1714564900000]

    def test_empty_input(self):
        assert parse_many([], parse_currency_data) == []


class TestStripSettlementFlag:
    """Test settlement flag removal."""

    def test_removes_trailing_flag(self):
        assert strip_settlement_flag("1002.25S") == "1002.25"

    def test_leaves_unflagged_price(self):
        assert strip_settlement_flag("1002.25") == "1002.25"

    def test_only_trailing_flag_is_removed(self):
        assert strip_settlement_flag("S100S", "S") == "S100"
