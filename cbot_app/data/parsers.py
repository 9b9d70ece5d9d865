"""
Broadcast feed entry parsers for converting raw cache values to typed records.

A feed entry is either a delimited line whose fields follow the order of
MARKET_FIELDS / CURRENCY_FIELDS, or a JSON object keyed by the camelCase
field names. Entries that do not have that shape are malformed: the public
parse functions return None for them and never raise.
"""

import json
import math
import re
from typing import Any, Callable, Iterable, Optional, TypeVar

from ..errors import DataQualityError, MalformedDataError, MissingDataError
from ..logging import get_logger
from .models import CURRENCY_FIELDS, MARKET_FIELDS, CurrencyRecord, MarketRecord

logger = get_logger(__name__)

DEFAULT_DELIMITER = "|"
DEFAULT_SETTLEMENT_FLAG = "S"

# Fields that must hold a finite number
MARKET_NUMERIC = (
    "adjustment", "high", "low", "open", "close", "volume",
    "contracts_traded", "change", "month_change", "year_change",
)
CURRENCY_NUMERIC = ("last_price", "change")

# Plain ASCII decimals only: no digit separators, no other scripts, no nan/inf words
DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
INTEGER = re.compile(r"[+-]?\d+", re.ASCII)

T = TypeVar("T")


def parse_market_data(raw: Optional[str], *,
                      delimiter: str = DEFAULT_DELIMITER,
                      settlement_flag: str = DEFAULT_SETTLEMENT_FLAG) -> Optional[MarketRecord]:
    """
    Parse one futures feed entry.

    Delimited format:
        ZSX24|NOV/24|1002.25S|1001.50|1010.00|995.75|998.00|1001.50|512345|10234|0.75|-1.2345|-8.5|1714564800000

    Args:
        raw: Raw cache value
        delimiter: Field separator of the delimited format
        settlement_flag: Trailing flag allowed on the last price

    Returns:
        MarketRecord, or None if the entry is malformed
    """
    try:
        values = _split_entry(raw, MARKET_FIELDS, delimiter)

        _require_text(values, "symbol")
        _require_text(values, "expiration_date")
        _require_number(strip_settlement_flag(values["last_price"], settlement_flag), "last_price")
        for name in MARKET_NUMERIC:
            _require_number(values[name], name)
        values["timestamp"] = _parse_timestamp(values["timestamp"])

        return MarketRecord(**values)

    except DataQualityError as e:
        logger.debug("Dropping malformed market entry", reason=str(e), raw=_preview(raw))
        return None


def parse_currency_data(raw: Optional[str], *,
                        delimiter: str = DEFAULT_DELIMITER) -> Optional[CurrencyRecord]:
    """
    Parse one FX feed entry.

    Delimited format:
        WDOFUT-DOL|5.1234|0.0123|+0.24%|1714564800000

    Args:
        raw: Raw cache value
        delimiter: Field separator of the delimited format

    Returns:
        CurrencyRecord, or None if the entry is malformed
    """
    try:
        values = _split_entry(raw, CURRENCY_FIELDS, delimiter)

        _require_text(values, "symbol")
        for name in CURRENCY_NUMERIC:
            _require_number(values[name], name)
        values["timestamp"] = _parse_timestamp(values["timestamp"])

        return CurrencyRecord(**values)

    except DataQualityError as e:
        logger.debug("Dropping malformed currency entry", reason=str(e), raw=_preview(raw))
        return None


def parse_many(raws: Iterable[Optional[str]], parser: Callable[[Optional[str]], Optional[T]]) -> list[T]:
    """Parse every entry and drop the malformed ones, preserving order."""
    parsed = (parser(raw) for raw in raws)
    return [record for record in parsed if record is not None]


def _split_entry(raw: Optional[str], layout: tuple[tuple[str, str], ...],
                 delimiter: str) -> dict[str, Any]:
    """Map a raw entry onto attribute names, in either wire format."""
    if not isinstance(raw, str) or not raw.strip():
        raise MissingDataError("Entry is empty or not a string")

    text = raw.strip()
    if text.startswith("{"):
        return _split_json(text, layout)

    parts = text.split(delimiter)
    if len(parts) != len(layout):
        raise MalformedDataError(
            f"Expected {len(layout)} fields, got {len(parts)}",
            raw_data=text,
            expected_format="delimited",
        )
    return {attr: part.strip() for (attr, _key), part in zip(layout, parts)}


def _split_json(text: str, layout: tuple[tuple[str, str], ...]) -> dict[str, Any]:
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as e:
        # Decode errors, oversized integer literals and runaway nesting
        raise MalformedDataError(f"Invalid JSON: {e}", raw_data=text, expected_format="json")

    if not isinstance(payload, dict):
        raise MalformedDataError("JSON entry must be an object", raw_data=text, expected_format="json")

    values = {}
    for attr, key in layout:
        value = payload.get(key)
        if value is None or isinstance(value, (bool, dict, list)):
            raise MalformedDataError(f"Missing or invalid '{key}'", raw_data=text, expected_format="json")
        values[attr] = value if attr == "timestamp" else str(value).strip()
    return values


def _require_text(values: dict[str, Any], name: str) -> None:
    if not values[name]:
        raise MissingDataError(f"'{name}' is empty", data_type=name)


def _require_number(value: str, name: str) -> None:
    if not isinstance(value, str) or not DECIMAL.fullmatch(value):
        raise MalformedDataError(f"'{name}' is not numeric: {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise MalformedDataError(f"'{name}' is not finite: {value!r}")


def _parse_timestamp(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    if not INTEGER.fullmatch(text):
        raise MalformedDataError(f"'timestamp' is not an integer: {value!r}")
    try:
        return int(text)
    except ValueError:
        # Over the interpreter's digit limit for int conversion
        raise MalformedDataError(f"'timestamp' is too long: {len(text)} digits")


def _preview(raw: Any, limit: int = 100) -> Optional[str]:
    return raw[:limit] if isinstance(raw, str) else None


def strip_settlement_flag(price: str, settlement_flag: str = DEFAULT_SETTLEMENT_FLAG) -> str:
    """Remove the trailing settlement flag from a last price."""
    if settlement_flag and price.endswith(settlement_flag):
        return price[:-len(settlement_flag)]
    return price
