"""
Canonical data models for parsed feed entries.

This module defines immutable data structures for one futures contract quote
and one FX quote, plus the aggregated snapshot served by the JSON endpoint.
Numeric feed values stay strings: they are displayed verbatim, and only
validated for parseability.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


# Field order of a delimited market entry, with the JSON key of each field
MARKET_FIELDS: tuple[tuple[str, str], ...] = (
    ("symbol", "symbol"),
    ("expiration_date", "expirationDate"),
    ("last_price", "lastPrice"),
    ("adjustment", "adjustment"),
    ("high", "high"),
    ("low", "low"),
    ("open", "open"),
    ("close", "close"),
    ("volume", "volume"),
    ("contracts_traded", "contractsTraded"),
    ("change", "change"),
    ("month_change", "monthChange"),
    ("year_change", "yearChange"),
    ("timestamp", "timestamp"),
)

CURRENCY_FIELDS: tuple[tuple[str, str], ...] = (
    ("symbol", "symbol"),
    ("last_price", "lastPrice"),
    ("change", "change"),
    ("percent_change", "percentChange"),
    ("timestamp", "timestamp"),
)


@dataclass(frozen=True)
class MarketRecord:
    """One futures contract quote from the feed."""
    symbol: str
    expiration_date: str       # Contract month label, e.g. "NOV/24"
    last_price: str            # May end with the settlement flag
    adjustment: str
    high: str
    low: str
    open: str
    close: str                 # Previous close
    volume: str                # Open interest
    contracts_traded: str
    change: str
    month_change: str
    year_change: str
    timestamp: int             # Feed-assigned instant

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys of the feed."""
        return {key: getattr(self, attr) for attr, key in MARKET_FIELDS}


@dataclass(frozen=True)
class CurrencyRecord:
    """One FX quote from the feed."""
    symbol: str                # Contains a currency tag such as DOL or EURO
    last_price: str
    change: str
    percent_change: str        # Pre-formatted by the feed
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys of the feed."""
        return {key: getattr(self, attr) for attr, key in CURRENCY_FIELDS}


@dataclass(frozen=True)
class CurrencyPair:
    """Resolved dollar and euro quotes; either may be absent."""
    dollar: Optional[CurrencyRecord] = None
    euro: Optional[CurrencyRecord] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "dollar": self.dollar.to_dict() if self.dollar else None,
            "euro": self.euro.to_dict() if self.euro else None,
        }


@dataclass(frozen=True)
class Snapshot:
    """Aggregated view served by the market data endpoint."""
    error: bool
    message: str
    timestamp: str             # ISO-8601 UTC
    soybean: list[MarketRecord] = field(default_factory=list)
    corn: list[MarketRecord] = field(default_factory=list)
    currency: CurrencyPair = field(default_factory=CurrencyPair)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "soybean": [record.to_dict() for record in self.soybean],
            "corn": [record.to_dict() for record in self.corn],
            "currency": self.currency.to_dict(),
            "timestamp": self.timestamp,
        }
