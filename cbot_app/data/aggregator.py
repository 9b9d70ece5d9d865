"""Snapshot assembly for the market data endpoint."""

from datetime import datetime
from typing import Iterable, Optional

from ..utils.time import iso_timestamp
from .models import CurrencyPair, MarketRecord, Snapshot

SUCCESS_MESSAGE = "Success"


def aggregate(soybean: Iterable[MarketRecord],
              corn: Iterable[MarketRecord],
              currency: CurrencyPair,
              now: Optional[datetime] = None) -> Snapshot:
    """
    Combine the parsed curves and the resolved FX quotes.

    Records are passed through as given: no sorting and no timestamp
    deduplication happen on this path.
    """
    return Snapshot(
        error=False,
        message=SUCCESS_MESSAGE,
        soybean=list(soybean),
        corn=list(corn),
        currency=currency,
        timestamp=iso_timestamp(now),
    )


def error_snapshot(message: str, now: Optional[datetime] = None) -> Snapshot:
    """Empty snapshot flagged as failed, used by the endpoint's failure paths."""
    return Snapshot(
        error=True,
        message=message,
        soybean=[],
        corn=[],
        currency=CurrencyPair(),
        timestamp=iso_timestamp(now),
    )
