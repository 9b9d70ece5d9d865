"""Dollar/euro resolution over parsed FX records."""

from typing import Iterable, Optional

from .models import CurrencyPair, CurrencyRecord

DOLLAR_TAG = "DOL"
EURO_TAG = "EURO"


def find_by_tag(records: Iterable[CurrencyRecord], tag: str) -> Optional[CurrencyRecord]:
    """First record whose symbol contains tag, in input order."""
    return next((record for record in records if tag in record.symbol), None)


def resolve_currency(records: Iterable[CurrencyRecord],
                     dollar_tag: str = DOLLAR_TAG,
                     euro_tag: str = EURO_TAG) -> CurrencyPair:
    """
    Select the dollar and euro quotes by symbol substring.

    Matching is unanchored containment and first-match-wins: later records
    carrying the same tag are ignored. A tag with no match leaves its slot
    empty.

    Args:
        records: Parsed FX records in feed order
        dollar_tag: Substring identifying the USD/BRL quote
        euro_tag: Substring identifying the EUR/BRL quote

    Returns:
        CurrencyPair with None for any unmatched slot
    """
    records = list(records)
    return CurrencyPair(
        dollar=find_by_tag(records, dollar_tag),
        euro=find_by_tag(records, euro_tag),
    )
