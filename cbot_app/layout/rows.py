"""
Row catalog of the contract table.

Each RowRule names one MarketRecord field and how to show it. A cell's text
comes from, in priority order: the rule's value function, the rule's
transform applied to the field, the raw field. A cell's color comes from the
rule's color function when present, else from its fixed text token. Row
background is a property of the rule, not of the record.
"""

from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

from ..data.models import MarketRecord
from ..data.parsers import DEFAULT_SETTLEMENT_FLAG, strip_settlement_flag
from .formatting import format_signed_percent, sign_token


@dataclass(frozen=True)
class RowRule:
    """Display definition of one table row."""
    label: str
    field: str                                              # MarketRecord attribute
    background: str                                         # Style token
    text: str = "primary_text"                              # Style token
    value: Optional[Callable[[MarketRecord], str]] = None
    transform: Optional[Callable[[str], str]] = None
    color: Optional[Callable[[MarketRecord], str]] = None   # Returns a style token

    def cell_text(self, record: MarketRecord) -> str:
        if self.value is not None:
            return self.value(record)
        raw = getattr(record, self.field)
        if self.transform is not None:
            return self.transform(raw)
        return raw

    def cell_token(self, record: MarketRecord) -> str:
        if self.color is not None:
            return self.color(record)
        return self.text


def _signed(field_name: str) -> Callable[[MarketRecord], str]:
    return lambda record: sign_token(getattr(record, field_name))


def _percent(field_name: str) -> Callable[[MarketRecord], str]:
    return lambda record: format_signed_percent(getattr(record, field_name))


def row_catalog(settlement_flag: str = DEFAULT_SETTLEMENT_FLAG) -> tuple[RowRule, ...]:
    """The eleven table rows, in display order."""
    return (
        RowRule("Último", "last_price", "highlight_bg", "highlight_text",
                transform=partial(strip_settlement_flag, settlement_flag=settlement_flag)),
        RowRule("Ajuste", "adjustment", "alt_bg"),
        RowRule("Máximo", "high", "primary_bg"),
        RowRule("Mínimo", "low", "alt_bg"),
        RowRule("Abertura", "open", "primary_bg"),
        RowRule("Fech. Anterior", "close", "soft_bg", "soft_text"),
        RowRule("Contr. Aberto", "volume", "alt_bg"),
        RowRule("Contr. Negoc.", "contracts_traded", "primary_bg"),
        RowRule("Var. Dia", "change", "alt_bg", color=_signed("change")),
        RowRule("Var. Mês (%)", "month_change", "primary_bg",
                value=_percent("month_change"), color=_signed("month_change")),
        RowRule("Var. Ano (%)", "year_change", "alt_bg",
                value=_percent("year_change"), color=_signed("year_change")),
    )


ROW_CATALOG = row_catalog()
