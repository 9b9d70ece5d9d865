"""
Table layout construction for one commodity curve.

TableLayoutBuilder turns a contract curve and the two FX quotes into a
TableModel: the table content (header, rows, currency panel, footer) plus
the LayoutNode tree a renderer rasterizes. Building performs no I/O.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from ..config.defaults import StyleParams
from ..data.models import CurrencyRecord, MarketRecord
from ..data.ordering import dedupe_by_timestamp
from ..data.parsers import DEFAULT_SETTLEMENT_FLAG
from ..utils.time import format_brasilia_date, format_brasilia_datetime, utc_now
from .formatting import format_currency, sign_token
from .nodes import ContainerNode, LayoutNode, column, image, row, text
from .rows import RowRule, row_catalog

LABEL_WIDTH = 180
NOT_AVAILABLE = "N/A"
LOGO_SIZE = (160, 54)


@dataclass(frozen=True)
class Cell:
    text: str
    color: str


@dataclass(frozen=True)
class TableRow:
    label: str
    label_color: str
    background: str
    cells: tuple[Cell, ...]


@dataclass(frozen=True)
class CurrencyBox:
    """One FX quote panel; price is "N/A" and percent empty when the quote is missing."""
    pair: str
    name: str
    badge: str
    price: str
    percent: str
    percent_color: Optional[str]


@dataclass(frozen=True)
class TableModel:
    """Content and layout tree of one rendered table."""
    title: str
    updated_at: str                    # Brasília date-time
    date_label: str                    # "Data: DD/MM/YYYY"
    expirations: tuple[str, ...]
    rows: tuple[TableRow, ...]
    currency: tuple[CurrencyBox, CurrencyBox]
    footer: str
    root: ContainerNode

    def to_dict(self) -> dict[str, Any]:
        return self.root.to_dict()


class TableLayoutBuilder:
    """
    Builds TableModel instances with a fixed style and row catalog.

    Args:
        style: Color tokens
        feed_name: Source named in the footer
        logo_src: Source of the brand logo image cell
        settlement_flag: Flag stripped from the last price row
        rules: Row catalog override, defaults to the standard eleven rows
    """

    def __init__(self,
                 style: Optional[StyleParams] = None,
                 feed_name: str = "Broadcast",
                 logo_src: str = "",
                 settlement_flag: str = DEFAULT_SETTLEMENT_FLAG,
                 rules: Optional[Sequence[RowRule]] = None):
        self.style = style or StyleParams()
        self.feed_name = feed_name
        self.logo_src = logo_src
        self.rules = tuple(rules) if rules is not None else row_catalog(settlement_flag)

    def color(self, token: str) -> str:
        return getattr(self.style, token)

    def build(self,
              records: Sequence[MarketRecord],
              title: str,
              dollar: Optional[CurrencyRecord],
              euro: Optional[CurrencyRecord],
              now: Optional[datetime] = None) -> TableModel:
        """
        Build the table for one curve.

        Records are deduplicated by timestamp (first occurrence wins) and
        otherwise kept in the given order.

        Args:
            records: Contract quotes, normally sorted by timestamp
            title: Commodity title, e.g. "SOJA"
            dollar: USD/BRL quote or None
            euro: EUR/BRL quote or None
            now: Instant used for the printed dates, defaults to now

        Returns:
            TableModel ready for rendering
        """
        if now is None:
            now = utc_now()
        unique = dedupe_by_timestamp(records)
        updated_at = format_brasilia_datetime(now)

        currency = (
            self._currency_box(dollar, "USD/BRL", "Dólar Comercial", "$"),
            self._currency_box(euro, "EUR/BRL", "Euro Comercial", "€"),
        )
        date_label = f"Data: {format_brasilia_date(now)}"
        expirations = tuple(record.expiration_date for record in unique)
        rows = tuple(self._table_row(rule, unique) for rule in self.rules)
        footer = f"Fonte: {self.feed_name} | Última Atualização: {updated_at} (GMT-3)"

        root = self._layout(title, updated_at, date_label, expirations, rows, currency, footer)
        return TableModel(
            title=title,
            updated_at=updated_at,
            date_label=date_label,
            expirations=expirations,
            rows=rows,
            currency=currency,
            footer=footer,
            root=root,
        )

    def _currency_box(self, record: Optional[CurrencyRecord],
                      pair: str, name: str, badge: str) -> CurrencyBox:
        if record is None:
            return CurrencyBox(pair, name, badge, price=NOT_AVAILABLE, percent="", percent_color=None)
        return CurrencyBox(
            pair, name, badge,
            price=format_currency(record.last_price),
            percent=record.percent_change,
            percent_color=self.color(sign_token(record.change)),
        )

    def _table_row(self, rule: RowRule, records: Sequence[MarketRecord]) -> TableRow:
        return TableRow(
            label=rule.label,
            label_color=self.color(rule.text),
            background=self.color(rule.background),
            cells=tuple(Cell(rule.cell_text(record), self.color(rule.cell_token(record)))
                        for record in records),
        )

    # Layout tree

    def _layout(self, title: str, updated_at: str, date_label: str,
                expirations: tuple[str, ...], rows: tuple[TableRow, ...],
                currency: tuple[CurrencyBox, CurrencyBox], footer: str) -> ContainerNode:
        s = self.style
        return column(
            self._currency_panel(updated_at, currency),
            column(
                row(
                    text(f"{title} - CBOT (USD / bushel)", color=s.primary_text,
                         font_size=24, font_weight="700"),
                    image(self.logo_src, *LOGO_SIZE),
                    justify="space-between", align="center", padding=(20, 24),
                    background=s.primary_bg, border_bottom=s.border,
                ),
                column(
                    self._header_row(date_label, expirations),
                    *(self._body_row(table_row, last=index == len(rows) - 1)
                      for index, table_row in enumerate(rows)),
                ),
                text(footer, padding=(12, 16), font_size=14, color=s.muted_text,
                     border_top=s.border, background=s.alt_bg),
                background=s.primary_bg, border_radius=8,
            ),
            background=s.page_bg, padding=40,
        )

    def _currency_panel(self, updated_at: str,
                        currency: tuple[CurrencyBox, CurrencyBox]) -> ContainerNode:
        s = self.style
        return column(
            row(
                text("Câmbio - B3", color=s.primary_text, font_size=24, font_weight="700"),
                text(f"Última atualização: {updated_at}", color=s.muted_text, font_size=16),
                justify="space-between", align="center", margin_bottom=16,
                padding=(0, 0, 16, 0), border_bottom=s.border,
            ),
            row(*(self._currency_node(box) for box in currency), gap=24),
            background=s.primary_bg, border_radius=8, padding=24, margin_bottom=24,
        )

    def _currency_node(self, box: CurrencyBox) -> ContainerNode:
        s = self.style
        percent_settings = {"color": box.percent_color} if box.percent_color else {}
        return row(
            row(
                text(box.badge, width=40, height=40, background=s.header_bg,
                     border_radius=20, color=s.header_text, font_weight="700",
                     font_size=18, text_align="center"),
                column(
                    text(box.pair, font_weight="600", color=s.primary_text, font_size=18),
                    text(box.name, font_size=14, color=s.muted_text),
                ),
                align="center", gap=12,
            ),
            column(
                text(box.price, font_size=24, font_weight="700", color=s.primary_text,
                     text_align="right"),
                text(box.percent, font_size=16, font_weight="500", text_align="right",
                     **percent_settings),
            ),
            justify="space-between", align="center", padding=(16, 20),
            background=s.alt_bg, border_radius=8, flex=1,
        )

    def _header_row(self, date_label: str, expirations: tuple[str, ...]) -> ContainerNode:
        s = self.style
        cells: list[LayoutNode] = [
            text(date_label, width=LABEL_WIDTH, padding=(12, 16), color=s.header_text,
                 font_size=16, font_weight="600"),
        ]
        cells.extend(
            text(expiration, flex=1, padding=(12, 16), color=s.header_text,
                 text_align="center", font_size=16, font_weight="600")
            for expiration in expirations
        )
        return row(*cells, background=s.header_bg)

    def _body_row(self, table_row: TableRow, last: bool) -> ContainerNode:
        cells: list[LayoutNode] = [
            text(table_row.label, width=LABEL_WIDTH, padding=(12, 16),
                 color=table_row.label_color, font_weight="500", font_size=16),
        ]
        cells.extend(
            text(cell.text, flex=1, padding=(12, 16), text_align="center", font_size=16,
                 font_weight="500", color=cell.color, monospace=True)
            for cell in table_row.cells
        )
        return row(*cells, background=table_row.background,
                   border_bottom=None if last else self.style.border)
