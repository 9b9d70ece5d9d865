"""Tests for the table row catalog."""

from cbot_app.data.parsers import parse_market_data
from cbot_app.layout.rows import ROW_CATALOG, RowRule, row_catalog

ENTRY = "ZSF25|JAN/25|1002.25S|1001.50|1010.00|995.75|998.00|1001.50|512345|10234|0.75|-1.2345|-8.5|1"


class TestRowCatalog:
    """Test the standard row catalog."""

    def test_labels_in_display_order(self):
        assert [rule.label for rule in ROW_CATALOG] == [
            "Último", "Ajuste", "Máximo", "Mínimo", "Abertura", "Fech. Anterior",
            "Contr. Aberto", "Contr. Negoc.", "Var. Dia", "Var. Mês (%)", "Var. Ano (%)",
        ]

    def test_backgrounds(self):
        assert [rule.background for rule in ROW_CATALOG] == [
            "highlight_bg", "alt_bg", "primary_bg", "alt_bg", "primary_bg", "soft_bg",
            "alt_bg", "primary_bg", "alt_bg", "primary_bg", "alt_bg",
        ]

    def test_cell_texts(self):
        record = parse_market_data(ENTRY)

        assert [rule.cell_text(record) for rule in ROW_CATALOG] == [
            "1002.25", "1001.50", "1010.00", "995.75", "998.00", "1001.50",
            "512345", "10234", "0.75", "-1.23%", "-8.50%",
        ]

    def test_cell_tokens(self):
        record = parse_market_data(ENTRY)
        tokens = {rule.label: rule.cell_token(record) for rule in ROW_CATALOG}

        assert tokens["Último"] == "highlight_text"
        assert tokens["Fech. Anterior"] == "soft_text"
        assert tokens["Ajuste"] == "primary_text"
        assert tokens["Var. Dia"] == "positive"
        assert tokens["Var. Mês (%)"] == "negative"
        assert tokens["Var. Ano (%)"] == "negative"

    def test_custom_settlement_flag(self):
        record = parse_market_data(ENTRY.replace("1002.25S", "1002.25*"), settlement_flag="*")
        last = row_catalog("*")[0]

        assert last.cell_text(record) == "1002.25"


class TestRowRule:
    """Test RowRule text and color resolution."""

    def test_value_takes_priority_over_transform(self):
        record = parse_market_data(ENTRY)
        rule = RowRule("X", "high", "alt_bg", value=lambda r: "value", transform=str.upper)

        assert rule.cell_text(record) == "value"

    def test_transform_applies_to_field(self):
        record = parse_market_data(ENTRY)
        rule = RowRule("X", "expiration_date", "alt_bg", transform=str.lower)

        assert rule.cell_text(record) == "jan/25"

    def test_raw_field_without_functions(self):
        record = parse_market_data(ENTRY)

        assert RowRule("X", "volume", "alt_bg").cell_text(record) == "512345"
