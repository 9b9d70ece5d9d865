#!/usr/bin/env python3
"""Render the soybean and corn tables from sample entries to PNG files."""

import argparse
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cbot_app.config.loader import ConfigLoader
from cbot_app.data.currency import resolve_currency
from cbot_app.data.ordering import sort_by_time
from cbot_app.data.parsers import parse_currency_data, parse_many, parse_market_data
from cbot_app.layout.builder import TableLayoutBuilder
from cbot_app.render.raster import TableRenderer

SAMPLES = {
    "SOJA": [
        "ZSF25|JAN/25|1002.25S|1001.50|1010.00|995.75|998.00|1001.50|512345|10234|0.75|-1.2345|-8.5|1714564800000",
        "ZSH25|MAR/25|1012.00|1011.25|1020.50|1005.00|1008.25|1010.75|312000|8123|-1.25|2.5|3.1|1714564900000",
        "ZSK25|MAY/25|1021.50|1020.00|1029.00|1014.25|1017.00|1019.75|201500|5120|1.75|0.0|4.25|1714565000000",
    ],
    "MILHO": [
        "ZCH25|MAR/25|452.50|452.00|455.75|449.25|450.00|451.00|800100|20111|1.50|0.4|-12.75|1714564800000",
        "ZCK25|MAY/25|460.25S|459.75|463.00|457.50|458.00|459.00|420300|11872|-0.25|-0.8|-10.5|1714564900000",
    ],
}

CURRENCY = [
    "WDOFUT-DOL|5.1234|0.0123|+0.24%|1714564800000",
    "EURO-BRL|5.5678|-0.0101|-0.18%|1714564800000",
]


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output", type=Path, default=Path("."), help="Output directory")
    args = parser.parse_args()

    config = ConfigLoader.create().load()
    builder = TableLayoutBuilder(
        style=config.style,
        feed_name=config.feed.feed_name,
        logo_src=config.render.logo_src,
        settlement_flag=config.feed.settlement_flag,
    )
    renderer = TableRenderer.from_params(config.render)
    currency = resolve_currency(parse_many(CURRENCY, parse_currency_data))

    args.output.mkdir(parents=True, exist_ok=True)
    for title, entries in SAMPLES.items():
        records = sort_by_time(parse_many(entries, parse_market_data))
        model = builder.build(records, title, currency.dollar, currency.euro)
        path = args.output / f"{title.lower()}.png"
        path.write_bytes(renderer.render(model))
        print(f"✅ {title}: {len(model.expirations)} contracts -> {path}")


if __name__ == "__main__":
    main()
