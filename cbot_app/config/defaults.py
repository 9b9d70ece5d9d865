"""Default configuration parameters for the snapshot service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreParams:
    """Redis cache connection and key layout."""
    url: str = ""                                  # REDIS_URL
    password: str = ""                             # REDIS_PASSWORD
    contract_key_prefix: str = "CBOT:"             # Contract keys: <prefix><symbol>...
    currency_key_prefix: str = "B3:FX:"            # Currency keys: <prefix>...
    scan_count: int = 100                          # SCAN page size


@dataclass(frozen=True)
class FeedParams:
    """Feed entry format and symbol conventions."""
    feed_name: str = "Broadcast"
    delimiter: str = "|"
    settlement_flag: str = "S"                     # Trailing flag on settled last prices
    dollar_tag: str = "DOL"
    euro_tag: str = "EURO"
    soybean_symbol: str = "ZS"
    corn_symbol: str = "ZC"


@dataclass(frozen=True)
class RenderParams:
    """Raster renderer canvas options."""
    width: int = 2048
    dpi: int = 100
    logo_src: str = ""                             # Local image file for the brand logo
    font_family: str = "DejaVu Sans"
    mono_font_family: str = "DejaVu Sans Mono"


@dataclass(frozen=True)
class StyleParams:
    """Color tokens for the table layout."""
    page_bg: str = "#f8fafc"
    primary_bg: str = "#ffffff"
    alt_bg: str = "#f8fafc"
    highlight_bg: str = "#ECFDF5"
    soft_bg: str = "#F0FDF4"
    header_bg: str = "#1B4332"
    primary_text: str = "#1B4332"
    highlight_text: str = "#065F46"
    soft_text: str = "#166534"
    muted_text: str = "#6b7280"
    header_text: str = "#ffffff"
    positive: str = "#16a34a"
    negative: str = "#dc2626"
    border: str = "#e5e7eb"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output options."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete configuration."""
    store: StoreParams
    feed: FeedParams
    render: RenderParams
    style: StyleParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        store=StoreParams(),
        feed=FeedParams(),
        render=RenderParams(),
        style=StyleParams(),
        logging=LoggingParams(),
    )
