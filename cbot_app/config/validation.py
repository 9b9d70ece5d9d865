"""Configuration validation utilities."""

import re
from dataclasses import dataclass
from typing import Any

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_store_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate Redis store parameters."""
        errors = []

        for key in ("contract_key_prefix", "currency_key_prefix"):
            value = params.get(key)
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field=f"store.{key}",
                    message="Must be a non-empty string",
                    value=value
                ))

        value = params.get("scan_count")
        if not isinstance(value, int) or value <= 0:
            errors.append(ValidationError(
                field="store.scan_count",
                message="Must be a positive integer",
                value=value
            ))

        return errors

    @staticmethod
    def validate_feed_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate feed format parameters."""
        errors = []

        for key in ("feed_name", "delimiter", "dollar_tag", "euro_tag",
                    "soybean_symbol", "corn_symbol"):
            value = params.get(key)
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field=f"feed.{key}",
                    message="Must be a non-empty string",
                    value=value
                ))

        # The flag is stripped from the end of the last price, one character
        value = params.get("settlement_flag")
        if not isinstance(value, str) or len(value) != 1:
            errors.append(ValidationError(
                field="feed.settlement_flag",
                message="Must be a single character",
                value=value
            ))

        return errors

    @staticmethod
    def validate_render_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate renderer parameters."""
        errors = []

        for key in ("width", "dpi"):
            value = params.get(key)
            if not isinstance(value, int) or value <= 0:
                errors.append(ValidationError(
                    field=f"render.{key}",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_style_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate color tokens."""
        errors = []

        for key, value in params.items():
            if not isinstance(value, str) or not HEX_COLOR.match(value):
                errors.append(ValidationError(
                    field=f"style.{key}",
                    message="Must be a hex color such as #1B4332",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        value = params.get("level")
        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            return [ValidationError(
                field="logging.level",
                message=f"Must be one of {', '.join(LOG_LEVELS)}",
                value=value
            )]
        return []

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete merged configuration dictionary."""
        errors = []
        errors.extend(cls.validate_store_params(config.get("store", {})))
        errors.extend(cls.validate_feed_params(config.get("feed", {})))
        errors.extend(cls.validate_render_params(config.get("render", {})))
        errors.extend(cls.validate_style_params(config.get("style", {})))
        errors.extend(cls.validate_logging_params(config.get("logging", {})))
        return errors
