"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .defaults import (
    DefaultConfig,
    FeedParams,
    LoggingParams,
    RenderParams,
    StoreParams,
    StyleParams,
    get_default_config,
)

# Environment variable -> (section, field)
ENV_OVERRIDES = {
    "REDIS_URL": ("store", "url"),
    "REDIS_PASSWORD": ("store", "password"),
    "CBOT_LOG_LEVEL": ("logging", "level"),
    "CBOT_LOG_JSON": ("logging", "format_json"),
    "CBOT_LOGO_SRC": ("render", "logo_src"),
}

SECTION_TYPES = {
    "store": StoreParams,
    "feed": FeedParams,
    "render": RenderParams,
    "style": StyleParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            env_dir = os.getenv("CBOT_CONFIG_DIR")
            config_dir = Path(env_dir) if env_dir else Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=config_dir,
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from settings.yaml, if present."""
        settings_file = self.config_dir / "settings.yaml"

        if not settings_file.exists():
            return {}

        with open(settings_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def load_env_config(self, environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        """Collect overrides from environment variables."""
        environ = os.environ if environ is None else environ
        config: dict[str, Any] = {}

        for var, (section, field_name) in ENV_OVERRIDES.items():
            value = environ.get(var)
            if value is None:
                continue
            if field_name == "format_json":
                value = value.strip().lower() in ("1", "true", "yes")
            config.setdefault(section, {})[field_name] = value

        return config

    def merge_config(
        self,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Environment variables and explicit overrides (highest priority)
        2. settings.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        # Start with global defaults
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())
        config = self._deep_merge(config, self.load_env_config(environ))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> DefaultConfig:
        """Build the typed configuration from the merged dictionary."""
        return config_from_dict(self.merge_config(overrides, environ))

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def config_from_dict(config: dict[str, Any]) -> DefaultConfig:
    """Build a DefaultConfig, ignoring unknown keys in each section."""
    sections = {}
    for name, section_type in SECTION_TYPES.items():
        known = {f.name for f in fields(section_type)}
        values = {k: v for k, v in (config.get(name) or {}).items() if k in known}
        sections[name] = section_type(**values)
    return DefaultConfig(**sections)
