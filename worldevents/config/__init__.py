"""Configuration management for the world events aggregator."""

from .loader import (
    Config,
    default_config_path,
    load_config,
    load_default_sources,
    load_sources,
    parse_sources,
    save_config,
    save_sources,
)
from .models import ConfigModel, FetchConfig, QueryDefaults, ServerConfig, SourceConfig

__all__ = [
    "Config",
    "ConfigModel",
    "FetchConfig",
    "QueryDefaults",
    "ServerConfig",
    "SourceConfig",
    "default_config_path",
    "load_config",
    "load_default_sources",
    "load_sources",
    "parse_sources",
    "save_config",
    "save_sources",
]
