"""Configuration loader."""

import logging
import os
from importlib import resources
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel, SourceConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WORLDEVENTS_CONFIG"


def default_config_path() -> Path:
    """Config path from the environment, else ~/.config/worldevents/config.yaml."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "worldevents" / "config.yaml"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = default_config_path()
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None
        self._sources: Optional[List[SourceConfig]] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    @property
    def sources_path(self) -> Path:
        """Get the sources.yaml path for this config."""
        if self.config.sources_path:
            return Path(self.config.sources_path).expanduser()
        return self.config_path.parent / "sources.yaml"

    @property
    def sources(self) -> List[SourceConfig]:
        """Get the feed source registry."""
        if self._sources is None:
            if self.sources_path.exists():
                self._sources = load_sources(self.sources_path)
            else:
                logger.debug("No sources file at %s, using bundled registry", self.sources_path)
                self._sources = load_default_sources()
        return self._sources


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def parse_sources(sources_data: Optional[dict]) -> List[SourceConfig]:
    """Build the registry from a parsed sources document.

    Entries that fail validation or repeat an earlier id are skipped.
    """
    if sources_data is None or "sources" not in sources_data:
        return []

    sources: List[SourceConfig] = []
    seen_ids = set()
    for source_data in sources_data["sources"] or []:
        try:
            source = SourceConfig(**source_data)
        except (TypeError, ValidationError) as e:
            name = source_data.get("id", "unknown") if isinstance(source_data, dict) else "unknown"
            logger.warning("Skipping invalid source %s: %s", name, e)
            continue
        if source.id in seen_ids:
            logger.warning("Skipping duplicate source id %s", source.id)
            continue
        seen_ids.add(source.id)
        sources.append(source)

    return sources


def load_sources(sources_path: Path) -> List[SourceConfig]:
    """Load sources from YAML file."""
    if not sources_path.exists():
        raise FileNotFoundError(f"Sources file not found: {sources_path}")

    try:
        with open(sources_path) as f:
            return parse_sources(yaml.safe_load(f))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in sources file: {e}")


def load_default_sources() -> List[SourceConfig]:
    """Load the registry bundled with the package."""
    text = resources.files("worldevents.data").joinpath("sources.yaml").read_text(encoding="utf-8")
    return parse_sources(yaml.safe_load(text))


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def save_sources(sources: List[SourceConfig], sources_path: Path) -> None:
    """Save sources to YAML file."""
    sources_path.parent.mkdir(parents=True, exist_ok=True)

    sources_data = {"sources": [s.model_dump() for s in sources]}

    with open(sources_path, "w") as f:
        yaml.dump(sources_data, f, default_flow_style=False, sort_keys=False)
