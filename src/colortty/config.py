"""Configuration management for colortty."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "colortty"


def default_cache_dir() -> str:
    """Resolve the cache directory from the environment."""
    explicit = os.environ.get("COLORTTY_CACHE_DIR")
    if explicit:
        return explicit
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return str(Path(xdg_cache) / APP_NAME)
    return str(Path.home() / ".cache" / APP_NAME)


def default_config_path() -> Path:
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / APP_NAME / "config.yaml"


@dataclass
class ConfigModel:
    """Global configuration model for colortty."""

    # Where downloaded catalogs are kept
    cache_dir: str = ""

    # Defaults for the list/get/convert commands
    default_provider: str = "iterm"
    output_format: str = "toml"  # toml, yaml

    # Network settings
    max_concurrent_downloads: int = 10
    request_timeout: float = 30.0
    user_agent: str = APP_NAME
    branch: str = "master"

    def __post_init__(self):
        """Post-initialization setup."""
        if not self.cache_dir:
            self.cache_dir = default_cache_dir()
        self.cache_dir = os.path.expanduser(self.cache_dir)

        if self.output_format not in ("toml", "yaml"):
            raise ConfigError(f"Unknown output format: {self.output_format}")
        if self.max_concurrent_downloads < 1:
            raise ConfigError("max_concurrent_downloads must be at least 1")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")

    @property
    def cache_path(self) -> Path:
        return Path(self.cache_dir)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML.

        Raises:
            ConfigError: If the document is not a YAML mapping of known settings
        """
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            logger.warning(f"Ignoring unknown configuration key: {key}")
        settings = {key: value for key, value in data.items() if key in known}

        try:
            return cls(**settings)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


class Config:
    """Configuration manager for colortty."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, or defaults when there is none."""
        if config_path is None:
            config_path = default_config_path()

        config = ConfigModel()
        if config_path.exists():
            try:
                yaml_content = config_path.read_text(encoding="utf-8")
            except OSError as e:
                raise ConfigError(f"Failed to read config from {config_path}: {e}") from e
            config = ConfigModel.from_yaml(yaml_content)
            logger.debug(f"Loaded configuration from {config_path}")
        else:
            logger.debug(f"No configuration at {config_path}; using defaults")

        cls._instance = config
        return config

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)
