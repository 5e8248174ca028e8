"""Persistence collaborators for application config."""

import logging
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import ValidationError

from news_observer.config.loader import get_default_config_path, load_config, save_config
from news_observer.config.models import AppConfig

logger = logging.getLogger(__name__)


class ConfigStore(Protocol):
    """Interface for loading and saving the application config."""

    def load(self) -> AppConfig:
        """Return the stored config, or defaults if none is stored."""
        ...

    def save(self, config: AppConfig) -> None:
        """Persist the config. Failures are logged, not raised."""
        ...


class YamlConfigStore:
    """Store the config as a YAML file.

    Args:
        path: Config file location (defaults to the per-user config path).
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else get_default_config_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppConfig:
        if not self._path.exists():
            logger.debug("No config at %s, using defaults", self._path)
            return AppConfig()
        try:
            return load_config(self._path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
            logger.warning("Ignoring unreadable config at %s: %s", self._path, e)
            return AppConfig()

    def save(self, config: AppConfig) -> None:
        try:
            save_config(config, self._path)
        except OSError as e:
            logger.error("Failed to save config onto the disk: %s", e)
        else:
            logger.info("Saved application config to %s", self._path)
