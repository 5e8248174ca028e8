"""Configuration module for News Observer."""

from news_observer.config.loader import get_default_config_path, load_config, save_config
from news_observer.config.models import AppConfig
from news_observer.config.store import ConfigStore, YamlConfigStore

__all__ = [
    "AppConfig",
    "ConfigStore",
    "YamlConfigStore",
    "get_default_config_path",
    "load_config",
    "save_config",
]
