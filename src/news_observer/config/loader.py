"""YAML configuration loading utilities."""

import os
from pathlib import Path

import yaml

from news_observer.config.models import AppConfig

APPLICATION_NAME = "news_observer"


def load_config(path: Path | str) -> AppConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated AppConfig. An empty file yields the defaults.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        UnicodeDecodeError: If the file is not valid UTF-8.
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    return AppConfig.model_validate(raw or {})


def save_config(config: AppConfig, path: Path | str) -> None:
    """Write configuration to a YAML file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False, allow_unicode=True)


def get_default_config_path() -> Path:
    """Get path to the per-user config file.

    Honours ``XDG_CONFIG_HOME``, falling back to ``~/.config``.
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APPLICATION_NAME / "config.yaml"
