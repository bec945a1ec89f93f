"""
Loading of thumbnail settings from YAML files.

Expected layout:

    thumbs:
      - name: standard
        quality: 80
        size: [640, 480]
        mode: fit
      - name: mini
        naming_pattern: "/{thumb_name}/{image_stem}"
        quality: 80
        size: [40, 40]
        mode: crop
"""

import logging
import os
from typing import Optional

import yaml

from .errors import ConfigError
from .thumbnail_spec import ThumbnailSet

CONFIG_EXTENSIONS = ('.yaml', '.yml')

logger = logging.getLogger(__name__)


def resolve_config_path(config: str) -> str:
    """
    Find the settings file for a config location.

    The location may omit the .yaml/.yml extension.
    """
    if os.path.isfile(config):
        return config
    for ext in CONFIG_EXTENSIONS:
        candidate = f"{config}{ext}"
        if os.path.isfile(candidate):
            return candidate
    raise ConfigError(f"Configuration file not found: {config}")


def parse_settings(text: str, source: Optional[str] = None) -> ThumbnailSet:
    """Parse and validate YAML settings text."""
    where = f" in {source}" if source else ""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML{where}: {e}") from e

    if not isinstance(data, dict) or 'thumbs' not in data:
        raise ConfigError(f"Missing top-level 'thumbs' list{where}")

    return ThumbnailSet.from_list(data['thumbs'])


def load_settings(config: str) -> ThumbnailSet:
    """
    Load thumbnail settings from a YAML file.

    Args:
        config: Path to the config file (.yaml may be omitted)

    Returns:
        Validated ThumbnailSet
    """
    path = resolve_config_path(config)
    try:
        with open(path, encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e

    settings = parse_settings(text, source=path)
    logger.debug(f"Loaded {len(settings)} thumbnail specs from {path}: {', '.join(settings.names)}")
    return settings
