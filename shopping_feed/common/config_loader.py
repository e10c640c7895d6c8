"""
Configuration Loader

Loads the YAML feed settings and merges in Shopify credentials
from the environment.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .constants import (
    MAX_PAGE_SIZE,
    MAX_PAGES,
    NO_VARIATION_TITLE,
    OPTION_ALIASES,
    PAGE_SIZE,
)

_CURRENCY_RE = re.compile(r'^[A-Z]{3}$')


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""


@dataclass
class FeedSettings:
    """Everything a feed run needs besides the catalog itself."""
    host_name: str
    access_token: str
    shop_url: str
    currency: str
    id_prefix: str = "shopify"
    no_variation_title: str = NO_VARIATION_TITLE
    page_size: int = PAGE_SIZE
    max_pages: int = MAX_PAGES
    option_aliases: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in OPTION_ALIASES.items()}
    )


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'feed_settings.yaml'),
                  or a path to one

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = Path(filename)
    if not config_path.is_file():
        config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_option_aliases(config: Optional[Dict[str, Any]] = None) -> Dict[str, List[str]]:
    """
    Load option name fallback chains.

    Args:
        config: Parsed feed settings (if None, loads from config)

    Returns:
        Dictionary mapping feed attribute to candidate option names

    Example:
        {
            'color': ['Color', 'Farbe'],
            'size': ['Size', 'Größe'],
            'material': ['Material'],
        }
    """
    if config is None:
        config = load_config('feed_settings.yaml')

    aliases = {k: list(v) for k, v in OPTION_ALIASES.items()}
    for attribute, names in (config.get('option_aliases') or {}).items():
        if isinstance(names, str):
            names = [names]
        aliases[attribute] = [str(name) for name in names]
    return aliases


def _read_feed_config(config_file: str) -> Dict[str, Any]:
    try:
        config = load_config(config_file)
    except OSError as e:
        raise ConfigurationError(f"Cannot read feed settings: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed feed settings {config_file}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Feed settings {config_file} must be a mapping")
    return config


def _bounded_int(config: Dict[str, Any], key: str, default: int,
                 minimum: int, maximum: Optional[int] = None) -> int:
    """Read an integer setting and check it lies in [minimum, maximum]."""
    raw = config.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid {key}: {raw!r}") from e

    if value < minimum or (maximum is not None and value > maximum):
        upper = maximum if maximum is not None else "unbounded"
        raise ConfigurationError(f"{key} out of range ({minimum}..{upper}): {value}")
    return value


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_file: str = 'feed_settings.yaml'
) -> FeedSettings:
    """
    Build feed settings from the YAML config and the environment.

    Credentials are checked first so a misconfigured deployment fails
    before any file or network access.

    Args:
        environ: Environment mapping (default: os.environ)
        config_file: YAML file name in config/ or a path

    Returns:
        Populated FeedSettings

    Raises:
        ConfigurationError: If credentials are missing, the settings file
            is missing or malformed, or a setting is out of range
    """
    if environ is None:
        environ = os.environ

    host_name = environ.get("SHOPIFY_HOST_NAME", "").strip()
    access_token = environ.get("SHOPIFY_ADMIN_ACCESS_TOKEN", "").strip()
    if not host_name or not access_token:
        raise ConfigurationError("Missing Shopify credentials")

    config = _read_feed_config(config_file)

    shop_url = environ.get("FEED_SHOP_URL") or config.get('shop_url', '')
    currency = (environ.get("FEED_CURRENCY") or config.get('currency', '')).strip().upper()

    if not shop_url:
        raise ConfigurationError("Missing shop_url in feed settings")
    if not _CURRENCY_RE.match(currency):
        raise ConfigurationError(f"Invalid currency code: {currency!r}")

    return FeedSettings(
        host_name=host_name,
        access_token=access_token,
        shop_url=shop_url.rstrip('/'),
        currency=currency,
        id_prefix=config.get('id_prefix', 'shopify'),
        no_variation_title=config.get('no_variation_title', NO_VARIATION_TITLE),
        page_size=_bounded_int(config, 'page_size', PAGE_SIZE, 1, MAX_PAGE_SIZE),
        max_pages=_bounded_int(config, 'max_pages', MAX_PAGES, 1),
        option_aliases=load_option_aliases(config),
    )
