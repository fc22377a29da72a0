"""
Configuration Loader

Loads YAML configuration files and resolves catalog API settings from
config, environment variables and explicit overrides.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import DEFAULT_BASE_URL

CATALOG_CONFIG_FILE = 'catalog.yaml'

# Environment variable -> settings key
ENV_OVERRIDES = {
    'CATALOG_API_BASE_URL': 'base_url',
    'CATALOG_API_TOKEN': 'token',
    'CATALOG_STORE_ID': 'store_id',
    'CATALOG_STORE_NAME': 'store_name',
}

DEFAULT_SETTINGS: Dict[str, Any] = {
    'base_url': DEFAULT_BASE_URL,
    'token': None,
    'timeout': 30,
    'store_id': None,
    'store_name': None,
}


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
        filename: Name of the config file (e.g., 'catalog.yaml')

    Returns:
        Parsed YAML content as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_catalog_settings(
    overrides: Optional[Dict[str, Any]] = None,
    config: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Resolve catalog API settings.

    Precedence: overrides > environment > catalog.yaml > defaults.
    None values in overrides are ignored, so argparse results can be
    passed straight in.

    Args:
        overrides: Explicit values (e.g., from CLI flags)
        config: Parsed catalog config (if None, loads catalog.yaml when present)
        environ: Environment mapping (if None, uses os.environ)

    Returns:
        Settings dict with keys base_url, token, timeout, store_id, store_name

    Example:
        {
            'base_url': 'http://localhost:8000/api/v1',
            'token': None,
            'timeout': 30,
            'store_id': '3',
            'store_name': 'Centro',
        }
    """
    if config is None:
        try:
            config = load_config(CATALOG_CONFIG_FILE)
        except FileNotFoundError:
            config = {}
    if environ is None:
        environ = os.environ

    settings = dict(DEFAULT_SETTINGS)
    settings.update({k: v for k, v in config.get('catalog', {}).items() if v is not None})

    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            settings[key] = value

    if overrides:
        settings.update({k: v for k, v in overrides.items() if v is not None})

    settings['timeout'] = int(settings['timeout'])
    return settings
