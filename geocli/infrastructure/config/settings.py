"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
YAML configuration file (~/.geocli/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".geocli"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "GEOCLI_"

DEFAULT_GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_LOG_LEVEL = "WARNING"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}  # For testing purposes
_loaded = False

def load_configuration(config_file: Optional[Path] = None, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file (~/.geocli/config.yaml if None).
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}
    config_file = config_file or DEFAULT_CONFIG_FILE

    # 1. Load from YAML file (Lowest priority)
    if config_file.is_file():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug(".env file not found at or above current directory.")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")

def reset_configuration() -> None:
    """Forgets everything loaded so the next load_configuration starts fresh."""
    global _config, _loaded
    _config = {}
    _loaded = False

def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML mappings into dotted keys ('geocoding': {'url': ..} -> 'geocoding.url')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat

def _coerce(value: str) -> Any:
    """Converts common string representations coming from the environment."""
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value

def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (GEOCLI_ prefixed first, then bare)
    3. YAML config
    4. Default value

    Environment names are derived from the key by upper-casing it and
    replacing dots with underscores ('geocoding.url' -> GEOCLI_GEOCODING_URL).

    Args:
        key: The configuration key
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = key.upper().replace('.', '_')
    for candidate in (f"{ENV_PREFIX}{env_key}", env_key):
        if candidate in os.environ:
            return _coerce(os.environ[candidate])

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default

def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Convenience Functions ---

def get_geocoding_url() -> str:
    """Base URL of the geocoding endpoint."""
    return str(get_config('geocoding.url', DEFAULT_GEOCODING_URL))

def get_api_key() -> Optional[str]:
    """Convenience function to get the geocoding API key."""
    # Checks GEOCLI_GEOCODING_API_KEY / GEOCODING_API_KEY / yaml geocoding.api_key,
    # then the conventional GOOGLE_MAPS_API_KEY
    key = get_config('geocoding.api_key') or get_config('GOOGLE_MAPS_API_KEY')
    return str(key) if key else None

def get_log_level() -> str:
    level = get_config('logging.level', DEFAULT_LOG_LEVEL)
    return str(level).upper()

def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")

def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
