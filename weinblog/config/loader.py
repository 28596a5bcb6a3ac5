"""Configuration loader for WeinBlog.

Loads configuration from TOML files. Environment variables can override
any configuration value.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from weinblog.config.schema import WeinblogConfig

logger = logging.getLogger(__name__)

# Keys converted to int / float / bool when read from the environment
_INT_KEYS = ("port", "workers", "max_upload_mb", "rate_limit_per_minute")
_FLOAT_KEYS = ("scan_debounce_seconds",)
_BOOL_KEYS = ("debug", "enforce_https", "enabled")


def get_config_search_paths() -> list[Path]:
    """Get the list of paths to search for configuration files.

    Returns paths in priority order (first found wins):
    1. ./config.toml (project root - for development)
    2. ~/.config/weinblog/config.toml (user config)
    3. /opt/weinblog/config.toml (production install)
    4. /etc/weinblog/config.toml (system config)
    """
    paths = []

    # Project root (current working directory)
    paths.append(Path.cwd() / "config.toml")

    # User config directory
    paths.append(Path.home() / ".config" / "weinblog" / "config.toml")

    # Production install directory
    paths.append(Path("/opt/weinblog/config.toml"))

    # System config (Linux FHS)
    paths.append(Path("/etc/weinblog/config.toml"))

    return paths


def find_config_file() -> Path | None:
    """Find the first existing config file from search paths."""
    for path in get_config_search_paths():
        if path.exists() and path.is_file():
            logger.debug(f"Found config file: {path}")
            return path
    return None


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = "WEINBLOG") -> None:
    """Apply environment variable overrides to configuration dictionary.

    Environment variables are mapped as follows:
    - WEINBLOG_SERVER_HOST -> config_dict["server"]["host"]
    - WEINBLOG_CATALOG_PATH -> config_dict["catalog"]["path"]
    - etc.

    Note: This modifies config_dict in place.
    """
    env_mappings = {
        # Server
        f"{prefix}_SERVER_HOST": ("server", "host"),
        f"{prefix}_SERVER_PORT": ("server", "port"),
        f"{prefix}_SERVER_WORKERS": ("server", "workers"),
        f"{prefix}_SERVER_DEBUG": ("server", "debug"),
        f"{prefix}_DEBUG": ("server", "debug"),  # Shorthand
        f"{prefix}_HOST": ("server", "host"),  # Shorthand
        f"{prefix}_PORT": ("server", "port"),  # Shorthand
        f"{prefix}_SERVER_RATE_LIMIT_PER_MINUTE": ("server", "rate_limit_per_minute"),
        # Storage
        f"{prefix}_STORAGE_DATA_DIR": ("storage", "data_dir"),
        f"{prefix}_STORAGE_MAX_UPLOAD_MB": ("storage", "max_upload_mb"),
        f"{prefix}_DATA_DIR": ("storage", "data_dir"),  # Shorthand
        # OCR
        f"{prefix}_OCR_ENABLED": ("ocr", "enabled"),
        f"{prefix}_OCR_TESSERACT_LANG": ("ocr", "tesseract_lang"),
        f"{prefix}_OCR_TESSERACT_CMD": ("ocr", "tesseract_cmd"),
        # Catalog
        f"{prefix}_CATALOG_PATH": ("catalog", "path"),
        # Matching
        f"{prefix}_MATCHING_DEFAULT_LANGUAGE": ("matching", "default_language"),
        f"{prefix}_MATCHING_SCAN_DEBOUNCE_SECONDS": ("matching", "scan_debounce_seconds"),
    }

    for env_var, path in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            section, key = path

            # Ensure section exists
            if section not in config_dict:
                config_dict[section] = {}

            # Convert value to appropriate type
            if key in _INT_KEYS:
                config_dict[section][key] = int(value)
            elif key in _FLOAT_KEYS:
                config_dict[section][key] = float(value)
            elif key in _BOOL_KEYS:
                config_dict[section][key] = value.lower() in ("true", "1", "yes")
            else:
                config_dict[section][key] = value


def load_config(config_file: Path | None = None) -> WeinblogConfig:
    """Load configuration from TOML file with environment variable overrides.

    Args:
        config_file: Optional path to config file. If not provided,
                     searches default locations.

    Returns:
        WeinblogConfig instance with all settings loaded.
    """
    config_dict: dict[str, Any] = {}

    # Find and load config file
    if config_file is None:
        config_file = find_config_file()

    if config_file and config_file.exists():
        logger.info(f"Loading config from: {config_file}")
        config_dict = load_toml_file(config_file)
    else:
        logger.info("No config file found, using defaults with env overrides")

    # Apply environment variable overrides
    apply_env_overrides(config_dict)

    return WeinblogConfig(**config_dict)
