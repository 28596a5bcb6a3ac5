"""WeinBlog configuration module.

This module provides TOML-based configuration with environment variable overrides.

Configuration is loaded from the following locations (in order of priority):
1. Environment variables (highest priority)
2. ./config.toml (project root - for development)
3. ~/.config/weinblog/config.toml (user config)
4. /opt/weinblog/config.toml (production install)
5. /etc/weinblog/config.toml (system config)
"""

from weinblog.config.schema import (
    CatalogConfig,
    MatchingConfig,
    OCRConfig,
    ServerConfig,
    StorageConfig,
    WeinblogConfig,
)
from weinblog.config.settings import get_settings, reset_settings, settings

__all__ = [
    "CatalogConfig",
    "MatchingConfig",
    "OCRConfig",
    "ServerConfig",
    "StorageConfig",
    "WeinblogConfig",
    "get_settings",
    "reset_settings",
    "settings",
]
