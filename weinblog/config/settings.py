"""Global settings instance for WeinBlog.

This module provides a unified settings object on top of the structured
configuration loaded from config.toml and environment variable overrides.
"""

import logging
from pathlib import Path

from weinblog.config.loader import load_config
from weinblog.config.schema import WeinblogConfig

logger = logging.getLogger(__name__)


class Settings:
    """Flat interface over the structured WeinblogConfig.

    Attributes are exposed as properties so call sites do not need to know
    which config section a value lives in.
    """

    def __init__(self, config: WeinblogConfig | None = None):
        """Initialize settings.

        Args:
            config: Optional WeinblogConfig instance. If not provided, loads from file.
        """
        self._config = config or load_config()

    @property
    def config(self) -> WeinblogConfig:
        """Get the full configuration object."""
        return self._config

    # Application
    @property
    def app_name(self) -> str:
        return self._config.app_name

    @property
    def debug(self) -> bool:
        return self._config.server.debug

    # Server
    @property
    def host(self) -> str:
        return self._config.server.host

    @property
    def port(self) -> int:
        return self._config.server.port

    @property
    def workers(self) -> int:
        return self._config.server.workers

    @property
    def enforce_https(self) -> bool:
        return self._config.server.enforce_https

    @property
    def rate_limit_per_minute(self) -> int:
        return self._config.server.rate_limit_per_minute

    @property
    def cors_origins(self) -> list[str]:
        return self._config.server.cors_origins

    # Storage
    @property
    def data_dir(self) -> Path:
        return self._config.storage.data_dir

    @property
    def source_urls_file(self) -> Path:
        return self._config.storage.source_urls_file

    @property
    def max_upload_size_bytes(self) -> int:
        return self._config.storage.max_upload_bytes

    # OCR
    @property
    def ocr_enabled(self) -> bool:
        return self._config.ocr.enabled

    @property
    def tesseract_lang(self) -> str:
        return self._config.ocr.tesseract_lang

    @property
    def tesseract_cmd(self) -> str | None:
        return self._config.ocr.tesseract_cmd

    # Catalog
    @property
    def catalog_path(self) -> Path | None:
        return self._config.catalog.path

    # Matching
    @property
    def default_language(self) -> str:
        return self._config.matching.default_language

    @property
    def scan_debounce_seconds(self) -> float:
        return self._config.matching.scan_debounce_seconds


# Global settings instance - lazily initialized
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    The settings are loaded once and cached for subsequent calls.

    Returns:
        The global Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance.

    This is primarily useful for testing to reload configuration.
    """
    global _settings
    _settings = None


class _SettingsProxy:
    """Proxy object that lazily loads settings on first access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return repr(get_settings())


settings = _SettingsProxy()
