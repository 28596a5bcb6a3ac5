"""Pydantic models for WeinBlog configuration.

These models define the structure of the config.toml file.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 2
    debug: bool = False
    enforce_https: bool = False
    rate_limit_per_minute: int = 60
    # CORS configuration - empty list means same-origin only
    cors_origins: list[str] = []


class StorageConfig(BaseModel):
    """File storage configuration."""

    data_dir: Path = Field(default_factory=lambda: Path("data"))
    max_upload_mb: int = 10

    @property
    def source_urls_file(self) -> Path:
        """Get the path of the wine source URL store."""
        return self.data_dir / "source_urls.json"

    @property
    def max_upload_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_mb * 1024 * 1024


class OCRConfig(BaseModel):
    """OCR (Optical Character Recognition) configuration."""

    enabled: bool = True
    tesseract_lang: str = "eng+deu"
    tesseract_cmd: str | None = None


class CatalogConfig(BaseModel):
    """Wine catalog configuration.

    When ``path`` is unset the catalog bundled with the package is used.
    """

    path: Path | None = None


class MatchingConfig(BaseModel):
    """Wine identification configuration."""

    default_language: Literal["en", "de", "zh"] = "en"
    scan_debounce_seconds: float = 1.0


class WeinblogConfig(BaseModel):
    """Main WeinBlog configuration loaded from config.toml."""

    app_name: str = "WeinBlog"
    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
