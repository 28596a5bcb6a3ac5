"""Static wine catalog."""

from weinblog.catalog.catalog import Catalog, CatalogError
from weinblog.catalog.loader import DEFAULT_CATALOG_PATH, load_catalog

__all__ = ["Catalog", "CatalogError", "DEFAULT_CATALOG_PATH", "load_catalog"]
