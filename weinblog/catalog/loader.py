"""Catalog loading from the bundled JSON data file."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from weinblog.catalog.catalog import Catalog, CatalogError
from weinblog.models import WineRecord

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "wines.json"


def load_catalog(path: Path | None = None) -> Catalog:
    """Load the wine catalog.

    Args:
        path: JSON file holding a list of wine objects. Defaults to the
              catalog bundled with the package.

    Returns:
        The loaded Catalog.

    Raises:
        CatalogError: If the file is missing, malformed, or a record is invalid.
    """
    catalog_path = path or DEFAULT_CATALOG_PATH

    try:
        with open(catalog_path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read catalog {catalog_path}: {e}") from e

    if not isinstance(raw, list):
        raise CatalogError(f"Catalog {catalog_path} must contain a list of wines")

    wines = []
    for index, entry in enumerate(raw):
        try:
            wines.append(WineRecord.model_validate(entry))
        except ValidationError as e:
            raise CatalogError(f"Invalid wine at position {index} in {catalog_path}: {e}") from e

    catalog = Catalog(wines)
    logger.info(f"Loaded {len(catalog)} wines from {catalog_path}")
    return catalog
