"""Exact lookup of scanned barcode / QR payloads."""

import logging

from weinblog.catalog import Catalog
from weinblog.models import WineRecord

logger = logging.getLogger(__name__)


class CodeMatcher:
    """Resolve a decoded scan payload to the wine that lists it.

    Codes are compared exactly as delivered: no trimming and no case
    folding, so ``" WEIN-MOS-001"`` does not match ``"WEIN-MOS-001"``.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self._index: dict[str, WineRecord] = {}
        for wine in catalog:
            for code in wine.scan_codes:
                # First wine in catalog order owns a shared code
                self._index.setdefault(code, wine)

    def match_by_code(self, code: str) -> WineRecord | None:
        """Find the wine whose scan codes contain ``code``.

        Args:
            code: Raw decoded string from a scanner or manual entry.

        Returns:
            The matching wine, or None when the code is empty or unknown.
        """
        if not code:
            return None

        wine = self._index.get(code)
        if wine is None:
            logger.info("Scanned code %r not in catalog", code)
        return wine
