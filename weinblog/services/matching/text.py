"""Substring search over localized wine fields."""

from weinblog.catalog import Catalog
from weinblog.models import WineRecord


class TextMatcher:
    """Case-insensitive containment search in one display language.

    Only the fields of the requested language are searched; German or
    Chinese text never matches an English query and vice versa.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def match_by_name(self, query: str, language: str) -> list[WineRecord]:
        """Return every wine whose name, region, country or grapes contain ``query``.

        Args:
            query: Free text from the search box or OCR.
            language: Display language, one of ``en``, ``de``, ``zh``.

        Returns:
            Matching wines in catalog order; empty for a blank query.
        """
        needle = query.strip().lower()
        if not needle:
            return []

        return [wine for wine in self.catalog if _contains(wine, needle, language)]

    def first_match(self, query: str, language: str) -> WineRecord | None:
        """Return the first wine matching ``query``, if any."""
        results = self.match_by_name(query, language)
        return results[0] if results else None


def _contains(wine: WineRecord, needle: str, language: str) -> bool:
    fields = (
        wine.name_for(language),
        wine.region_for(language),
        wine.country_for(language),
        *wine.grapes_for(language),
    )
    return any(needle in field.lower() for field in fields if field)
