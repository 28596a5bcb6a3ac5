"""Matching of OCR text read from a wine label photo."""

import logging
from collections.abc import Iterable

from weinblog.models import WineRecord

from .constants import FILENAME_SEARCH_TERMS, MIN_TOKEN_LENGTH, OCR_SEARCH_TERMS
from .text import TextMatcher

logger = logging.getLogger(__name__)


class LabelTextMatcher:
    """Find a wine from noisy label text.

    Known grape and style keywords are tried first; when none leads to a
    wine, every longer word of the text is used as a query.
    """

    def __init__(
        self,
        text_matcher: TextMatcher,
        search_terms: Iterable[str] = OCR_SEARCH_TERMS,
        filename_terms: Iterable[str] = FILENAME_SEARCH_TERMS,
    ) -> None:
        self.text_matcher = text_matcher
        self.search_terms = tuple(search_terms)
        self.filename_terms = tuple(filename_terms)

    def match_text(self, text: str, language: str) -> WineRecord | None:
        """Identify a wine from OCR output.

        Args:
            text: Raw recognized text.
            language: Display language used for lookups.

        Returns:
            The first wine found, or None.
        """
        recognized = text.lower()
        if not recognized.strip():
            return None

        wine = self._match_keywords(recognized, self.search_terms, language)
        if wine is not None:
            return wine

        for word in recognized.split():
            if len(word) <= MIN_TOKEN_LENGTH:
                continue
            wine = self.text_matcher.first_match(word, language)
            if wine is not None:
                logger.info("Label word %r matched %s", word, wine.name)
                return wine
        return None

    def match_filename(self, filename: str, language: str) -> WineRecord | None:
        """Identify a wine from an image filename when OCR is unavailable."""
        return self._match_keywords(filename.lower(), self.filename_terms, language)

    def _match_keywords(
        self, text: str, terms: tuple[str, ...], language: str
    ) -> WineRecord | None:
        for term in terms:
            if term in text:
                wine = self.text_matcher.first_match(term, language)
                if wine is not None:
                    logger.info("Label keyword %r matched %s", term, wine.name)
                    return wine
        return None
