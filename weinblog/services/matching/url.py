"""Product URL matching.

A pasted shop URL is resolved by an ordered cascade of strategies. Each
strategy looks at the parsed URL and either names a wine or passes; the
first wine named wins. Later strategies are progressively less specific:

1. exact alias table on the URL filename
2. full wine name contained in the filename
3. every word of a multi-word wine name in the filename
4. keyword table by priority (wine name, grape, region, style)
5. single path / host words as free-text queries
6. weighted scoring over all wines
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from weinblog.catalog import Catalog
from weinblog.models import ExactAlias, SearchTerm, WineRecord

from .constants import (
    DOCUMENT_EXTENSION_PATTERN,
    EXACT_ALIASES,
    FIELD_WEIGHTS,
    MIN_TOKEN_LENGTH,
    SEARCH_TERMS,
    STOPLIST,
    TOKEN_SPLIT_PATTERN,
    YEAR_PATTERN,
)
from .scoring import rank_candidates
from .text import TextMatcher

logger = logging.getLogger(__name__)

# Number of detected words echoed back when nothing matched
_REASON_TERM_COUNT = 3


@dataclass(frozen=True)
class UrlInput:
    """A product URL split into the parts the strategies look at."""

    raw: str
    normalized_url: str
    hostname: str
    path_segments: tuple[str, ...]
    language: str = "en"

    @property
    def file_token(self) -> str:
        """Last path segment without document extension, lower-cased."""
        if not self.path_segments:
            return ""
        return DOCUMENT_EXTENSION_PATTERN.sub("", self.path_segments[-1]).lower()

    @property
    def combined_text(self) -> str:
        """Path segments and hostname joined by spaces, lower-cased."""
        return " ".join((*self.path_segments, self.hostname)).lower()

    @property
    def words(self) -> tuple[str, ...]:
        """Words of the combined text longer than the minimum token length."""
        return tuple(
            word
            for word in TOKEN_SPLIT_PATTERN.split(self.combined_text)
            if len(word) > MIN_TOKEN_LENGTH
        )


@dataclass(frozen=True)
class UrlMatchResult:
    """Outcome of a URL match."""

    wine: WineRecord | None
    stage: str | None = None
    normalized_url: str | None = None
    reason_if_not_found: str | None = None

    @property
    def found(self) -> bool:
        return self.wine is not None


def normalize_url(raw: str) -> str:
    """Strip whitespace and add ``https://`` when no scheme is given."""
    url = raw.strip()
    if not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


def parse_url_input(raw: str, language: str = "en") -> UrlInput:
    """Parse a user-supplied URL.

    Raises:
        ValueError: If the URL has no usable host or an invalid port.
    """
    normalized = normalize_url(raw)
    parts = urlsplit(normalized)
    # Accessing the port validates it
    _ = parts.port
    hostname = parts.hostname or ""
    if not hostname or any(ch.isspace() for ch in hostname):
        raise ValueError(f"URL has no valid host: {raw!r}")

    segments = tuple(unquote(segment) for segment in parts.path.split("/") if segment)
    return UrlInput(
        raw=raw,
        normalized_url=normalized,
        hostname=hostname,
        path_segments=segments,
        language=language,
    )


def is_stopword(word: str, stoplist: Iterable[str] = STOPLIST) -> bool:
    """Check whether a word is web or trade noise, including year numbers."""
    return word in stoplist or bool(YEAR_PATTERN.match(word))


def extract_tokens(url_input: UrlInput, stoplist: Iterable[str] = STOPLIST) -> tuple[str, ...]:
    """Words of the URL that may identify a wine."""
    stopwords = frozenset(stoplist)
    return tuple(word for word in url_input.words if not is_stopword(word, stopwords))


class UrlMatchStrategy(ABC):
    """One stage of the URL matching cascade."""

    name: str = "strategy"

    @abstractmethod
    def try_match(self, url_input: UrlInput) -> WineRecord | None:
        """Return the wine this stage identifies, or None to pass."""


class ExactAliasStrategy(UrlMatchStrategy):
    """Known product slugs mapped straight to a wine id."""

    name = "exact_alias"

    def __init__(self, catalog: Catalog, aliases: Iterable[ExactAlias] = EXACT_ALIASES) -> None:
        self.catalog = catalog
        self.aliases = tuple(aliases)

    def try_match(self, url_input: UrlInput) -> WineRecord | None:
        file_token = url_input.file_token
        if not file_token:
            return None

        for alias in self.aliases:
            for pattern in alias.patterns:
                if pattern in file_token:
                    wine = self.catalog.get(alias.wine_id)
                    if wine is not None:
                        return wine
        return None


class FullNameStrategy(UrlMatchStrategy):
    """Filename contains a complete English, German or Chinese wine name."""

    name = "full_name"
    min_name_length = 3

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def try_match(self, url_input: UrlInput) -> WineRecord | None:
        file_token = url_input.file_token
        if not file_token:
            return None

        for wine in self.catalog:
            for name in (wine.name.lower(), wine.name_de.lower()):
                if len(name) < self.min_name_length:
                    continue
                if name in file_token or re.sub(r"\s+", "-", name) in file_token:
                    return wine

            name_zh = wine.name_zh.lower()
            if len(name_zh) >= self.min_name_length and name_zh in file_token:
                return wine
        return None


class MultiWordNameStrategy(UrlMatchStrategy):
    """Every significant word of a multi-word wine name appears in the filename."""

    name = "multi_word_name"
    min_word_length = 2

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def try_match(self, url_input: UrlInput) -> WineRecord | None:
        file_token = url_input.file_token
        if not file_token:
            return None

        for wine in self.catalog:
            words = [w for w in wine.name.lower().split() if len(w) > self.min_word_length]
            if len(words) > 1 and all(word in file_token for word in words):
                return wine
        return None


class KeywordTableStrategy(UrlMatchStrategy):
    """Synonym table searched in priority order.

    A complete wine name (priority 1) wins over a grape (2), a grape over a
    region (3), a region over a style word (4), whatever their position in
    the URL.
    """

    name = "keyword_table"

    def __init__(
        self,
        text_matcher: TextMatcher,
        search_terms: Iterable[SearchTerm] = SEARCH_TERMS,
    ) -> None:
        self.text_matcher = text_matcher
        self.search_terms = tuple(sorted(search_terms, key=lambda term: term.priority))

    def try_match(self, url_input: UrlInput) -> WineRecord | None:
        text = url_input.combined_text
        for term in self.search_terms:
            if not any(alias in text for alias in term.aliases):
                continue
            wine = self.text_matcher.first_match(term.canonical_query, url_input.language)
            if wine is not None:
                return wine
        return None


class TokenStrategy(UrlMatchStrategy):
    """Each non-noise URL word tried as a free-text query."""

    name = "token"

    def __init__(self, text_matcher: TextMatcher, stoplist: Iterable[str] = STOPLIST) -> None:
        self.text_matcher = text_matcher
        self.stoplist = frozenset(stoplist)

    def try_match(self, url_input: UrlInput) -> WineRecord | None:
        for word in extract_tokens(url_input, self.stoplist):
            wine = self.text_matcher.first_match(word, url_input.language)
            if wine is not None:
                return wine
        return None


class ScoringStrategy(UrlMatchStrategy):
    """Weighted scoring of all wines against the URL words."""

    name = "scoring"

    def __init__(
        self,
        catalog: Catalog,
        weights: Mapping[str, int] = FIELD_WEIGHTS,
        stoplist: Iterable[str] = STOPLIST,
    ) -> None:
        self.catalog = catalog
        self.weights = weights
        self.stoplist = frozenset(stoplist)

    def try_match(self, url_input: UrlInput) -> WineRecord | None:
        tokens = extract_tokens(url_input, self.stoplist)
        ranked = rank_candidates(tokens, self.catalog, self.weights)
        if not ranked:
            return None

        best = ranked[0]
        logger.debug(
            "Scoring winner %s with %d points (%s)",
            best.wine.name,
            best.score,
            ", ".join(best.matched_fields),
        )
        return best.wine


def default_strategies(
    catalog: Catalog,
    text_matcher: TextMatcher,
    stoplist: Iterable[str] = STOPLIST,
) -> tuple[UrlMatchStrategy, ...]:
    """The standard cascade, most specific first."""
    return (
        ExactAliasStrategy(catalog),
        FullNameStrategy(catalog),
        MultiWordNameStrategy(catalog),
        KeywordTableStrategy(text_matcher),
        TokenStrategy(text_matcher, stoplist),
        ScoringStrategy(catalog, stoplist=stoplist),
    )


class UrlMatcher:
    """Run the URL strategies in order until one names a wine."""

    def __init__(
        self,
        catalog: Catalog,
        text_matcher: TextMatcher | None = None,
        strategies: Iterable[UrlMatchStrategy] | None = None,
        stoplist: Iterable[str] = STOPLIST,
    ) -> None:
        self.catalog = catalog
        self.text_matcher = text_matcher or TextMatcher(catalog)
        self.stoplist = frozenset(stoplist)
        if strategies is None:
            self.strategies = default_strategies(catalog, self.text_matcher, self.stoplist)
        else:
            self.strategies = tuple(strategies)

    def match_by_url(self, raw_url: str, language: str = "en") -> UrlMatchResult:
        """Identify the wine a product URL refers to.

        Never raises: a malformed URL or a failing stage only means that
        stage found nothing.

        Args:
            raw_url: URL as typed or pasted by the user.
            language: Display language used for free-text lookups.

        Returns:
            UrlMatchResult with the wine and the stage that found it, or a
            reason when nothing matched.
        """
        if not raw_url or not raw_url.strip():
            return UrlMatchResult(wine=None, reason_if_not_found="No URL given")

        try:
            url_input = parse_url_input(raw_url, language)
        except ValueError as e:
            logger.warning("Could not parse URL %r: %s", raw_url, e)
            return self._match_raw_text(raw_url, language, str(e))

        for strategy in self.strategies:
            try:
                wine = strategy.try_match(url_input)
            except Exception as e:
                logger.warning(
                    "URL match stage %s failed for %s: %s",
                    strategy.name,
                    url_input.normalized_url,
                    e,
                )
                continue

            if wine is not None:
                logger.info(
                    "URL matched by %s: %s -> %s",
                    strategy.name,
                    url_input.normalized_url,
                    wine.name,
                )
                return UrlMatchResult(
                    wine=wine,
                    stage=strategy.name,
                    normalized_url=url_input.normalized_url,
                )

        detected = extract_tokens(url_input, self.stoplist)[:_REASON_TERM_COUNT]
        reason = "No catalog wine matched this URL"
        if detected:
            reason += f" (detected: {', '.join(detected)})"
        return UrlMatchResult(
            wine=None,
            normalized_url=url_input.normalized_url,
            reason_if_not_found=reason,
        )

    def _match_raw_text(self, raw_url: str, language: str, error: str) -> UrlMatchResult:
        """Search the whole unparseable input as free text.

        The result carries no normalized URL, so it is never stored as a
        wine's source.
        """
        text = raw_url.strip()
        wine = self.text_matcher.first_match(text.lower(), language)
        if wine is not None:
            return UrlMatchResult(wine=wine, stage="raw_text")
        return UrlMatchResult(
            wine=None,
            reason_if_not_found=f"Could not read URL ({error})",
        )
