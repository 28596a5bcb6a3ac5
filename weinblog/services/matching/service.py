"""Wine identification service combining all matchers."""

from collections.abc import Iterable

from weinblog.catalog import Catalog
from weinblog.models import WineRecord

from .codes import CodeMatcher
from .label import LabelTextMatcher
from .scoring import score_and_rank
from .text import TextMatcher
from .url import UrlMatcher, UrlMatchResult


class WineMatcher:
    """Identify catalog wines from codes, text, label OCR output and URLs.

    Holds no mutable state; one instance can serve concurrent requests.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.codes = CodeMatcher(catalog)
        self.text = TextMatcher(catalog)
        self.urls = UrlMatcher(catalog, self.text)
        self.labels = LabelTextMatcher(self.text)

    def match_by_code(self, code: str) -> WineRecord | None:
        return self.codes.match_by_code(code)

    def match_by_name(self, query: str, language: str) -> list[WineRecord]:
        return self.text.match_by_name(query, language)

    def match_by_url(self, raw_url: str, language: str = "en") -> UrlMatchResult:
        return self.urls.match_by_url(raw_url, language)

    def match_label_text(self, text: str, language: str) -> WineRecord | None:
        return self.labels.match_text(text, language)

    def match_filename(self, filename: str, language: str) -> WineRecord | None:
        return self.labels.match_filename(filename, language)

    def score_and_rank(self, tokens: Iterable[str]) -> WineRecord | None:
        return score_and_rank(tokens, self.catalog)
