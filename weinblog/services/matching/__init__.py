"""Wine identification: scanned codes, free text, label OCR text and product URLs."""

from .codes import CodeMatcher
from .label import LabelTextMatcher
from .scoring import rank_candidates, score_and_rank, score_candidates, score_wine
from .service import WineMatcher
from .text import TextMatcher
from .url import UrlMatcher, UrlMatchResult, parse_url_input

__all__ = [
    "CodeMatcher",
    "LabelTextMatcher",
    "TextMatcher",
    "UrlMatchResult",
    "UrlMatcher",
    "WineMatcher",
    "parse_url_input",
    "rank_candidates",
    "score_and_rank",
    "score_candidates",
    "score_wine",
]
