"""Data models for WeinBlog."""

from weinblog.models.wine import (
    LANGUAGES,
    ExactAlias,
    Language,
    MatchCandidate,
    PriceTier,
    SearchTerm,
    WineColor,
    WineRecord,
    WineStyle,
)

__all__ = [
    "LANGUAGES",
    "ExactAlias",
    "Language",
    "MatchCandidate",
    "PriceTier",
    "SearchTerm",
    "WineColor",
    "WineRecord",
    "WineStyle",
]
