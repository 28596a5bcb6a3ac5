"""Pydantic schemas for WeinBlog API."""

from weinblog.schemas.match import (
    CodeMatchRequest,
    MatchResponse,
    SourceUrlResponse,
    TextMatchRequest,
    UrlMatchRequest,
)
from weinblog.schemas.wine import WineResponse

__all__ = [
    "CodeMatchRequest",
    "MatchResponse",
    "SourceUrlResponse",
    "TextMatchRequest",
    "UrlMatchRequest",
    "WineResponse",
]
