"""API routers for WeinBlog."""

from weinblog.routers import match, search, wines

__all__ = ["match", "search", "wines"]
