"""WeinBlog - trilingual wine catalog with label, code and URL identification."""

__version__ = "0.4.0"
