"""Command line tools for WeinBlog."""
