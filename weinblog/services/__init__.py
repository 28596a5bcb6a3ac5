"""Services for WeinBlog application."""

from weinblog.services.matching import WineMatcher
from weinblog.services.ocr import OCRService
from weinblog.services.scan_debounce import ScanDebouncer
from weinblog.services.source_urls import SourceUrlStore

__all__ = ["OCRService", "ScanDebouncer", "SourceUrlStore", "WineMatcher"]
