"""Shared dependencies for WeinBlog endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from weinblog.catalog import Catalog
from weinblog.config import settings
from weinblog.services.matching import WineMatcher
from weinblog.services.ocr import OCRService
from weinblog.services.scan_debounce import ScanDebouncer
from weinblog.services.source_urls import SourceUrlStore


def get_catalog(request: Request) -> Catalog:
    """Catalog loaded at application startup."""
    return request.app.state.catalog


def get_wine_matcher(request: Request) -> WineMatcher:
    """Matcher built over the startup catalog."""
    return request.app.state.matcher


def get_source_url_store(request: Request) -> SourceUrlStore:
    return request.app.state.source_urls


def get_scan_debouncer(request: Request) -> ScanDebouncer:
    return request.app.state.scan_debouncer


def get_ocr_service(request: Request) -> OCRService:
    return request.app.state.ocr_service


def resolve_language(lang: str | None) -> str:
    """Requested language, or the configured default."""
    return lang or settings.default_language


CatalogDep = Annotated[Catalog, Depends(get_catalog)]
MatcherDep = Annotated[WineMatcher, Depends(get_wine_matcher)]
SourceUrlsDep = Annotated[SourceUrlStore, Depends(get_source_url_store)]
DebouncerDep = Annotated[ScanDebouncer, Depends(get_scan_debouncer)]
OCRDep = Annotated[OCRService, Depends(get_ocr_service)]
