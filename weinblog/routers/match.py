"""Wine identification endpoints: scanned codes, URLs, label text and label images."""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from weinblog.config import settings
from weinblog.models import Language
from weinblog.schemas import (
    CodeMatchRequest,
    MatchResponse,
    TextMatchRequest,
    UrlMatchRequest,
    WineResponse,
)
from weinblog.services.image_upload import read_label_image

from ._common import DebouncerDep, MatcherDep, OCRDep, SourceUrlsDep, resolve_language

logger = logging.getLogger(__name__)

router = APIRouter()

limiter = Limiter(key_func=get_remote_address)


def _image_rate_limit() -> str:
    """Per-client limit for OCR uploads."""
    return f"{settings.rate_limit_per_minute}/minute"


@router.post("/code", response_model=MatchResponse)
async def match_code(
    request: Request,
    payload: CodeMatchRequest,
    matcher: MatcherDep,
    debouncer: DebouncerDep,
) -> MatchResponse:
    """Resolve a decoded barcode or QR payload to a catalog wine.

    The code is compared exactly, without trimming. The same code scanned
    again by the same client within the debounce window is rejected with 429.
    """
    code = payload.code
    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Scan code must not be empty",
        )

    if not debouncer.should_process(code, get_remote_address(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Duplicate scan of {code} ignored",
        )

    wine = matcher.match_by_code(code)
    if wine is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Scanned code {code} not in catalog",
        )
    return MatchResponse(wine=WineResponse.from_record(wine), method="code")


@router.post("/url", response_model=MatchResponse)
async def match_url(
    payload: UrlMatchRequest,
    matcher: MatcherDep,
    source_urls: SourceUrlsDep,
) -> MatchResponse:
    """Resolve a retailer product URL to a catalog wine.

    On success the normalized URL is remembered as the wine's source URL.
    """
    if not payload.url.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL must not be empty",
        )

    result = matcher.match_by_url(payload.url, payload.lang)
    if not result.found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=result.reason_if_not_found,
        )

    source_url = result.normalized_url
    if source_url:
        source_urls.save(result.wine.id, source_url)

    return MatchResponse(
        wine=WineResponse.from_record(result.wine),
        method="url",
        stage=result.stage,
        source_url=source_url,
    )


@router.post("/text", response_model=MatchResponse)
async def match_text(payload: TextMatchRequest, matcher: MatcherDep) -> MatchResponse:
    """Resolve label text (e.g. from on-device OCR) to a catalog wine."""
    if not payload.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text must not be empty",
        )

    wine = matcher.match_label_text(payload.text, payload.lang)
    if wine is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No catalog wine recognized in text",
        )
    return MatchResponse(wine=WineResponse.from_record(wine), method="label_text")


@router.post("/image", response_model=MatchResponse)
@limiter.limit(_image_rate_limit)
async def match_image(
    request: Request,  # Required for rate limiting
    matcher: MatcherDep,
    ocr: OCRDep,
    image: UploadFile = File(...),
    lang: Annotated[Language | None, Form()] = None,
) -> MatchResponse:
    """Resolve an uploaded label photo to a catalog wine.

    The label is read with OCR when enabled. If the text names no wine, the
    uploaded file name is tried as a last resort.
    """
    content = await read_label_image(image)
    language = resolve_language(lang)

    ocr_text = ""
    if ocr.is_available():
        ocr_text = await ocr.extract_text_from_bytes(content)
        logger.debug("OCR text for %s: %r", image.filename, ocr_text[:200])

    if ocr_text:
        wine = matcher.match_label_text(ocr_text, language)
        if wine is not None:
            return MatchResponse(
                wine=WineResponse.from_record(wine),
                method="label_text",
                ocr_text=ocr_text,
            )

    if image.filename:
        wine = matcher.match_filename(image.filename, language)
        if wine is not None:
            return MatchResponse(
                wine=WineResponse.from_record(wine),
                method="filename",
                ocr_text=ocr_text or None,
            )

    if ocr_text:
        detail = f"Recognized text did not name a catalog wine: {ocr_text[:50]}"
    else:
        detail = "No text could be read from the label"
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
