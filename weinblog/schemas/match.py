"""Pydantic schemas for wine identification requests and results."""

from pydantic import BaseModel, Field

from weinblog.models import Language
from weinblog.schemas.wine import WineResponse


class CodeMatchRequest(BaseModel):
    """Decoded barcode / QR payload or a manually typed code."""

    code: str = Field(..., max_length=512)


class UrlMatchRequest(BaseModel):
    """Product page URL pasted by the user."""

    url: str = Field(..., max_length=2048)
    lang: Language = "en"


class TextMatchRequest(BaseModel):
    """Free text, typically OCR output of a label."""

    text: str = Field(..., max_length=10000)
    lang: Language = "en"


class MatchResponse(BaseModel):
    """A resolved wine and how it was found."""

    wine: WineResponse
    method: str = Field(..., description="code, url, label_text, filename")
    stage: str | None = Field(None, description="URL cascade stage that matched")
    source_url: str | None = None
    ocr_text: str | None = None


class SourceUrlResponse(BaseModel):
    """Product URL a wine was identified from."""

    wine_id: str
    url: str
