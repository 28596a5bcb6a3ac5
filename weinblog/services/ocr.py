"""OCR service for extracting text from wine label images."""

import io
import logging

from PIL import Image

from weinblog.config import settings

logger = logging.getLogger(__name__)


class OCRService:
    """Service for extracting text from images using Tesseract OCR."""

    def __init__(self, lang: str | None = None) -> None:
        """Initialize the OCR service.

        Args:
            lang: Tesseract language codes. Defaults to the configured value.
        """
        self.lang = lang or settings.tesseract_lang
        # Configure Tesseract command if specified
        if settings.tesseract_cmd:
            import pytesseract
            pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd

    def is_available(self) -> bool:
        """Check whether OCR is enabled in the configuration."""
        return settings.ocr_enabled

    async def extract_text_from_bytes(self, image_data: bytes) -> str:
        """Extract text from image bytes without saving to disk.

        Args:
            image_data: Raw image data as bytes.

        Returns:
            Extracted text from the image, or an empty string on failure.
        """
        try:
            import pytesseract

            image = Image.open(io.BytesIO(image_data))

            # Grayscale gives Tesseract cleaner glyph edges on labels
            if image.mode != "L":
                image = image.convert("L")

            text = pytesseract.image_to_string(
                image,
                lang=self.lang,
                config="--psm 6",  # Assume uniform block of text
            )

            return text.strip()

        except ImportError:
            logger.error("pytesseract is not installed")
            return ""
        except Exception as e:
            logger.error(f"OCR extraction failed: {e}")
            return ""
