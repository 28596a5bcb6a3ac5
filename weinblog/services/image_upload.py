"""Validation of uploaded label images."""

from fastapi import HTTPException, UploadFile, status

from weinblog.config import settings

# Magic byte signatures for image formats
# Each entry is (magic_bytes, offset, detected_extension)
IMAGE_MAGIC_SIGNATURES = [
    # JPEG: starts with FF D8 FF
    (b"\xff\xd8\xff", 0, ".jpg"),
    # PNG: starts with 89 50 4E 47 0D 0A 1A 0A
    (b"\x89PNG\r\n\x1a\n", 0, ".png"),
    # GIF87a and GIF89a
    (b"GIF87a", 0, ".gif"),
    (b"GIF89a", 0, ".gif"),
    # WebP: starts with RIFF....WEBP
    (b"RIFF", 0, ".webp"),  # Additional check for WEBP at offset 8
]


def detect_image_type(content: bytes) -> str | None:
    """Detect image type from file content using magic bytes.

    Args:
        content: The file content bytes.

    Returns:
        The detected extension (e.g., ".jpg") or None if not a valid image.
    """
    if len(content) < 12:
        return None

    for magic, offset, ext in IMAGE_MAGIC_SIGNATURES:
        if content[offset:offset + len(magic)] == magic:
            if ext == ".webp" and content[8:12] != b"WEBP":
                continue
            return ext

    return None


async def read_label_image(upload_file: UploadFile) -> bytes:
    """Read an uploaded label image, enforcing size and format.

    Args:
        upload_file: The uploaded file.

    Returns:
        The file content as bytes.

    Raises:
        HTTPException: If the file is too large or not an image.
    """
    content = await upload_file.read()
    await upload_file.seek(0)

    if len(content) > settings.max_upload_size_bytes:
        max_mb = settings.max_upload_size_bytes / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"Label image exceeds maximum allowed size of {max_mb:.1f} MB",
        )

    if detect_image_type(content) is None:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Label image must be a JPEG, PNG, GIF or WebP file",
        )
    return content
