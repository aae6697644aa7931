"""
Yolomy Products Backend — Image Upload Service
===============================================

What:  Reads the uploaded `image` form field into memory and checks its size.
How:   Accepts Starlette `UploadFile` objects from a parsed multipart form,
       reads them asynchronously, and returns an `ImageUpload` schema that the
       repository embeds in the product document.
Who:   Built per request from the app settings (see `get_image_service`) and
       used by the products route while building a `ProductCreate`.

Validation Policy:
    The image is stored verbatim: no MIME or extension check. The only check
    is size, because the bytes live inside a MongoDB document and documents
    are capped at 16 MiB.
"""

import logging
from typing import Any, Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from yolomy.config import settings
from yolomy.exceptions import ValidationError
from yolomy.schemas.product import ImageUpload

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ImageService:
    """Turns raw form values into validated, in-memory image uploads."""

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size or settings.max_image_size

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Validate upload size against the configured maximum.

        Args:
            content_length: Size reported by the multipart parser (may be None)
            actual_size: Actual byte count read from the upload

        Raises:
            ValidationError with a human-readable size limit message
        """
        max_mb = self.max_size / (1024 * 1024)

        for size in (content_length, actual_size):
            if size and size > self.max_size:
                raise ValidationError(
                    message=f"Image size exceeds maximum of {max_mb:.0f}MB. Please upload a smaller image.",
                    field="image",
                    context={"max_size_mb": max_mb, "size": size},
                )

    async def read_upload(self, value: Any) -> Optional[ImageUpload]:
        """
        Read the `image` form field.

        Returns:
            ImageUpload, or None when the field is absent or is an empty
            file part (browsers send one when no file was chosen).

        Raises:
            ValidationError: the field is not a file, or is too large.
        """
        if value is None:
            return None

        if not isinstance(value, UploadFile):
            raise ValidationError(
                message="Field 'image' must be an uploaded file",
                field="image",
            )

        try:
            self.validate_size(value.size, 0)
            content = await value.read()
        finally:
            await value.close()

        if not content and not value.filename:
            return None

        self.validate_size(None, len(content))

        logger.debug(
            "Read image upload: filename=%s, size=%d bytes",
            value.filename or "unknown",
            len(content),
        )
        return ImageUpload(
            filename=value.filename or "image",
            content_type=value.content_type or DEFAULT_CONTENT_TYPE,
            data=content,
        )


# ── Request Dependency ────────────────────────────────────────────────────
def get_image_service(request: Request) -> ImageService:
    """Image service capped by the settings the app was created with."""
    return ImageService(max_size=request.app.state.settings.max_image_size)
