"""Validation and hosting of user-supplied images (recipe photos, avatars)."""

from typing import Optional, Tuple
import logging

from adapters import image_host
from app.config import settings
from app.exceptions import (
    ExternalServiceError,
    ServiceUnavailableError,
    ServiceValidationError,
)

logger = logging.getLogger("kitchensathi.uploads")


def store_image(
    content: Optional[bytes],
    filename: Optional[str],
    content_type: Optional[str],
    folder: str,
    transformation: str = image_host.RECIPE_TRANSFORMATION,
) -> Tuple[str, str]:
    """
    Check an upload and push it to the image host.

    Returns:
        ``(url, public_id)``

    Raises:
        ServiceUnavailableError: image host not configured
        ServiceValidationError: empty, too large, or not an image
        ExternalServiceError: the host rejected the upload
    """
    if not image_host.is_configured():
        raise ServiceUnavailableError("Image upload service is not configured")
    if not content:
        raise ServiceValidationError("No image file provided")
    if not (content_type or "").startswith("image/"):
        raise ServiceValidationError("Only image files are allowed")
    if len(content) > settings.image_upload_max_bytes:
        limit_mb = settings.image_upload_max_bytes // (1024 * 1024)
        raise ServiceValidationError(f"Image must be {limit_mb}MB or smaller")

    try:
        return image_host.upload(
            content, filename or "upload", content_type, folder, transformation
        )
    except image_host.ImageHostError as exc:
        raise ExternalServiceError(f"Failed to upload image: {exc}")


def discard_image(public_id: Optional[str]) -> None:
    """Remove a hosted image; failures are only logged."""
    if not public_id or not image_host.is_configured():
        return
    try:
        image_host.destroy(public_id)
    except image_host.ImageHostError as exc:
        logger.warning(f"image_delete_failed public_id={public_id} error={exc}")
