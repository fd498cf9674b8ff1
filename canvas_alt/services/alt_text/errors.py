"""Exception types and the fixed operator-facing messages for alt text work."""

from __future__ import annotations

NO_IMAGE_SOURCE_MESSAGE = "No image source"
GENERATION_FAILED_MESSAGE = "Failed to generate alt text"
APPLY_FAILED_MESSAGE = "Failed to apply alt text"

# Draft used when the provider answers without usable content.
PLACEHOLDER_ALT_TEXT = "No alt text generated"


class AltTextError(Exception):
    """Base class for canvas_alt errors."""


class ImageAttachmentError(AltTextError):
    """The canvas object has no image attachment that can be cloned and written back."""

    def __init__(self, image_id: str, reason: str = "Image node lacks an image attachment") -> None:
        super().__init__(f"{reason} (id={image_id!r})")
        self.image_id = image_id


__all__ = [
    "APPLY_FAILED_MESSAGE",
    "GENERATION_FAILED_MESSAGE",
    "NO_IMAGE_SOURCE_MESSAGE",
    "PLACEHOLDER_ALT_TEXT",
    "AltTextError",
    "ImageAttachmentError",
]
