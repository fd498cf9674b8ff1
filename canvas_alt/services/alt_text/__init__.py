"""Registry and orchestration services for canvas image alt text."""

from .apply_service import ApplyService, resolve_alt_text
from .errors import (
    APPLY_FAILED_MESSAGE,
    GENERATION_FAILED_MESSAGE,
    NO_IMAGE_SOURCE_MESSAGE,
    PLACEHOLDER_ALT_TEXT,
    AltTextError,
    ImageAttachmentError,
)
from .generation_service import GenerationService
from .registry import ImageItem, ImageRegistry, ImageStatus
from .scan_service import ScanService, build_image_item

__all__ = [
    "APPLY_FAILED_MESSAGE",
    "GENERATION_FAILED_MESSAGE",
    "NO_IMAGE_SOURCE_MESSAGE",
    "PLACEHOLDER_ALT_TEXT",
    "AltTextError",
    "ApplyService",
    "GenerationService",
    "ImageAttachmentError",
    "ImageItem",
    "ImageRegistry",
    "ImageStatus",
    "ScanService",
    "build_image_item",
    "resolve_alt_text",
]
