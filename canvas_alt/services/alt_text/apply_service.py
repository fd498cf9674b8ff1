from __future__ import annotations

import logging
from typing import Optional

from canvas_alt.platform.logging import create_logger

from .errors import APPLY_FAILED_MESSAGE, ImageAttachmentError
from .registry import ImageItem, ImageRegistry

ATTACHMENT_ATTRIBUTE = "image_attachment"


def resolve_alt_text(item: ImageItem) -> str:
    """Text an apply would write: the trimmed draft, else the trimmed committed text."""
    draft = (item.draft_text or "").strip()
    if draft:
        return draft
    return (item.committed_text or "").strip()


class ApplyService:
    """Write an item's chosen alt text back onto its canvas object."""

    def __init__(self, registry: ImageRegistry, logger: Optional[logging.Logger] = None) -> None:
        self._registry = registry
        self.logger = logger if logger else create_logger(__name__)

    async def apply(self, image_id: str) -> None:
        item = self._registry.get(image_id)
        if item.is_generating:
            self.logger.warning("Ignoring apply for image %s while generation is running", image_id)
            return

        alt_text = resolve_alt_text(item)
        try:
            await self._write_alt_text(item, alt_text)
        except Exception as exc:
            self.logger.error("Apply error for image %s: %s", image_id, exc, exc_info=True)
            self._registry.record_apply_error(item, APPLY_FAILED_MESSAGE)
            return

        if self._registry.record_commit(item, alt_text):
            self.logger.info("Applied alt text to image %s", image_id)

    async def _write_alt_text(self, item: ImageItem, alt_text: str) -> None:
        node = item.node_ref
        # Read the attachment from the live node, not from scan time.
        attachment = getattr(node, ATTACHMENT_ATTRIBUTE, None)
        if attachment is None or not callable(getattr(attachment, "clone_with_attributes", None)):
            raise ImageAttachmentError(item.id)
        if not callable(getattr(node, "set_attributes", None)):
            raise ImageAttachmentError(item.id, "Image node cannot be mutated")

        await node.set_attributes({ATTACHMENT_ATTRIBUTE: attachment.clone_with_attributes(alt_text=alt_text)})


__all__ = ["ATTACHMENT_ATTRIBUTE", "ApplyService", "resolve_alt_text"]
