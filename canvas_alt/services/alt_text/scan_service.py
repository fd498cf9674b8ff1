from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from canvas_alt.platform.logging import create_logger
from canvas_alt.services.canvas.contracts import CanvasGatewayPort, CanvasNodePort

from .registry import ImageItem, ImageRegistry


def _attachment_url(node: CanvasNodePort) -> str:
    attachment = getattr(node, "image_attachment", None)
    url = getattr(attachment, "url", None) if attachment is not None else None
    if not isinstance(url, str):
        return ""
    return url.strip()


def build_image_item(node: CanvasNodePort) -> Optional[ImageItem]:
    """Create a fresh item for ``node``, or ``None`` when it has no usable image url."""
    url = _attachment_url(node)
    if not url:
        return None
    node_id = str(node.id)
    alt_text = getattr(node.image_attachment, "alt_text", None) or ""
    return ImageItem(
        id=node_id,
        node_ref=node,
        display_name=getattr(node, "name", None) or f"Image {node_id}",
        source_url=url,
        committed_text=alt_text,
    )


class ScanService:
    """
    Populate the registry from the canvas.

    Objects with an image fill are enumerated first; when the canvas reports
    none, the current selection is used instead. Objects without a usable
    image url are skipped silently. The registry only changes once the whole
    result is known.
    """

    def __init__(
        self,
        gateway: CanvasGatewayPort,
        registry: ImageRegistry,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._gateway = gateway
        self._registry = registry
        self.logger = logger if logger else create_logger(__name__)

    async def scan(self) -> List[ImageItem]:
        ticket = self._registry.begin_scan()
        try:
            items = self._build_items(await self._discover())
        except Exception as exc:
            self.logger.error("Image scan error: %s", exc, exc_info=True)
            self._registry.replace_all([], scan_ticket=ticket)
            return []

        if self._registry.replace_all(items, scan_ticket=ticket):
            self.logger.info("Scan found %d image(s)", len(items))
        return self._registry.snapshot()

    async def _discover(self) -> Sequence[CanvasNodePort]:
        self.logger.debug("Requesting image nodes...")
        nodes = list(await self._gateway.list_image_objects())
        if nodes:
            return nodes

        self.logger.warning("No image nodes found. Trying selected image.")
        selected = await self._gateway.get_selected_image()
        return [selected] if selected is not None else []

    def _build_items(self, candidates: Sequence[CanvasNodePort]) -> List[ImageItem]:
        items: List[ImageItem] = []
        seen = set()
        for node in candidates:
            item = build_image_item(node)
            if item is None:
                self.logger.debug("Skipping canvas object %s without an image url", getattr(node, "id", "?"))
                continue
            if item.id in seen:
                continue
            seen.add(item.id)
            items.append(item)
        return items


__all__ = ["ScanService", "build_image_item"]
