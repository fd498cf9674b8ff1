from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence


class ImageAttachmentPort(Protocol):
    """Image fill descriptor attached to a canvas object."""

    url: Optional[str]
    alt_text: Optional[str]

    def clone_with_attributes(self, **changes: Any) -> "ImageAttachmentPort":
        ...


class CanvasNodePort(Protocol):
    id: str
    name: Optional[str]
    image_attachment: Optional[ImageAttachmentPort]

    async def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        ...


class CanvasGatewayPort(Protocol):
    async def list_image_objects(self) -> Sequence[CanvasNodePort]:
        ...

    async def get_selected_image(self) -> Optional[CanvasNodePort]:
        ...


__all__ = ["CanvasGatewayPort", "CanvasNodePort", "ImageAttachmentPort"]
