from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class ImageAttachment:
    """Immutable image fill descriptor, mirroring the host's background image object."""

    url: Optional[str]
    alt_text: Optional[str] = None
    fit: Optional[str] = None
    crop: Optional[str] = None
    resolution: Optional[str] = None

    def clone_with_attributes(self, **changes: Any) -> "ImageAttachment":
        return dataclasses.replace(self, **changes)


@dataclass
class CanvasObject:
    id: str
    name: Optional[str] = None
    image_attachment: Optional[ImageAttachment] = None
    mutations: List[Dict[str, Any]] = field(default_factory=list, repr=False)

    async def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        for key, value in attributes.items():
            if not hasattr(self, key):
                raise AttributeError(f"Canvas object {self.id!r} has no attribute {key!r}")
            setattr(self, key, value)
        self.mutations.append(dict(attributes))


class InMemoryCanvas:
    """
    Canvas gateway backed by plain Python objects.

    Objects added with `add_object` are enumerable. The selection may point at
    one of them or hold an object the canvas does not enumerate (for example an
    image picked from the asset panel), which is what the scan fallback sees.
    """

    def __init__(self, objects: Optional[List[CanvasObject]] = None) -> None:
        self._objects: Dict[str, CanvasObject] = {}
        self.selection: Optional[CanvasObject] = None
        for obj in objects or ():
            self.add_object(obj)

    def add_object(self, obj: CanvasObject) -> CanvasObject:
        self._objects[obj.id] = obj
        return obj

    def add_image(self, object_id: str, url: str, *, name: Optional[str] = None, alt_text: Optional[str] = None, **visual: Any) -> CanvasObject:
        attachment = ImageAttachment(url=url, alt_text=alt_text, **visual)
        return self.add_object(CanvasObject(id=object_id, name=name, image_attachment=attachment))

    def remove_object(self, object_id: str) -> None:
        removed = self._objects.pop(object_id, None)
        if removed is not None and self.selection is removed:
            self.selection = None

    def select(self, target: Union[str, CanvasObject, None]) -> None:
        if isinstance(target, str):
            try:
                target = self._objects[target]
            except KeyError as exc:
                raise KeyError(f"Canvas object {target!r} does not exist") from exc
        self.selection = target

    def get_object(self, object_id: str) -> CanvasObject:
        return self._objects[object_id]

    async def list_image_objects(self) -> List[CanvasObject]:
        return [obj for obj in self._objects.values() if obj.image_attachment is not None]

    async def get_selected_image(self) -> Optional[CanvasObject]:
        return self.selection

    def alt_texts(self) -> List[Tuple[str, Optional[str]]]:
        return [
            (obj.id, obj.image_attachment.alt_text if obj.image_attachment else None)
            for obj in self._objects.values()
        ]


__all__ = ["CanvasObject", "ImageAttachment", "InMemoryCanvas"]
