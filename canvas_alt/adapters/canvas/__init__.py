from .memory_canvas import CanvasObject, ImageAttachment, InMemoryCanvas

__all__ = ["CanvasObject", "ImageAttachment", "InMemoryCanvas"]
