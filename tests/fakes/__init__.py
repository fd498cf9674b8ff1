"""
Utility fakes for service-layer tests.
"""

from .canvas import FakeAttachment, FakeCanvasGateway, FakeNode, image_node
from .vision import FakeAltTextGenerator

__all__ = [
    "FakeAltTextGenerator",
    "FakeAttachment",
    "FakeCanvasGateway",
    "FakeNode",
    "image_node",
]
