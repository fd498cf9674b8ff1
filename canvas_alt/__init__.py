from importlib import import_module
from typing import TYPE_CHECKING

_LAZY_EXPORTS = {
    "AltTextPanel": ".presentation",
    "PanelRow": ".presentation",
    "AltTextServices": ".alt_text",
    "AltTextStackConfig": ".alt_text",
    "create_alt_text_generator": ".alt_text",
    "create_alt_text_services": ".alt_text",
    "GroqVisionAltText": ".alt_text",
    "OpenAIVisionAltText": ".alt_text",
    "CanvasObject": ".adapters.canvas",
    "ImageAttachment": ".adapters.canvas",
    "InMemoryCanvas": ".adapters.canvas",
    "ApplyService": ".services.alt_text",
    "GenerationService": ".services.alt_text",
    "ImageItem": ".services.alt_text",
    "ImageRegistry": ".services.alt_text",
    "ImageStatus": ".services.alt_text",
    "ScanService": ".services.alt_text",
    "create_logger": ".platform",
    "read_api_key": ".platform",
    "save_api_key_to_file": ".platform",
}

__all__ = tuple(_LAZY_EXPORTS)

if TYPE_CHECKING:
    from .adapters.canvas import CanvasObject, ImageAttachment, InMemoryCanvas
    from .alt_text import (
        AltTextServices,
        AltTextStackConfig,
        GroqVisionAltText,
        OpenAIVisionAltText,
        create_alt_text_generator,
        create_alt_text_services,
    )
    from .platform import create_logger, read_api_key, save_api_key_to_file
    from .presentation import AltTextPanel, PanelRow
    from .services.alt_text import (
        ApplyService,
        GenerationService,
        ImageItem,
        ImageRegistry,
        ImageStatus,
        ScanService,
    )


def __getattr__(name: str):
    try:
        module = import_module(_LAZY_EXPORTS[name], __name__)
    except KeyError as exc:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from exc
    value = getattr(module, name)
    globals()[name] = value
    return value


def __dir__():
    return sorted(set(__all__) | set(globals().keys()))
