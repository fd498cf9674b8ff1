from .contracts import CanvasGatewayPort, CanvasNodePort, ImageAttachmentPort

__all__ = ["CanvasGatewayPort", "CanvasNodePort", "ImageAttachmentPort"]
