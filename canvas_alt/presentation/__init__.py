"""Presentation layer: the operator-facing panel controller."""

from .alt_text_panel import AltTextPanel, PanelRow

__all__ = ["AltTextPanel", "PanelRow"]
