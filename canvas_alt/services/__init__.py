"""
Service layer for canvas_alt.

Orchestration logic implemented on top of the canvas and vision ports.
"""

from canvas_alt.services.alt_text import ApplyService, GenerationService, ImageRegistry, ScanService

__all__ = ["ApplyService", "GenerationService", "ImageRegistry", "ScanService"]
