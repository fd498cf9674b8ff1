from __future__ import annotations

import logging
from typing import Optional

from canvas_alt.platform.logging import create_logger
from canvas_alt.services.vision.contracts import DEFAULT_INSTRUCTION, AltTextGeneratorPort

from .errors import GENERATION_FAILED_MESSAGE, NO_IMAGE_SOURCE_MESSAGE, PLACEHOLDER_ALT_TEXT
from .registry import ImageRegistry


class GenerationService:
    """
    Drive one image at a time from ``IDLE``/``ERROR`` through ``GENERATING``.

    Each call makes a single provider request for its own item. Calls for
    different items never wait on each other, and a completion that arrives
    after a rescan replaced its item is dropped by the registry.
    """

    def __init__(
        self,
        generator: AltTextGeneratorPort,
        registry: ImageRegistry,
        *,
        instruction: str = DEFAULT_INSTRUCTION,
        placeholder: str = PLACEHOLDER_ALT_TEXT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._generator = generator
        self._registry = registry
        self.instruction = instruction
        self.placeholder = placeholder
        self.logger = logger if logger else create_logger(__name__)

    async def generate(self, image_id: str) -> None:
        item = self._registry.get(image_id)
        if item.is_generating:
            self.logger.debug("Generation already running for image %s", image_id)
            return

        if not item.source_url.strip():
            self._registry.record_error(item, NO_IMAGE_SOURCE_MESSAGE)
            return

        self._registry.begin_generation(item)
        try:
            response = await self._generator.describe(item.source_url, instruction=self.instruction)
        except Exception as exc:
            self.logger.error("Alt text generation failed for image %s: %s", image_id, exc, exc_info=True)
            self._registry.record_error(item, GENERATION_FAILED_MESSAGE)
            return

        if self._registry.complete_generation(item, self._clean(response)):
            self.logger.info("Generated alt text for image %s", image_id)

    def edit_draft(self, image_id: str, text: str) -> None:
        """Replace the draft with operator input; the status is left as is."""
        self._registry.update_draft(self._registry.get(image_id), text)

    def _clean(self, response: object) -> str:
        text = response.strip() if isinstance(response, str) else ""
        return text or self.placeholder


__all__ = ["GenerationService"]
