from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Set

from canvas_alt.alt_text import AltTextServices
from canvas_alt.platform.logging import colorize, create_logger
from canvas_alt.services.alt_text import ImageItem, ImageStatus


@dataclass(frozen=True)
class PanelRow:
    """View model for one entry of the image list."""

    id: str
    name: str
    preview_url: str
    current_alt_text: str
    draft_text: Optional[str]
    status: ImageStatus
    generate_label: str
    generate_enabled: bool
    show_apply: bool
    error: Optional[str]

    @classmethod
    def from_item(cls, item: ImageItem) -> "PanelRow":
        generating = item.status is ImageStatus.GENERATING
        return cls(
            id=item.id,
            name=item.display_name,
            preview_url=item.source_url,
            current_alt_text=item.committed_text,
            draft_text=item.draft_text,
            status=item.status,
            generate_label="Generating..." if generating else "Generate",
            generate_enabled=not generating,
            show_apply=item.has_draft,
            error=item.last_error,
        )


class AltTextPanel:
    """
    Headless controller behind the operator's image list.

    The panel owns no image state of its own; rows are rebuilt from the
    registry on every call. Generate and apply clicks are dispatched as
    tasks so one slow provider call never holds up the rest of the list.
    """

    SCAN_LABEL = "Scan for Images"
    SCANNING_LABEL = "Scanning..."

    def __init__(self, services: AltTextServices, logger: Optional[logging.Logger] = None) -> None:
        self.services = services
        self.logger = logger if logger else create_logger(__name__)
        self.is_scanning = False
        self._tasks: Set[asyncio.Task] = set()

    @property
    def scan_label(self) -> str:
        return self.SCANNING_LABEL if self.is_scanning else self.SCAN_LABEL

    async def start(self) -> None:
        """Initial scan performed when the panel is first shown."""
        await self.scan()

    async def scan(self) -> None:
        if self.is_scanning:
            self.logger.debug("Scan already in progress")
            return
        self.is_scanning = True
        try:
            await self.services.scanner.scan()
        finally:
            self.is_scanning = False

    def request_generate(self, image_id: str) -> asyncio.Task:
        return self._dispatch(image_id, self.services.generation.generate)

    def request_apply(self, image_id: str) -> asyncio.Task:
        return self._dispatch(image_id, self.services.applier.apply)

    def edit(self, image_id: str, text: str) -> None:
        self.services.generation.edit_draft(image_id, text)

    async def wait_idle(self) -> None:
        """Wait until every dispatched generate/apply task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def rows(self) -> List[PanelRow]:
        return [PanelRow.from_item(item) for item in self.services.registry.snapshot()]

    def render(self, *, color: bool = False) -> str:
        lines = [f"Alt Text Generator [{self.scan_label}]"]
        rows = self.rows()
        if not rows:
            lines.append("  (no images found)")
        for row in rows:
            lines.append(f"- {row.name} <{row.preview_url}>")
            lines.append(f"    Current Alt: {row.current_alt_text}")
            if row.draft_text:
                lines.append(f"    Generated Alt Text: {row.draft_text}")
            lines.append(f"    [{row.generate_label}]" + (" [Apply]" if row.show_apply else ""))
            if row.error:
                lines.append(colorize(f"    ! {row.error}", "red" if color else None))
        return "\n".join(lines)

    def _dispatch(self, image_id: str, action: Callable[[str], Awaitable[None]]) -> asyncio.Task:
        if image_id not in self.services.registry:
            raise KeyError(f"Image {image_id!r} is not registered")
        task = asyncio.ensure_future(action(image_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


__all__ = ["AltTextPanel", "PanelRow"]
