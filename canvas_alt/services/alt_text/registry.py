from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional

from canvas_alt.platform.logging import create_logger


class ImageStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    ERROR = "error"


@dataclass(eq=False)
class ImageItem:
    """
    One discovered canvas image and its alt text lifecycle.

    Attributes:
        id: Identifier of the canvas object, unique within one scan.
        node_ref: Handle to the live canvas object. Never copied; mutations
            always go through it.
        display_name: Human label, ``"Image {id}"`` when the object has no name.
        source_url: Location of the pixel data. Generation needs it non-empty.
        committed_text: Alt text recorded on the canvas, as last read or applied.
        draft_text: Generated or edited candidate, ``None`` until one exists.
        status: Current state of the item.
        last_error: Operator-facing message for the last failure.
    """

    id: str
    node_ref: Any = field(repr=False)
    display_name: str
    source_url: str
    committed_text: str = ""
    draft_text: Optional[str] = None
    status: ImageStatus = ImageStatus.IDLE
    last_error: Optional[str] = None

    @property
    def is_generating(self) -> bool:
        return self.status is ImageStatus.GENERATING

    @property
    def has_draft(self) -> bool:
        return bool(self.draft_text)


class ImageRegistry:
    """
    Working set of discovered images, addressed by id.

    A scan swaps the whole set in one call. Every other change goes through
    one of the transition helpers below, which take the record an operation
    was started with and refuse to touch it once a later scan has replaced
    it. Callers never see partially built scan results.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._items: Dict[str, ImageItem] = {}
        self._scan_count = 0
        self._scans_issued = 0
        self._committed_scan = 0
        self.logger = logger if logger else create_logger(__name__)

    # Set management -----------------------------------------------------
    def begin_scan(self) -> int:
        """Hand out a ticket for a scan about to start; later scans get larger tickets."""
        self._scans_issued += 1
        return self._scans_issued

    def replace_all(self, items: Iterable[ImageItem], *, scan_ticket: Optional[int] = None) -> bool:
        """
        Swap in a new working set.

        With a ``scan_ticket``, the swap is refused when a scan started later
        has already been committed. Without one, the swap always happens and
        supersedes every scan still in flight.
        """
        fresh: Dict[str, ImageItem] = {}
        for item in items:
            if item.id in fresh:
                raise ValueError(f"Duplicate image id {item.id!r} in scan result")
            fresh[item.id] = item
        if scan_ticket is not None and scan_ticket <= self._committed_scan:
            self.logger.debug("Discarding result of scan %d, a newer set is already committed (%d)", scan_ticket, self._committed_scan)
            return False
        self._items = fresh
        self._scan_count += 1
        self._committed_scan = scan_ticket if scan_ticket is not None else self._scans_issued
        return True

    @property
    def scan_count(self) -> int:
        return self._scan_count

    def get(self, image_id: str) -> ImageItem:
        try:
            return self._items[image_id]
        except KeyError as exc:
            raise KeyError(f"Image {image_id!r} is not registered") from exc

    def find(self, image_id: str) -> Optional[ImageItem]:
        return self._items.get(image_id)

    def ids(self) -> List[str]:
        return list(self._items)

    def snapshot(self) -> List[ImageItem]:
        """Return detached copies of the items in discovery order."""
        return [copy.copy(item) for item in self._items.values()]

    def is_current(self, item: ImageItem) -> bool:
        return self._items.get(item.id) is item

    def __contains__(self, image_id: object) -> bool:
        return image_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ImageItem]:
        return iter(self.snapshot())

    # Transitions --------------------------------------------------------
    def begin_generation(self, item: ImageItem) -> bool:
        return self._update(item, status=ImageStatus.GENERATING, last_error=None)

    def complete_generation(self, item: ImageItem, draft_text: str) -> bool:
        return self._update(item, draft_text=draft_text, status=ImageStatus.IDLE, last_error=None)

    def record_commit(self, item: ImageItem, committed_text: str) -> bool:
        # A generation started while the write was in flight owns the status.
        if item.is_generating:
            return self._update(item, committed_text=committed_text)
        return self._update(item, committed_text=committed_text, status=ImageStatus.IDLE, last_error=None)

    def record_error(self, item: ImageItem, message: str) -> bool:
        return self._update(item, status=ImageStatus.ERROR, last_error=message)

    def record_apply_error(self, item: ImageItem, message: str) -> bool:
        """Mark a failed write, unless a generation has taken the item over meanwhile."""
        if item.is_generating and self.is_current(item):
            self.logger.warning("Apply failed for image %s during generation; status left as is", item.id)
            return False
        return self.record_error(item, message)

    def update_draft(self, item: ImageItem, draft_text: str) -> bool:
        return self._update(item, draft_text=draft_text)

    def _update(self, item: ImageItem, **changes: Any) -> bool:
        if not self.is_current(item):
            self.logger.debug("Discarding stale update for image %s: %s", item.id, sorted(changes))
            return False
        for name, value in changes.items():
            setattr(item, name, value)
        return True


__all__ = ["ImageItem", "ImageRegistry", "ImageStatus"]
