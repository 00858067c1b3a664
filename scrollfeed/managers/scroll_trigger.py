"""Viewport geometry sampling for "near end" detection."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger("ScrollFeed.ScrollTrigger")


@dataclass(frozen=True)
class ViewportGeometry:
    scroll_offset: float
    viewport_height: float
    content_height: float
    content_top: float = 0

    @property
    def remaining(self) -> float:
        """Distance left between the viewport bottom and the content end."""
        return (self.content_top + self.content_height) - (self.scroll_offset + self.viewport_height)

    def is_filled(self, offset: float = 0) -> bool:
        return self.content_height > self.viewport_height + offset


def geometry_from_adjustment(adjustment) -> ViewportGeometry:
    """Sample a Gtk.Adjustment (or anything with the same getters)."""
    return ViewportGeometry(
        scroll_offset=adjustment.get_value(),
        viewport_height=adjustment.get_page_size(),
        content_height=adjustment.get_upper(),
    )


class ScrollTrigger:
    def __init__(
        self,
        sample: Callable[[], ViewportGeometry],
        on_near_end: Callable[[], None],
        offset: float = 100,
        is_locked: Optional[Callable[[], bool]] = None,
    ):
        """Initialize ScrollTrigger.

        Args:
            sample: Returns the current viewport geometry
            on_near_end: Called when the remaining distance drops to the offset
            offset: Remaining scroll distance that counts as "near end"
            is_locked: Suppresses the signal while it returns True
        """
        self.sample = sample
        self.on_near_end = on_near_end
        self.offset = offset
        self.is_locked = is_locked or (lambda: False)
        self._handler_id = None
        self._adjustment = None

    def check(self) -> bool:
        if self.is_locked():
            return False
        geometry = self.sample()
        if geometry.remaining > self.offset:
            return False
        logger.debug(f"Near end of content ({geometry.remaining:.0f}px left)")
        self.on_near_end()
        return True

    def attach(self, adjustment) -> None:
        """Check on every value-changed signal of ``adjustment``."""
        self.detach()
        self._adjustment = adjustment
        self._handler_id = adjustment.connect("value-changed", self._on_value_changed)

    def detach(self) -> None:
        if self._adjustment is not None and self._handler_id is not None:
            self._adjustment.disconnect(self._handler_id)
        self._adjustment = None
        self._handler_id = None

    def _on_value_changed(self, adjustment) -> None:
        self.check()
