"""Manager classes for segment loading state."""

from .infinite_scroll_engine import InfiniteScrollEngine
from .prefetch_cache import PrefetchCache
from .scroll_trigger import ScrollTrigger, ViewportGeometry, geometry_from_adjustment
from .segment_cursor import SegmentCursor

__all__ = [
    "InfiniteScrollEngine",
    "PrefetchCache",
    "ScrollTrigger",
    "SegmentCursor",
    "ViewportGeometry",
    "geometry_from_adjustment",
]
