"""Segment position tracking for infinite scroll."""

from scrollfeed.core.errors import InvalidSegmentError


class SegmentCursor:
    def __init__(self, start: int = 1):
        if start < 1:
            raise InvalidSegmentError(start)
        self.start = start
        self._current = start
        self._rewound = False

    def current(self) -> int:
        return self._current

    def next(self) -> int:
        """Segment the next request asks for."""
        if self._rewound:
            return self._current
        return self._current + 1

    def advance(self) -> None:
        # A pending rewind absorbs exactly one advance.
        if self._rewound:
            self._rewound = False
            return
        self._current += 1

    def set(self, segment: int) -> None:
        if segment < 1:
            raise InvalidSegmentError(segment)
        self._current = segment
        self._rewound = False

    def rewind_for_initial_fetch(self) -> None:
        """Offset the advance that follows an initial backfill request.

        The backfill asks for everything up to the current segment, so the
        request carries ``current()`` instead of ``current() + 1`` and the
        cursor stays where it is once the response is rendered.
        """
        self._rewound = True

    @property
    def rewound(self) -> bool:
        return self._rewound

    def reset(self) -> None:
        self._current = self.start
        self._rewound = False
