"""Single-slot lookahead buffer for the next segment."""

import logging
from typing import Optional

from scrollfeed.core.outcomes import FetchOutcome

logger = logging.getLogger("ScrollFeed.PrefetchCache")


class PrefetchCache:
    """Holds at most one already-resolved segment request.

    Writers announce themselves with ``reserve(generation)`` before their
    request goes out. ``store`` only commits an outcome whose generation
    matches the latest reservation, so a superseded request can never
    overwrite the slot. Reserving does not touch what is already stored.
    """

    def __init__(self):
        self._slot: Optional[FetchOutcome] = None
        self._reserved_generation: Optional[int] = None

    def reserve(self, generation: int) -> None:
        if self._reserved_generation is not None and generation < self._reserved_generation:
            raise ValueError(
                f"Generation {generation} is older than reserved {self._reserved_generation}"
            )
        self._reserved_generation = generation

    def store(self, outcome: FetchOutcome) -> bool:
        if outcome.generation != self._reserved_generation:
            logger.debug(
                f"Dropping outcome of generation {outcome.generation}, "
                f"slot reserved for {self._reserved_generation}"
            )
            return False
        self._slot = outcome
        return True

    def take(self) -> Optional[FetchOutcome]:
        outcome, self._slot = self._slot, None
        return outcome

    @property
    def is_empty(self) -> bool:
        return self._slot is None

    @property
    def reserved_generation(self) -> Optional[int]:
        return self._reserved_generation

    def clear(self) -> None:
        self._slot = None
        self._reserved_generation = None
