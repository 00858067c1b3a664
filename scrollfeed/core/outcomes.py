"""Typed results of a single segment request."""

from dataclasses import dataclass
from typing import Any, Optional


class FetchOutcome:
    """Base class of every segment request result.

    Subclasses carry the ``generation`` of the request that produced them so
    the prefetch cache can refuse results from superseded requests.
    """

    generation: int = 0

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Success(FetchOutcome):
    payload: Any
    more_available: bool = True
    item_count: Optional[int] = None
    generation: int = 0


@dataclass(frozen=True)
class Empty(FetchOutcome):
    payload: Any = None
    item_count: Optional[int] = None
    generation: int = 0

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound(FetchOutcome):
    status: int = 404
    generation: int = 0

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Aborted(FetchOutcome):
    generation: int = 0


@dataclass(frozen=True)
class TransportError(FetchOutcome):
    detail: str
    status: Optional[int] = None
    generation: int = 0
