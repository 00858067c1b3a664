"""Core types shared by the managers and services."""

from .errors import ConfigurationError, InvalidSegmentError, ScrollFeedError
from .outcomes import Aborted, Empty, FetchOutcome, NotFound, Success, TransportError
from .protocols import (
    CallbackCollaborator,
    Collaborator,
    IndicatorPresenter,
    NullCollaborator,
    NullIndicatorPresenter,
)
from .state import EngineState, EngineStatus

__all__ = [
    "Aborted",
    "CallbackCollaborator",
    "Collaborator",
    "ConfigurationError",
    "Empty",
    "EngineState",
    "EngineStatus",
    "FetchOutcome",
    "IndicatorPresenter",
    "InvalidSegmentError",
    "NotFound",
    "NullCollaborator",
    "NullIndicatorPresenter",
    "ScrollFeedError",
    "Success",
    "TransportError",
]
