"""Service layer."""

from .fetch_controller import FetchController, FetchHandle

__all__ = ["FetchController", "FetchHandle"]
