"""Mutable engine state, kept apart from the frozen settings."""

from dataclasses import dataclass
from enum import Enum


class EngineStatus(Enum):
    IDLE = "idle"
    LOCKED = "locked"


@dataclass
class EngineState:
    status: EngineStatus = EngineStatus.IDLE
    no_more_content: bool = False
    no_results: bool = False
    initial_fetch_pending: bool = False

    @property
    def locked(self) -> bool:
        return self.status is EngineStatus.LOCKED

    def lock(self) -> None:
        self.status = EngineStatus.LOCKED

    def unlock(self) -> None:
        self.status = EngineStatus.IDLE

    def clear_terminal_flags(self) -> None:
        self.no_more_content = False
        self.no_results = False
