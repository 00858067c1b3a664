"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from tests.fakes.fake_collaborator import RecordingCollaborator
from tests.fakes.fake_presenter import RecordingPresenter
from tests.fakes.segment_server import SegmentServer


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yml"


@pytest.fixture
def server() -> SegmentServer:
    return SegmentServer()


@pytest.fixture
def collaborator() -> RecordingCollaborator:
    return RecordingCollaborator()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()
