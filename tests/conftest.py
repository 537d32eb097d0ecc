"""Shared test fixtures for scenecompose tests."""

import pytest

from scenecompose.context import FrameContext


class RecordingSurface:
    """Render surface fake that records every set_clipper call."""

    def __init__(self):
        self.calls = []

    def set_clipper(self, rect):
        self.calls.append(rect)

    @property
    def clipper(self):
        return self.calls[-1] if self.calls else None


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def ctx(surface):
    """800x600 frame context drawing into a RecordingSurface."""
    return FrameContext(canvas_width=800, canvas_height=600, surface=surface)
