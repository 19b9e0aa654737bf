"""Shared fixtures: a recording terminal and a scripted backend."""

import pytest


class RecordingTerminal:
    """Stands in for noisimation.terminal.Terminal and records every call."""

    def __init__(self, size=(80, 24)):
        self._size = size
        self.calls = []
        self.output = []

    def size(self):
        self.calls.append(("size",))
        return self._size

    def scroll_down(self, rows):
        self.calls.append(("scroll_down", rows))

    def move_up(self, rows):
        self.calls.append(("move_up", rows))

    def write(self, text):
        self.output.append(text)

    def flush(self):
        pass

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


class ScriptedBackend:
    """A backend returning preset printed heights, one per call."""

    def __init__(self, heights=None, default_height=5):
        self.heights = list(heights or [])
        self.default_height = default_height
        self.frames = []

    def __call__(self, frame, config, terminal):
        self.frames.append(frame)
        terminal.calls.append(("draw", frame))
        height = self.heights.pop(0) if self.heights else self.default_height
        return 10, height


class RecordingField:
    """A field that logs every depth it is queried at."""

    def __init__(self, value=1.0):
        self.value = value
        self.depths = []

    def get(self, x, y, z):
        self.depths.append(z)
        return self.value


@pytest.fixture
def terminal():
    return RecordingTerminal()


@pytest.fixture
def backend():
    return ScriptedBackend()


@pytest.fixture
def recording_field():
    return RecordingField()
