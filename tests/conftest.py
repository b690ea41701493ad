# Shared fixtures: headless Qt platform, a session QApplication for the Qt
# integration tests, and a reset of the global reduced motion preference so
# one test toggling it cannot leak into the next.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from springmotion.reduced_motion import set_reduced_motion  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def _motion_enabled():
    set_reduced_motion(False)
    yield
    set_reduced_motion(False)


class Recorder:
    """Collects values and state changes delivered by a stream."""

    def __init__(self):
        self.values = []
        self.states = []

    def next(self, value):
        self.values.append(value)

    def state(self, state):
        self.states.append(state)


@pytest.fixture
def recorder():
    return Recorder()
