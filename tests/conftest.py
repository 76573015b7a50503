"""
Shared pytest fixtures for pixtone tests.
"""

import pytest


class RecordingProgress:
    """Progress reporter that remembers every call."""

    def __init__(self):
        self.events = []
        self.labels = []
        self.updates = []

    def start(self, label):
        self.events.append("start")
        self.labels.append(label)

    def update(self, percent):
        self.events.append("update")
        self.updates.append(percent)

    def skip(self):
        self.events.append("skip")

    def done(self):
        self.events.append("done")


@pytest.fixture
def progress():
    """A fresh RecordingProgress."""
    return RecordingProgress()
