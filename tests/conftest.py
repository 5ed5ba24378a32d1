"""Shared fixtures."""

import pytest
from PIL import Image

from builder import ResumeBuilder


@pytest.fixture
def builder():
    b = ResumeBuilder(debounce_ms=20)
    yield b
    b.cancel_pending()


@pytest.fixture
def filled_builder(builder):
    """A builder holding one entry of every kind."""
    builder.set_personal("name", "Ada Lovelace")
    builder.set_personal("email", "ada@example.com")
    edu = builder.add_education()
    builder.update_entry("education", edu["id"], "degree", "BS CS")
    builder.update_entry("education", edu["id"], "institution", "X")
    builder.update_entry("education", edu["id"], "startYear", "2019")
    builder.update_entry("education", edu["id"], "endYear", "2023")
    exp = builder.add_experience()
    builder.update_entry("experience", exp["id"], "jobTitle", "Engineer")
    proj = builder.add_project()
    builder.update_entry("projects", proj["id"], "title", "Analytical Engine")
    builder.add_skill("Python")
    return builder


class ImmediateScheduler:
    """Runs timer callbacks synchronously and records the requested delays."""

    def __init__(self):
        self.delays = []

    def __call__(self, delay, func):
        self.delays.append(delay)
        func()


class DeferredScheduler:
    """Holds timer callbacks until run_all() is called."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay, func):
        self.pending.append((delay, func))

    def run_all(self):
        while self.pending:
            _, func = self.pending.pop(0)
            func()


@pytest.fixture
def immediate_scheduler():
    return ImmediateScheduler()


@pytest.fixture
def deferred_scheduler():
    return DeferredScheduler()


def _new_image(width_px: int, height_px: int, color=(255, 255, 255)) -> Image.Image:
    return Image.new("RGB", (width_px, height_px), color)


@pytest.fixture
def make_image():
    return _new_image


@pytest.fixture
def fake_capture():
    """Capture stand-in returning a one-page-and-a-bit bitmap (A4 width 420 px)."""
    calls = []

    def capture(html):
        calls.append(html)
        return _new_image(420, 800)

    capture.calls = calls
    return capture
