import random

import pytest

from mandalagen.canvas import CanvasSize
from mandalagen.color import Color
from mandalagen.palette import Palette

RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
YELLOW = Color(1.0, 1.0, 0.0)


class RecordingCanvas:
    """Stands in for Canvas and remembers every drawing call."""

    def __init__(self, size=CanvasSize(100, 100)):
        self.size = size
        self.calls = []

    def fill_background(self, color):
        self.calls.append(("background", None, color))

    def fill_path(self, path, color):
        self.calls.append(("fill", path, color))

    def stroke_path(self, path, color, width):
        self.calls.append(("stroke", path, color, width))

    def fill_path_with_linear_gradient(self, path, stops, start, end):
        self.calls.append(("linear", path, stops, start, end))

    def fill_path_with_radial_gradient(self, path, stops, center, start_radius, end_radius):
        self.calls.append(("radial", path, stops, center, start_radius, end_radius))

    def composite_overlay(self, stops, start, end, blend_mode="soft-light", opacity=1.0):
        self.calls.append(("overlay", stops, start, end, blend_mode, opacity))

    def of(self, op):
        return [c for c in self.calls if c[0] == op]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def palette():
    return Palette([RED, GREEN, BLUE, YELLOW])


@pytest.fixture
def recorder():
    return RecordingCanvas()
