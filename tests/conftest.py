import json
import os
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pytest

from particle import ParticleBundle
from renderer import SurfaceBackend
from trajectory import PathPoint

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"


class RecordingBackend(SurfaceBackend):
    """Stores every primitive call as (name, args) instead of drawing."""
    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(("clear", ()))

    def fill_circle(self, x, y, radius, rgba):
        self.calls.append(("fill_circle", (x, y, radius, rgba)))

    def fill_radial_gradient(self, x, y, radius, stops):
        self.calls.append(("fill_radial_gradient", (x, y, radius, stops)))

    def stroke_line(self, x1, y1, x2, y2, width, rgba):
        self.calls.append(("stroke_line", (x1, y1, x2, y2, width, rgba)))

    def set_blur(self, radius):
        self.calls.append(("set_blur", (radius,)))

    def names(self):
        return [name for name, _ in self.calls]

    def of(self, name):
        return [args for call_name, args in self.calls if call_name == name]


class ManualClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def sim_config():
    with open(CONFIG_PATH, "r") as f:
        return json.load(f)["simulation"]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def clock():
    return ManualClock()


def straight_path(length, t0=0.0, interval=100.0):
    return [PathPoint(float(i), float(i), t0 + i * interval) for i in range(length)]


@pytest.fixture
def make_bundle():
    def _make(length=60, t0=0.0, interval=100.0):
        return ParticleBundle(straight_path(length, t0, interval), t0, (255, 0, 0), (0, 255, 0), (0, 0, 255))
    return _make
