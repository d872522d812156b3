"""Pytest configuration and fixtures."""

import random
from typing import Callable, Optional

import pytest

from forcegraph3d.config import VisualizerOptions
from forcegraph3d.controller.camera import Camera
from forcegraph3d.controller.engine import GraphVisualizer
from forcegraph3d.model.graph import GraphStore
from forcegraph3d.model.state import CameraState


class FakeSurface:
    """Drawing surface stand-in with a fixed pixel size."""

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self._width = width
        self._height = height

    def width(self) -> int:
        return self._width

    def height(self) -> int:
        return self._height


class ManualScheduler:
    """Scheduler that only ticks when the test calls run()."""

    def __init__(self) -> None:
        self.callback: Optional[Callable[[], None]] = None
        self.started = 0
        self.stopped = 0

    def start(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.started += 1

    def stop(self) -> None:
        self.callback = None
        self.stopped += 1

    def run(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            if self.callback is None:
                return
            self.callback()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def options() -> VisualizerOptions:
    return VisualizerOptions()


@pytest.fixture
def store(rng: random.Random) -> GraphStore:
    return GraphStore(rng=rng)


@pytest.fixture
def camera(options: VisualizerOptions) -> Camera:
    return Camera(CameraState(width=800, height=600), options)


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface(800, 600)


@pytest.fixture
def visualizer(surface: FakeSurface, rng: random.Random) -> GraphVisualizer:
    return GraphVisualizer("canvas", surfaces={"canvas": surface}, rng=rng)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def events_log(visualizer: GraphVisualizer) -> list:
    """Every notification as (event name, detail), in emission order."""
    log: list = []
    visualizer.on_node_select(lambda node: log.append(("nodeSelected", node)))
    visualizer.on_canvas_click(lambda pos: log.append(("canvasClicked", pos)))
    return log
