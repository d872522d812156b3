"""
Graph Visualizer Engine
=======================
The public entry point that ties the graph store, layout, camera,
interaction and search together.

Why is this file needed?
------------------------
1. Facade: Hosts talk to one object (add nodes, feed pointer input, search)
   instead of wiring five components themselves.
2. Lifecycle: It owns the tick loop handle. A tick runs one layout step and
   then notifies the renderer; starting and stopping the loop is up to the host.

Note: This module should be pure Python/NumPy and should NOT import PySide6.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Callable, Mapping, Optional, Protocol, Union

from forcegraph3d.config import VisualizerOptions
from forcegraph3d.controller.camera import Camera, PositionLike, Projection, Vector3
from forcegraph3d.controller.events import CANVAS_CLICKED, NODE_SELECTED, Callback, EventRegistry
from forcegraph3d.controller.interaction import InteractionController, PointerButton
from forcegraph3d.controller.layout import LayoutEngine
from forcegraph3d.controller.search import HighlightIndex
from forcegraph3d.controller.surfaces import DrawingSurface, resolve_surface
from forcegraph3d.model.graph import GraphEdge, GraphNode, GraphStore
from forcegraph3d.model.state import InteractionMode, ViewState

logger = logging.getLogger(__name__)

FRAME_READY = "frameReady"


class Scheduler(Protocol):
    """Calls a callback periodically until stopped (e.g. a QTimer wrapper)."""
    def start(self, callback: Callable[[], None]) -> None: ...
    def stop(self) -> None: ...


class TickHandle:
    """Returned by GraphVisualizer.start(); stopping it ends the tick loop."""
    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self._scheduler.stop()


class GraphVisualizer:
    """
    Layout-and-view engine for one drawing surface.

    Args:
        surface_id: Id of a registered drawing surface.
        options: VisualizerOptions or a mapping accepted by VisualizerOptions.from_mapping.
        surfaces: Optional explicit surface lookup table.
        rng: Random generator for initial node placement.

    Raises:
        SurfaceNotFoundError: If `surface_id` does not name a drawing surface.
        ValueError: If the options are invalid.
    """
    def __init__(
        self,
        surface_id: str,
        options: Union[VisualizerOptions, Mapping[str, Any], None] = None,
        surfaces: Optional[Mapping[str, DrawingSurface]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.surface: DrawingSurface = resolve_surface(surface_id, surfaces)
        self.surface_id = surface_id

        if isinstance(options, VisualizerOptions):
            options.validate()
            self.options = options
        else:
            self.options = VisualizerOptions.from_mapping(options)

        self.store = GraphStore(rng=rng or random.Random())
        self.view = ViewState()
        self.events = EventRegistry()

        self.layout = LayoutEngine(self.options)
        self.camera = Camera(self.view.camera, self.options)
        self.interaction = InteractionController(
            self.store, self.view, self.camera, self.events, self.options
        )
        self.highlights = HighlightIndex(self.store, self.events)

        self._tick_handle: Optional[TickHandle] = None

        self.resize(self.surface.width(), self.surface.height())
        logger.info(f"Graph visualizer attached to surface '{surface_id}'.")

    # ------------------------------------------------------------------------------
    # Graph
    # ------------------------------------------------------------------------------

    def add_node(self, label: str, fixed: bool = False) -> GraphNode:
        return self.store.add_node(label, fixed)

    def add_edge(self, source_label: str, target_label: str, label: str) -> GraphEdge:
        return self.store.add_edge(source_label, target_label, label)

    def clear(self) -> None:
        """Drop the whole graph, its highlights and any drag in progress."""
        self.highlights.clear_search_highlights()
        self.interaction.pointer_up()
        self.store.clear()
        self.view.reset_interaction()

    @property
    def nodes(self) -> list[GraphNode]:
        return self.store.nodes

    @property
    def edges(self) -> list[GraphEdge]:
        return self.store.edges

    # ------------------------------------------------------------------------------
    # Simulation loop
    # ------------------------------------------------------------------------------

    def step(self) -> None:
        self.layout.step(self.store)

    def tick(self) -> None:
        """One frame: a layout step, then a render notification."""
        self.step()
        self.events.emit(FRAME_READY, self)

    def start(self, scheduler: Scheduler) -> TickHandle:
        """Start ticking on `scheduler`, replacing a loop that is already running."""
        self.stop()
        scheduler.start(self.tick)
        self._tick_handle = TickHandle(scheduler)
        logger.info("Simulation loop started.")
        return self._tick_handle

    def stop(self) -> None:
        if self._tick_handle is not None and self._tick_handle.active:
            self._tick_handle.stop()
            logger.info("Simulation loop stopped.")
        self._tick_handle = None

    @property
    def running(self) -> bool:
        return self._tick_handle is not None and self._tick_handle.active

    # ------------------------------------------------------------------------------
    # Camera / projection
    # ------------------------------------------------------------------------------

    def rotate(self, node: PositionLike) -> Vector3:
        return self.camera.rotate(node)

    def project(self, node: PositionLike) -> Projection:
        return self.camera.project(node)

    def resize(self, width: float, height: float) -> None:
        self.camera.resize(width, height)

    def reset_view(self) -> None:
        self.camera.reset()

    # ------------------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------------------

    @property
    def mode(self) -> InteractionMode:
        return self.interaction.mode

    @property
    def selected_node(self) -> Optional[GraphNode]:
        return self.interaction.selected_node

    def pick(self, x: float, y: float) -> Optional[GraphNode]:
        return self.interaction.pick(x, y)

    def pointer_down(self, x: float, y: float, button: int = PointerButton.PRIMARY) -> None:
        self.interaction.pointer_down(x, y, button)

    def pointer_move(self, x: float, y: float) -> None:
        self.interaction.pointer_move(x, y)

    def pointer_up(self) -> None:
        self.interaction.pointer_up()

    def pointer_leave(self) -> None:
        self.interaction.pointer_leave()

    def wheel(self, delta_y: float) -> float:
        return self.interaction.wheel(delta_y)

    # ------------------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------------------

    def on(self, event_name: str, callback: Callback) -> Callback:
        return self.events.on(event_name, callback)

    def on_node_select(self, callback: Callable[[GraphNode], None]) -> Callback:
        return self.events.on(NODE_SELECTED, callback)

    def on_canvas_click(self, callback: Callable[[dict], None]) -> Callback:
        return self.events.on(CANVAS_CLICKED, callback)

    # ------------------------------------------------------------------------------
    # Search / highlight
    # ------------------------------------------------------------------------------

    def search_and_highlight(self, query: str) -> list[GraphNode]:
        return self.highlights.search_and_highlight(query)

    def search_by_substring(self, query: str) -> list[GraphNode]:
        return self.highlights.search_by_substring(query)

    def highlight_by_exact_label(self, label: str) -> Optional[GraphNode]:
        return self.highlights.highlight_by_exact_label(label)

    def highlight_node(self, label: str, highlighted: bool = True) -> Optional[GraphNode]:
        return self.highlights.highlight_node(label, highlighted)

    def clear_search_highlights(self) -> None:
        self.highlights.clear_search_highlights()

    def clear_all_highlights(self) -> None:
        self.highlights.clear_all_highlights()
