"""
Pointer Interaction
===================
State machine that turns pointer and wheel input into node drags and camera
moves.

States: IDLE, DRAGGING_NODE, ROTATING, PANNING. Pressing on a node drags it,
pressing the primary button on empty space rotates the camera and pressing
the secondary button pans. Releasing the button (or leaving the surface)
always returns to IDLE. The wheel zooms in any state.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional

import numpy as np

from forcegraph3d.config import VisualizerOptions
from forcegraph3d.controller.camera import Camera
from forcegraph3d.controller.events import CANVAS_CLICKED, NODE_SELECTED, EventRegistry
from forcegraph3d.model.graph import GraphNode, GraphStore
from forcegraph3d.model.state import InteractionMode, ViewState

logger = logging.getLogger(__name__)

CURSOR_CHANGED = "cursorChanged"


class PointerButton(IntEnum):
    """Button codes as reported by browsers (MouseEvent.button)."""
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


class InteractionController:
    def __init__(
        self,
        store: GraphStore,
        view: ViewState,
        camera: Camera,
        events: EventRegistry,
        options: VisualizerOptions,
    ) -> None:
        self.store = store
        self.view = view
        self.camera = camera
        self.events = events
        self.options = options

    @property
    def mode(self) -> InteractionMode:
        return self.view.interaction.mode

    @property
    def selected_node(self) -> Optional[GraphNode]:
        return self.view.interaction.selected_node

    def pick(self, x: float, y: float) -> Optional[GraphNode]:
        """
        The node under the screen point, or None.

        Nodes are tested in insertion order and the first hit wins, regardless
        of which node is closer to the camera.
        """
        nodes = self.store.nodes
        if not nodes:
            return None

        rotated = self.camera.rotate_points(self.store.positions())
        xs, ys, scales = self.camera.project_points(rotated)
        distance = np.hypot(x - xs, y - ys)
        hits = np.flatnonzero(distance < self.options.node_radius * scales)
        if hits.size == 0:
            return None
        return nodes[int(hits[0])]

    def pointer_down(self, x: float, y: float, button: int = PointerButton.PRIMARY) -> None:
        if self.mode != InteractionMode.IDLE:
            # A press without a matching release; finish the old gesture first
            self.pointer_up()

        state = self.view.interaction
        node = self.pick(x, y)
        if node is not None:
            state.mode = InteractionMode.DRAGGING_NODE
            state.selected_node = node
            state.was_fixed = node.fixed
            node.fixed = True
            logger.debug(f"Dragging node '{node.label}'.")
            self.events.emit(NODE_SELECTED, node)
            return

        if button == PointerButton.PRIMARY:
            state.mode = InteractionMode.ROTATING
            state.last_x, state.last_y = x, y
        elif button == PointerButton.SECONDARY:
            state.mode = InteractionMode.PANNING
            state.last_x, state.last_y = x, y
            self.events.emit(CURSOR_CHANGED, "grabbing")

        self.events.emit(CANVAS_CLICKED, {"x": x, "y": y})

    def pointer_move(self, x: float, y: float) -> None:
        state = self.view.interaction

        if state.mode == InteractionMode.DRAGGING_NODE and state.selected_node is not None:
            # z stays put: the node moves within its current depth plane
            state.selected_node.x, state.selected_node.y = self.camera.screen_to_world_xy(x, y)
        elif state.mode == InteractionMode.ROTATING:
            self.camera.rotate_by(x - state.last_x, y - state.last_y)
            state.last_x, state.last_y = x, y
        elif state.mode == InteractionMode.PANNING:
            self.camera.pan_by(x - state.last_x, y - state.last_y)
            state.last_x, state.last_y = x, y

    def pointer_up(self) -> None:
        state = self.view.interaction

        if state.mode == InteractionMode.DRAGGING_NODE and state.selected_node is not None:
            node = state.selected_node
            node.fixed = state.was_fixed if self.options.restore_fixed_on_release else False
            logger.debug(f"Released node '{node.label}' (fixed={node.fixed}).")
        elif state.mode == InteractionMode.PANNING:
            self.events.emit(CURSOR_CHANGED, "grab")

        state.mode = InteractionMode.IDLE
        state.selected_node = None

    def pointer_leave(self) -> None:
        self.pointer_up()

    def wheel(self, delta_y: float) -> float:
        return self.camera.zoom_by_wheel(delta_y)
