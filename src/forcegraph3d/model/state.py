"""
View State (Data Model)
=======================
This module defines the mutable view-side state of one visualizer.

Why is this file needed?
------------------------
1. State Management: Rotation, pan, zoom and the pointer interaction mode
   live in one aggregate instead of loose attributes on the visualizer.
2. Decoupling: The camera reads and writes CameraState; the interaction
   controller writes both parts. The layout engine never sees this object.

Classes:
    CameraState: Zoom, pan, rotation and cached viewport size.
    InteractionMode: The pointer state machine states.
    InteractionState: Current mode, dragged node and last pointer position.
    ViewState: The container handed to the camera and the interaction controller.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from forcegraph3d.model.graph import GraphNode


@dataclass
class CameraState:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    rotation_x: float = 0.0
    rotation_y: float = 0.0

    # Drawing surface size in pixels
    width: float = 0.0
    height: float = 0.0


class InteractionMode(IntEnum):
    """States of the pointer state machine."""
    IDLE = 0
    DRAGGING_NODE = 1
    ROTATING = 2
    PANNING = 3


@dataclass
class InteractionState:
    mode: InteractionMode = InteractionMode.IDLE
    selected_node: Optional[GraphNode] = None
    last_x: float = 0.0
    last_y: float = 0.0
    # The dragged node's `fixed` flag before the drag started
    was_fixed: bool = False


@dataclass
class ViewState:
    """
    Owned aggregate of camera and interaction state.
    Pass this instance to the Camera and the InteractionController.
    """
    camera: CameraState = field(default_factory=CameraState)
    interaction: InteractionState = field(default_factory=InteractionState)

    def reset_interaction(self) -> None:
        """Back to idle, forgetting any dragged node."""
        self.interaction = InteractionState()
