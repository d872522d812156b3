"""
Camera & Projection
===================
Maps 3D layout positions to 2D screen coordinates.

The pipeline is: rotate about X, then about Y (using the once-rotated
coordinates), then a perspective divide, then pan, zoom and centring on the
viewport. Rotation always works on copies; the positions stored on the
nodes belong to the layout and are never touched here.
"""
from __future__ import annotations

import logging
import math
from typing import NamedTuple, TYPE_CHECKING, Union

import numpy as np

from forcegraph3d.config import (
    GUIDE_AXIS_ORIGIN,
    MAX_ZOOM,
    MIN_ZOOM,
    ROTATION_SENSITIVITY,
    ZOOM_INTENSITY,
    VisualizerOptions,
)
from forcegraph3d.model.graph import GraphNode
from forcegraph3d.model.state import CameraState

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class Vector3(NamedTuple):
    x: float
    y: float
    z: float


class Projection(NamedTuple):
    """Screen position and the on-screen size multiplier for a unit radius."""
    x: float
    y: float
    scale: float


PositionLike = Union[GraphNode, Vector3, tuple[float, float, float]]


def _as_vector(position: PositionLike) -> Vector3:
    if isinstance(position, GraphNode):
        return Vector3(position.x, position.y, position.z)
    x, y, z = position
    return Vector3(float(x), float(y), float(z))


class Camera:
    """
    Rotation, pan and zoom over a shared CameraState.

    Args:
        state: The camera part of the visualizer's ViewState.
        options: Supplies `projection_distance` and `min_projection_denominator`.
    """
    def __init__(self, state: CameraState, options: VisualizerOptions) -> None:
        self.state = state
        self.options = options

    # ------------------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------------------

    def rotate(self, position: PositionLike) -> Vector3:
        """Rotated copy of a single position."""
        x, y, z = self.rotate_points(np.array([_as_vector(position)], dtype=np.float64))[0]
        return Vector3(float(x), float(y), float(z))

    def project(self, position: PositionLike) -> Projection:
        """Perspective projection of an already rotated position."""
        xs, ys, scales = self.project_points(np.array([_as_vector(position)], dtype=np.float64))
        return Projection(float(xs[0]), float(ys[0]), float(scales[0]))

    def rotate_points(self, points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """
        Rotate an (N, 3) array about X by `rotation_x`, then about Y by `rotation_y`.

        Returns:
            A new (N, 3) array; the input is left untouched.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        cos_x, sin_x = math.cos(self.state.rotation_x), math.sin(self.state.rotation_x)
        cos_y, sin_y = math.cos(self.state.rotation_y), math.sin(self.state.rotation_y)

        x, y, z = pts[:, 0], pts[:, 1], pts[:, 2]

        # about X
        y1 = y * cos_x - z * sin_x
        z1 = y * sin_x + z * cos_x

        # about Y
        x2 = x * cos_y + z1 * sin_y
        z2 = -x * sin_y + z1 * cos_y

        return np.column_stack((x2, y1, z2))

    def perspective(self, z: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Perspective factor D / max(D + z, min_denominator)."""
        distance = self.options.projection_distance
        denominator = np.maximum(distance + np.asarray(z, dtype=np.float64),
                                 self.options.min_projection_denominator)
        return distance / denominator

    def project_points(
        self, points: npt.NDArray[np.float64]
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Project an (N, 3) array of rotated positions to the screen.

        Returns:
            (xs, ys, scales), each of shape (N,).
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        cam = self.state
        p = self.perspective(pts[:, 2])
        xs = (pts[:, 0] * p + cam.pan_x) * cam.zoom + cam.width / 2
        ys = (pts[:, 1] * p + cam.pan_y) * cam.zoom + cam.height / 2
        return xs, ys, p * cam.zoom

    def project_guide_axis(
        self,
        position: PositionLike,
        origin: tuple[float, float] = GUIDE_AXIS_ORIGIN,
    ) -> tuple[float, float]:
        """
        Rotate and project a guide-axis end point.

        The gizmo is fixed in screen space: it ignores zoom and pan and is
        anchored at `origin` instead of the viewport centre.
        """
        x, y, z = self.rotate(position)
        p = float(self.perspective(np.array([z]))[0])
        return x * p + origin[0], y * p + origin[1]

    def screen_to_world_xy(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        """
        Invert the linear part of the projection (centring, zoom, pan).

        Perspective and rotation are not inverted, so a dragged node follows
        the pointer only approximately away from the default view.
        """
        cam = self.state
        x = (screen_x - cam.width / 2) / cam.zoom - cam.pan_x / cam.zoom
        y = (screen_y - cam.height / 2) / cam.zoom - cam.pan_y / cam.zoom
        return x, y

    # ------------------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------------------

    def rotate_by(self, dx: float, dy: float) -> None:
        """Horizontal pointer travel turns about Y, vertical travel about X."""
        self.state.rotation_y += dx * ROTATION_SENSITIVITY
        self.state.rotation_x += dy * ROTATION_SENSITIVITY

    def pan_by(self, dx: float, dy: float) -> None:
        self.state.pan_x += dx / self.state.zoom
        self.state.pan_y += dy / self.state.zoom

    def zoom_by_wheel(self, delta_y: float) -> float:
        """
        Zoom in for negative wheel deltas (wheel away from the user), out otherwise.

        Returns:
            The new, clamped zoom.
        """
        direction = 1.0 if delta_y < 0 else -1.0
        zoom = self.state.zoom * math.exp(direction * ZOOM_INTENSITY)
        self.state.zoom = min(max(MIN_ZOOM, zoom), MAX_ZOOM)
        return self.state.zoom

    def resize(self, width: float, height: float) -> None:
        logger.debug(f"Viewport resized to {width}x{height}.")
        self.state.width = float(width)
        self.state.height = float(height)

    def reset(self) -> None:
        """Default view: no rotation, no pan, zoom 1. Viewport size is kept."""
        self.state.zoom = 1.0
        self.state.pan_x = 0.0
        self.state.pan_y = 0.0
        self.state.rotation_x = 0.0
        self.state.rotation_y = 0.0
