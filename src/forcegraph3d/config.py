"""
Configuration & Constants
=========================
This module serves as the central registry for tuning constants and the
options accepted by the visualizer.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (zoom limits, sensitivities, axis
   sizes) scattered throughout the engine and the view.
2. Compatibility: Options can be given with snake_case keys or with the
   camelCase keys used by the browser version of the viewer.

Exports:
    VisualizerOptions: Physics, projection and cosmetic settings.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

# Global Constants
DEFAULT_TICK_INTERVAL_MS: int = 16       # ~60 frames per second
INITIAL_SPREAD: float = 200.0            # new nodes land in [-spread, spread]^3
DISTANCE_FLOOR: float = 0.01             # avoids division by zero between coincident nodes

ROTATION_SENSITIVITY: float = 0.005      # radians per pixel of pointer travel
ZOOM_INTENSITY: float = 0.1
MIN_ZOOM: float = 0.1
MAX_ZOOM: float = 5.0

GUIDE_AXIS_LENGTH: float = 100.0
GUIDE_AXIS_ORIGIN: tuple[float, float] = (110.0, 110.0)

NODE_LABEL_OFFSET: float = 25.0          # px above the node centre, scaled by perspective
EDGE_LABEL_OFFSET: float = 10.0          # px perpendicular to the edge

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass
class VisualizerOptions:
    """
    Settings of a single visualizer instance.
    The physics fields drive the layout engine, the rest is consumed by the renderer.
    """
    # --- Physics ---
    desired_distance: float = 150.0
    min_distance: float = 50.0
    edge_spring_constant: float = 0.1
    repulsion_force: float = 5000.0
    max_node_speed: float = 10.0

    # --- Projection / picking ---
    projection_distance: float = 1000.0
    min_projection_denominator: float = 1.0
    node_radius: float = 15.0

    # --- Interaction ---
    restore_fixed_on_release: bool = True

    # --- Cosmetic ---
    node_color: str = "#3498db"
    node_highlight_color: str = "#e74c3c"
    edge_color: str = "#95a5a6"
    edge_highlight_color: str = "#e74c3c"
    highlight_search_color: str = "#f1c40f"
    font: str = "12px sans-serif"
    show_guide_axes: bool = False

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]] = None) -> VisualizerOptions:
        """
        Build options from a plain mapping.

        Keys may be snake_case ('repulsion_force') or camelCase ('repulsionForce').
        Unknown keys are logged and ignored.

        Raises:
            ValueError: If the resulting physics settings are invalid.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = _CAMEL_RE.sub("_", key).lower()
            if name not in known:
                logger.warning(f"Ignoring unknown visualizer option '{key}'.")
                continue
            values[name] = value

        result = cls(**values)
        result.validate()
        return result

    def with_overrides(self, **changes: Any) -> VisualizerOptions:
        result = replace(self, **changes)
        result.validate()
        return result

    def validate(self) -> None:
        """Raise ValueError if the physics or projection settings cannot work."""
        positive = (
            "desired_distance",
            "repulsion_force",
            "max_node_speed",
            "projection_distance",
            "min_projection_denominator",
            "node_radius",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"Option '{name}' must be positive, got {getattr(self, name)}.")

        if self.min_distance < 0:
            raise ValueError(f"Option 'min_distance' must not be negative, got {self.min_distance}.")
        if self.edge_spring_constant < 0:
            raise ValueError(
                f"Option 'edge_spring_constant' must not be negative, got {self.edge_spring_constant}."
            )
        if self.min_distance > self.desired_distance:
            raise ValueError(
                f"Option 'min_distance' ({self.min_distance}) exceeds "
                f"'desired_distance' ({self.desired_distance})."
            )

    @property
    def min_z(self) -> float:
        """Lowest z a simulated node may reach before the projection would break."""
        return -self.projection_distance + self.min_projection_denominator
