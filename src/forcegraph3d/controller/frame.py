"""
Frame description for renderers.

build_frame() turns the current engine state into screen-space draw commands
(edges first, then nodes, then the optional guide axes), so a renderer only
has to stroke lines, fill circles and place text.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from forcegraph3d.config import EDGE_LABEL_OFFSET, GUIDE_AXIS_LENGTH, GUIDE_AXIS_ORIGIN, NODE_LABEL_OFFSET

if TYPE_CHECKING:
    from forcegraph3d.config import VisualizerOptions
    from forcegraph3d.controller.engine import GraphVisualizer
    from forcegraph3d.model.graph import GraphNode

GUIDE_AXES: tuple[tuple[tuple[float, float, float], str, str], ...] = (
    ((GUIDE_AXIS_LENGTH, 0.0, 0.0), "#e74c3c", "X"),
    ((0.0, GUIDE_AXIS_LENGTH, 0.0), "#2ecc71", "Y"),
    ((0.0, 0.0, GUIDE_AXIS_LENGTH), "#3498db", "Z"),
)


@dataclass
class EdgeDraw:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    label: str
    label_x: float
    label_y: float


@dataclass
class NodeDraw:
    x: float
    y: float
    radius: float
    color: str
    label: str
    label_x: float
    label_y: float


@dataclass
class AxisDraw:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    label: str


@dataclass
class Frame:
    width: float
    height: float
    font: str
    edges: list[EdgeDraw] = field(default_factory=list)
    nodes: list[NodeDraw] = field(default_factory=list)
    axes: list[AxisDraw] = field(default_factory=list)


def node_color(node: GraphNode, options: VisualizerOptions) -> str:
    """Search highlight beats manual highlight beats the base colour."""
    if node.search_highlighted:
        return options.highlight_search_color
    if node.highlighted:
        return options.node_highlight_color
    return options.node_color


def edge_label_anchor(x1: float, y1: float, x2: float, y2: float) -> tuple[float, float]:
    """Midpoint of the edge, shifted perpendicular to it."""
    angle = math.atan2(y2 - y1, x2 - x1)
    mid_x, mid_y = (x1 + x2) / 2, (y1 + y2) / 2
    return mid_x + EDGE_LABEL_OFFSET * math.sin(angle), mid_y - EDGE_LABEL_OFFSET * math.cos(angle)


def build_frame(visualizer: GraphVisualizer) -> Frame:
    options = visualizer.options
    camera = visualizer.camera
    store = visualizer.store
    frame = Frame(width=camera.state.width, height=camera.state.height, font=options.font)

    nodes = store.nodes
    if nodes:
        rotated = camera.rotate_points(store.positions())
        xs, ys, scales = camera.project_points(rotated)
        slot = {id(node): i for i, node in enumerate(nodes)}

        for edge in store.edges:
            a, b = slot[id(edge.source)], slot[id(edge.target)]
            x1, y1, x2, y2 = float(xs[a]), float(ys[a]), float(xs[b]), float(ys[b])
            label_x, label_y = edge_label_anchor(x1, y1, x2, y2)
            frame.edges.append(EdgeDraw(
                x1=x1, y1=y1, x2=x2, y2=y2,
                color=options.edge_highlight_color if edge.highlighted else options.edge_color,
                label=edge.label,
                label_x=label_x,
                label_y=label_y,
            ))

        for i in np.flatnonzero(scales > 0):
            node = nodes[int(i)]
            x, y, scale = float(xs[i]), float(ys[i]), float(scales[i])
            frame.nodes.append(NodeDraw(
                x=x,
                y=y,
                radius=options.node_radius * scale,
                color=node_color(node, options),
                label=node.label,
                label_x=x,
                label_y=y - NODE_LABEL_OFFSET * scale,
            ))

    if options.show_guide_axes:
        ox, oy = GUIDE_AXIS_ORIGIN
        for end, color, label in GUIDE_AXES:
            x2, y2 = camera.project_guide_axis(end)
            frame.axes.append(AxisDraw(x1=ox, y1=oy, x2=x2, y2=y2, color=color, label=label))

    return frame
