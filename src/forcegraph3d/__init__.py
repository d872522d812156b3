"""
forcegraph3d - interactive 3D force-directed graph viewer.

Usage:
    from forcegraph3d import GraphVisualizer, register_surface

    register_surface("canvas", surface)        # anything with width()/height()
    viz = GraphVisualizer("canvas", {"repulsionForce": 8000})
    viz.add_edge("A", "B", "knows")
    viz.on_node_select(lambda node: print(node.label))
    viz.step()                                 # or viz.start(scheduler)
"""
from forcegraph3d.config import VisualizerOptions
from forcegraph3d.controller.camera import Projection, Vector3
from forcegraph3d.controller.engine import GraphVisualizer, Scheduler, TickHandle
from forcegraph3d.controller.events import CANVAS_CLICKED, NODE_SELECTED
from forcegraph3d.controller.frame import Frame, build_frame
from forcegraph3d.controller.interaction import PointerButton
from forcegraph3d.controller.surfaces import SurfaceNotFoundError, register_surface, unregister_surface
from forcegraph3d.model.graph import GraphEdge, GraphNode, GraphStore
from forcegraph3d.model.state import InteractionMode

__version__ = "0.1.0"
__all__ = [
    "VisualizerOptions",
    "Projection",
    "Vector3",
    "GraphVisualizer",
    "Scheduler",
    "TickHandle",
    "CANVAS_CLICKED",
    "NODE_SELECTED",
    "Frame",
    "build_frame",
    "PointerButton",
    "SurfaceNotFoundError",
    "register_surface",
    "unregister_surface",
    "GraphEdge",
    "GraphNode",
    "GraphStore",
    "InteractionMode",
]
