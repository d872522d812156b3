"""
Graph Store
===========
Owns the nodes and edges of the displayed graph.

Nodes are keyed by their label; adding a label twice returns the node that
already exists. Edges hold references to their endpoint nodes, so moving a
node moves every edge attached to it.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, Optional, TYPE_CHECKING

import numpy as np

from forcegraph3d.config import INITIAL_SPREAD

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class GraphNode:
    """A labeled point with a 3D position, a velocity and display flags."""
    label: str
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    fixed: bool = False
    highlighted: bool = False
    search_highlighted: bool = False

    @property
    def position(self) -> tuple[float, float, float]:
        return self.x, self.y, self.z

    @property
    def speed(self) -> float:
        return float(np.sqrt(self.vx ** 2 + self.vy ** 2 + self.vz ** 2))


@dataclass(eq=False)
class GraphEdge:
    """A directed, labeled relation between two nodes."""
    source: GraphNode
    target: GraphNode
    label: str
    highlighted: bool = False


@dataclass
class GraphStore:
    """
    Container for nodes (in insertion order) and edges.

    Args:
        rng: Random generator used for initial node placement.
             Pass a seeded instance for reproducible layouts.
    """
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _nodes: dict[str, GraphNode] = field(default_factory=dict, init=False)
    _edges: list[GraphEdge] = field(default_factory=list, init=False)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, label: object) -> bool:
        return label in self._nodes

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    @property
    def nodes(self) -> list[GraphNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[GraphEdge]:
        return list(self._edges)

    def get(self, label: str) -> Optional[GraphNode]:
        return self._nodes.get(label)

    def add_node(self, label: str, fixed: bool = False) -> GraphNode:
        """
        Add a node, or return the existing one with the same label.

        The `fixed` flag only applies to newly created nodes.
        """
        node = self._nodes.get(label)
        if node is not None:
            return node

        node = GraphNode(
            label=label,
            x=self.rng.uniform(-INITIAL_SPREAD, INITIAL_SPREAD),
            y=self.rng.uniform(-INITIAL_SPREAD, INITIAL_SPREAD),
            z=self.rng.uniform(-INITIAL_SPREAD, INITIAL_SPREAD),
            fixed=fixed,
        )
        self._nodes[label] = node
        logger.debug(f"Added node '{label}' (fixed={fixed}).")
        return node

    def add_edge(self, source_label: str, target_label: str, label: str) -> GraphEdge:
        """Append a new edge, creating missing endpoints as free nodes."""
        edge = GraphEdge(
            source=self.add_node(source_label),
            target=self.add_node(target_label),
            label=label,
        )
        self._edges.append(edge)
        return edge

    def edges_of(self, label: str) -> list[GraphEdge]:
        """All edges that start or end at the given node."""
        node = self._nodes.get(label)
        if node is None:
            return []
        return [e for e in self._edges if e.source is node or e.target is node]

    def clear(self) -> None:
        """Drop every node and edge."""
        logger.info(f"Clearing graph ({len(self._nodes)} nodes, {len(self._edges)} edges).")
        self._nodes = {}
        self._edges = []

    def positions(self) -> npt.NDArray[np.float64]:
        """(N, 3) array of node positions in insertion order."""
        if not self._nodes:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([n.position for n in self._nodes.values()], dtype=np.float64)
