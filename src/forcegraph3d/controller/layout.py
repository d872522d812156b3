"""
Force-Directed Layout
=====================
Advances node positions by one simulation step.

Each step re-derives node velocities from the current forces (there is no
momentum carried between steps), clamps them to the maximum speed and moves
every free node by exactly one unit of its velocity. The layout never
converges on its own; the caller decides how often to step.

Note: This module is pure Python/NumPy and does NOT import PySide6.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from forcegraph3d.config import DISTANCE_FLOOR, VisualizerOptions

if TYPE_CHECKING:
    import numpy.typing as npt
    from forcegraph3d.model.graph import GraphStore

logger = logging.getLogger(__name__)


class LayoutEngine:
    """
    Repulsion + piecewise spring layout in 3D.

    Args:
        options: Physics constants (distances, spring constant, repulsion, max speed)
                 and projection settings used for the z clamp.
    """
    def __init__(self, options: VisualizerOptions) -> None:
        self.options = options

    def step(self, store: GraphStore) -> None:
        """Run one simulation step over the whole store, in place."""
        nodes = store.nodes
        if not nodes:
            return

        index = {id(node): i for i, node in enumerate(nodes)}
        positions = np.array([n.position for n in nodes], dtype=np.float64)
        velocities = np.array([(n.vx, n.vy, n.vz) for n in nodes], dtype=np.float64)
        free = np.array([not n.fixed for n in nodes], dtype=bool)

        # 1. Free nodes start from rest every step
        velocities[free] = 0.0

        # 2. + 3. Forces (fixed nodes ignore what they receive)
        forces = self.repulsion(positions)
        edges = store.edges
        if edges:
            sources = np.array([index[id(e.source)] for e in edges], dtype=np.int64)
            targets = np.array([index[id(e.target)] for e in edges], dtype=np.int64)
            forces += self.attraction(positions, sources, targets)
        velocities[free] += forces[free]

        # 4. Speed clamp
        velocities[free] = self.clamp_speed(velocities[free])

        # 5. Unit-timestep Euler integration
        positions[free] += velocities[free]

        # 6. Keep free nodes in front of the projection plane
        positions[free, 2] = np.maximum(positions[free, 2], self.options.min_z)

        for i, node in enumerate(nodes):
            if not free[i]:
                continue
            node.x, node.y, node.z = (float(v) for v in positions[i])
            node.vx, node.vy, node.vz = (float(v) for v in velocities[i])

    def repulsion(self, positions: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """
        Inverse-square repulsion between every pair of nodes.

        Args:
            positions: (N, 3) array of node positions.

        Returns:
            (N, 3) array with the summed repulsive force acting on each node.
        """
        # delta[i, j] points from node j to node i
        delta = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        distance = np.maximum(np.linalg.norm(delta, axis=2), DISTANCE_FLOOR)
        magnitude = self.options.repulsion_force / (distance * distance)
        np.fill_diagonal(magnitude, 0.0)

        return np.sum(delta * (magnitude / distance)[:, :, np.newaxis], axis=1)

    def attraction(
        self,
        positions: npt.NDArray[np.float64],
        sources: npt.NDArray[np.int64],
        targets: npt.NDArray[np.int64],
    ) -> npt.NDArray[np.float64]:
        """
        Piecewise-linear spring force along every edge.

        Springs are slack between `min_distance` and `desired_distance`, pull
        the endpoints together beyond it and push them apart below it.
        Parallel edges add up.

        Returns:
            (N, 3) array with the summed spring force acting on each node.
        """
        opts = self.options
        delta = positions[targets] - positions[sources]
        distance = np.maximum(np.linalg.norm(delta, axis=1), DISTANCE_FLOOR)

        magnitude = np.zeros_like(distance)
        too_far = distance > opts.desired_distance
        too_close = distance < opts.min_distance
        magnitude[too_far] = opts.edge_spring_constant * (distance[too_far] - opts.desired_distance)
        magnitude[too_close] = -opts.edge_spring_constant * (opts.min_distance - distance[too_close])

        force = delta * (magnitude / distance)[:, np.newaxis]

        result = np.zeros_like(positions)
        np.add.at(result, sources, force)
        np.add.at(result, targets, -force)
        return result

    def clamp_speed(self, velocities: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Scale down every velocity longer than `max_node_speed`, keeping its direction."""
        speed = np.linalg.norm(velocities, axis=1)
        limit = self.options.max_node_speed
        factor = np.ones_like(speed)
        too_fast = speed > limit
        factor[too_fast] = limit / speed[too_fast]
        return velocities * factor[:, np.newaxis]
