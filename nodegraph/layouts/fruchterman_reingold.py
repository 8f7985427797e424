"""
Force-directed layout (Fruchterman and Reingold, 1991).

Vertices repel each other, edges pull their ends together, and a temperature
that falls linearly over the iterations caps how far a vertex moves in one
step. Forces are computed on numpy arrays for all vertices at once.
"""
from __future__ import annotations

import numpy as np

from ..core.geometry import Rectangle
from .base import LayoutBase, LayoutContext
from .random import randomize_vertex_locations
from .util import get_rectangle_transformation, transform_points, vertex_is_locked


class FruchtermanReingoldLayout(LayoutBase):
    """
    Fruchterman-Reingold force-directed layout.

    Parameters
    ----------
    margin : int, optional
    iterations : int, optional
        Number of force calculation rounds.
    c : float, optional
        Scales the optimal distance between vertices.
    seed : int, optional
        Seed for the initial random placement of a graph that has not been laid out.

    Notes
    -----
    Cancellation is checked before every iteration. Locked vertices push and
    pull the others but are never moved.
    """

    def __init__(self, margin: int = 6, iterations: int = 10, c: float = 1.0, seed: int | None = 1):
        super().__init__(margin)
        if iterations < 1:
            raise ValueError(f"iterations must be positive, got {iterations}")
        if c <= 0:
            raise ValueError(f"c must be positive, got {c}")
        self.iterations = iterations
        self.c = c
        self.seed = seed

    def _lay_out_graph_core(self, graph, vertices, layout_context: LayoutContext, cancellation_requested) -> bool:
        if not self.graph_has_been_laid_out(graph):
            randomize_vertex_locations(vertices, layout_context, np.random.default_rng(self.seed))

        index = {v.id: i for i, v in enumerate(vertices)}
        edges = np.array(
            [
                (index[e.vertex1.id], index[e.vertex2.id])
                for e in graph.edges
                if not e.is_self_loop and e.vertex1.id in index and e.vertex2.id in index
            ],
            dtype=np.intp,
        ).reshape(-1, 2)
        locked = np.array([vertex_is_locked(v) for v in vertices], dtype=bool)
        positions = np.array([v.location for v in vertices], dtype=float)

        rectangle = layout_context.graph_rectangle
        k = self.c * np.sqrt(rectangle.width * rectangle.height / len(vertices))
        temperature = rectangle.width / 10.0
        cooling = temperature / self.iterations

        for _ in range(self.iterations):
            if cancellation_requested is not None and cancellation_requested():
                return False
            displacement = self._repulsive_displacement(positions, k) + self._attractive_displacement(
                positions, edges, k
            )
            length = np.linalg.norm(displacement, axis=1)
            moving = (length > 0) & ~locked
            step = np.minimum(length[moving], temperature) / length[moving]
            positions[moving] += displacement[moving] * step[:, None]
            temperature -= cooling

        self._set_locations(vertices, positions, locked, rectangle)
        return True

    @staticmethod
    def _repulsive_displacement(positions: np.ndarray, k: float) -> np.ndarray:
        delta = positions[:, None, :] - positions[None, :, :]
        distance = np.linalg.norm(delta, axis=2)
        np.fill_diagonal(distance, np.inf)
        coincident = distance == 0
        distance[coincident] = np.inf
        # k^2 / d along the unit vector delta / d
        displacement = (delta * (k * k / distance**2)[:, :, None]).sum(axis=1)
        # coincident vertices get a fixed nudge
        displacement += coincident.sum(axis=1)[:, None]
        return displacement

    @staticmethod
    def _attractive_displacement(positions: np.ndarray, edges: np.ndarray, k: float) -> np.ndarray:
        displacement = np.zeros_like(positions)
        if not len(edges):
            return displacement
        delta = positions[edges[:, 0]] - positions[edges[:, 1]]
        distance = np.linalg.norm(delta, axis=1)
        # d^2 / k along the unit vector delta / d
        pull = delta * (distance / k)[:, None]
        np.add.at(displacement, edges[:, 0], -pull)
        np.add.at(displacement, edges[:, 1], pull)
        return displacement

    @staticmethod
    def _set_locations(vertices, positions, locked, rectangle: Rectangle):
        """Scale the unbounded positions into the graph rectangle and store them."""
        (left, top), (right, bottom) = positions.min(axis=0), positions.max(axis=0)
        matrix = get_rectangle_transformation(Rectangle.from_ltrb(left, top, right, bottom), rectangle)
        for vertex, (x, y), is_locked in zip(vertices, transform_points(positions, matrix), locked):
            if not is_locked:
                vertex.location = (x, y)
