from __future__ import annotations

import numpy as np

from .base import LayoutBase, LayoutContext
from .util import vertex_is_locked


def randomize_vertex_locations(vertices, layout_context: LayoutContext, rng: np.random.Generator):
    """Place every unlocked vertex at a uniformly random point of the graph rectangle."""
    movable = [v for v in vertices if not vertex_is_locked(v)]
    if not movable:
        return
    rectangle = layout_context.graph_rectangle
    xs = rng.uniform(rectangle.left, rectangle.right, len(movable))
    ys = rng.uniform(rectangle.top, rectangle.bottom, len(movable))
    for vertex, x, y in zip(movable, xs, ys):
        vertex.location = (x, y)


class RandomLayout(LayoutBase):
    """
    Places vertices at random.

    Parameters
    ----------
    margin : int, optional
    seed : int, optional
        Seed of the random generator; the same seed gives the same layout.
    """

    def __init__(self, margin: int = 6, seed: int | None = 1):
        super().__init__(margin)
        self.seed = seed

    def _lay_out_graph_core(self, graph, vertices, layout_context, cancellation_requested) -> bool:
        randomize_vertex_locations(vertices, layout_context, np.random.default_rng(self.seed))
        return True
