"""
Layout base class.

A layout receives the graph and the rectangle to draw into, and writes
``vertex.location``. Two pieces of graph metadata narrow what it touches:

- ``ReservedMetadataKeys.LAY_OUT_THESE_VERTICES_ONLY``: only these vertices are
  moved or consulted.
- ``ReservedMetadataKeys.LOCK_VERTEX_LOCATION`` on a vertex: the vertex is never
  moved, though it still counts as a neighbour.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from ..core.geometry import Rectangle
from ..core.metadata import ReservedMetadataKeys
from .util import get_rectangle_transformation, transform_vertex_locations


@dataclass(frozen=True)
class LayoutContext:
    """Where a layout draws."""

    graph_rectangle: Rectangle


class LayoutBase(ABC):
    """
    Base class for layouts.

    Parameters
    ----------
    margin : int, optional
        Distance kept between the vertices and the edges of the graph rectangle.
    """

    def __init__(self, margin: int = 6):
        self.margin = margin

    @property
    def margin(self) -> int:
        return self._margin

    @margin.setter
    def margin(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"margin must be a non-negative int, got {value!r}")
        self._margin = value

    def lay_out_graph(
        self,
        graph,
        layout_context: LayoutContext,
        cancellation_requested: Callable[[], bool] | None = None,
    ) -> bool:
        """
        Assign a location to the vertices of ``graph``.

        Parameters
        ----------
        graph : Graph
        layout_context : LayoutContext
        cancellation_requested : callable, optional
            Polled by iterative layouts between iterations.

        Returns
        -------
        bool
            False if the layout was cancelled. Vertices may then have been moved
            part of the way.
        """
        context = self._get_adjusted_layout_context(graph, layout_context)
        if context is None:
            logger.debug(f"{type(self).__name__}: graph rectangle too small, layout skipped")
            return True
        vertices = self.get_vertices_to_lay_out(graph)
        if not vertices:
            return True
        completed = self._lay_out_graph_core(graph, vertices, context, cancellation_requested)
        if completed:
            graph.set_value(ReservedMetadataKeys.LAYOUT_BASE_LAYOUT_COMPLETE, True)
        return completed

    def transform_layout(self, graph, original_context: LayoutContext, new_context: LayoutContext):
        """Rescale a finished layout from one graph rectangle to another without laying it out again."""
        if not len(graph.vertices):
            return
        matrix = get_rectangle_transformation(original_context.graph_rectangle, new_context.graph_rectangle)
        transform_vertex_locations(graph, matrix)

    @staticmethod
    def get_vertices_to_lay_out(graph) -> list:
        """The graph's LAY_OUT_THESE_VERTICES_ONLY vertices if set, else all of them."""
        subset = graph.try_get_value(ReservedMetadataKeys.LAY_OUT_THESE_VERTICES_ONLY)
        if subset is None:
            return list(graph.vertices)
        return [v for v in subset if v in graph.vertices]

    @staticmethod
    def graph_has_been_laid_out(graph) -> bool:
        return bool(graph.try_get_value(ReservedMetadataKeys.LAYOUT_BASE_LAYOUT_COMPLETE))

    def _get_adjusted_layout_context(self, graph, layout_context: LayoutContext) -> LayoutContext | None:
        rectangle = layout_context.graph_rectangle
        subset_only = graph.contains_key(ReservedMetadataKeys.LAY_OUT_THESE_VERTICES_ONLY)
        if subset_only and graph.try_get_value(ReservedMetadataKeys.LAY_OUT_THESE_VERTICES_WITHIN_BOUNDS):
            # keep the subset inside the box it currently occupies
            vertices = self.get_vertices_to_lay_out(graph)
            if vertices:
                xs = [v.location[0] for v in vertices]
                ys = [v.location[1] for v in vertices]
                rectangle = Rectangle.from_ltrb(
                    math.ceil(min(xs)), math.ceil(min(ys)), math.floor(max(xs)), math.floor(max(ys))
                )
        else:
            rectangle = rectangle.inflate(-self.margin, -self.margin)
        if rectangle.width > 0 and rectangle.height > 0:
            return LayoutContext(rectangle)
        return None

    @abstractmethod
    def _lay_out_graph_core(self, graph, vertices: list, layout_context: LayoutContext, cancellation_requested) -> bool:
        """Lay out ``vertices`` inside ``layout_context``; return False if cancelled."""
