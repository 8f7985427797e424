"""
Layouts placing vertices from explicit polar coordinates.

Each vertex may carry a :class:`SinglePolarCoordinates` under
``ReservedMetadataKeys.POLAR_LAYOUT_COORDINATES``. The pole is the centre of the
graph rectangle; vertices without coordinates are placed on it. Angles are in
degrees, 0 pointing along +X and 90 along +Y, and wrap modulo 360.
"""
from __future__ import annotations

import math

from ..core.geometry import SinglePolarCoordinates
from ..core.metadata import ReservedMetadataKeys
from .base import LayoutBase, LayoutContext
from .util import get_rectangle_center_and_half_size, vertex_is_locked


def set_polar_coordinates(vertex, r: float, angle: float):
    """Store the polar coordinates read by the polar layouts."""
    vertex.set_value(ReservedMetadataKeys.POLAR_LAYOUT_COORDINATES, SinglePolarCoordinates(float(r), float(angle)))


def polar_to_cartesian(center_x: float, center_y: float, r: float, angle: float) -> tuple[float, float]:
    radians = math.radians(angle % 360.0)
    return center_x + r * math.cos(radians), center_y + r * math.sin(radians)


class PolarLayoutBase(LayoutBase):
    """Shared placement loop; subclasses turn a stored R into drawing units."""

    def _lay_out_graph_core(self, graph, vertices, layout_context: LayoutContext, cancellation_requested) -> bool:
        center_x, center_y, half_size = get_rectangle_center_and_half_size(layout_context.graph_rectangle)
        for vertex in vertices:
            if vertex_is_locked(vertex):
                continue
            coordinates = vertex.try_get_value(ReservedMetadataKeys.POLAR_LAYOUT_COORDINATES)
            if coordinates is None:
                vertex.location = (center_x, center_y)
                continue
            r = self._radius_in_drawing_units(coordinates.r, half_size)
            vertex.location = polar_to_cartesian(center_x, center_y, r, coordinates.angle)
        return True

    def _radius_in_drawing_units(self, r: float, half_size: float) -> float:
        raise NotImplementedError


class PolarLayout(PolarLayoutBase):
    """
    Polar layout with normalized R.

    R is clamped to [0, 1]; 1 is half the smaller side of the graph rectangle.
    """

    def _radius_in_drawing_units(self, r, half_size):
        return min(max(r, 0.0), 1.0) * half_size


class PolarAbsoluteLayout(PolarLayoutBase):
    """
    Polar layout with R in drawing units.

    R is not bounded, so vertices may fall outside the graph rectangle.
    """

    def _radius_in_drawing_units(self, r, half_size):
        return r
