"""Coordinate utilities shared by the layouts."""
from __future__ import annotations

import numpy as np

from ..core.geometry import Rectangle
from ..core.metadata import ReservedMetadataKeys


def vertex_is_locked(vertex) -> bool:
    """Whether layouts must leave ``vertex`` where it is."""
    return bool(vertex.try_get_value(ReservedMetadataKeys.LOCK_VERTEX_LOCATION))


def get_rectangle_center_and_half_size(rectangle: Rectangle) -> tuple[float, float, float]:
    """
    Centre of ``rectangle`` and half of its smaller side.

    Returns
    -------
    tuple
        ``(center_x, center_y, half_size)``.
    """
    center_x = rectangle.left + rectangle.width / 2.0
    center_y = rectangle.top + rectangle.height / 2.0
    half_size = min(rectangle.width, rectangle.height) / 2.0
    return center_x, center_y, half_size


def _inflate_degenerate(rectangle: Rectangle) -> Rectangle:
    return rectangle.inflate(1.0 if rectangle.width == 0 else 0.0, 1.0 if rectangle.height == 0 else 0.0)


def get_rectangle_transformation(rectangle1: Rectangle, rectangle2: Rectangle) -> np.ndarray:
    """
    Affine transformation mapping ``rectangle1`` onto ``rectangle2``.

    Parameters
    ----------
    rectangle1, rectangle2 : Rectangle
        Source and destination. A rectangle of zero width or height is first
        inflated by 1 unit in that direction.

    Returns
    -------
    numpy.ndarray
        3x3 matrix acting on homogeneous column vectors ``(x, y, 1)``.
    """
    rectangle1 = _inflate_degenerate(rectangle1)
    rectangle2 = _inflate_degenerate(rectangle2)
    scale_x = rectangle2.width / rectangle1.width
    scale_y = rectangle2.height / rectangle1.height
    return np.array(
        [
            [scale_x, 0.0, rectangle2.left - scale_x * rectangle1.left],
            [0.0, scale_y, rectangle2.top - scale_y * rectangle1.top],
            [0.0, 0.0, 1.0],
        ]
    )


def transform_points(points, matrix: np.ndarray) -> np.ndarray:
    """Apply ``matrix`` to an (n, 2) array of points and return the new (n, 2) array."""
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    homogeneous = np.hstack([points, np.ones((points.shape[0], 1))])
    return (homogeneous @ matrix.T)[:, :2]


def transform_vertex_locations(graph, matrix: np.ndarray):
    """Apply ``matrix`` to every vertex location and every stored edge curve."""
    vertices = list(graph.vertices)
    if vertices:
        moved = transform_points([v.location for v in vertices], matrix)
        for vertex, (x, y) in zip(vertices, moved):
            vertex.location = (x, y)
    key = ReservedMetadataKeys.EDGE_CURVE_POINTS
    for edge in graph.edges:
        curve = edge.try_get_value(key)
        if curve:
            edge.set_value(key, tuple((float(x), float(y)) for x, y in transform_points(curve, matrix)))


def get_graph_bounding_rectangle(graph) -> Rectangle | None:
    """Smallest rectangle containing every vertex location; None for a graph without vertices."""
    if not len(graph.vertices):
        return None
    locations = np.array([v.location for v in graph.vertices], dtype=float)
    (left, top), (right, bottom) = locations.min(axis=0), locations.max(axis=0)
    return Rectangle.from_ltrb(left, top, right, bottom)
