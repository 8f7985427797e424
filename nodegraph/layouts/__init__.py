from ..core.geometry import Rectangle, SinglePolarCoordinates
from .base import LayoutBase, LayoutContext
from .fruchterman_reingold import FruchtermanReingoldLayout
from .polar import PolarAbsoluteLayout, PolarLayout, PolarLayoutBase, set_polar_coordinates
from .random import RandomLayout
from .util import (
    get_graph_bounding_rectangle,
    get_rectangle_center_and_half_size,
    get_rectangle_transformation,
    transform_points,
    transform_vertex_locations,
    vertex_is_locked,
)

__all__ = [
    "FruchtermanReingoldLayout",
    "LayoutBase",
    "LayoutContext",
    "PolarAbsoluteLayout",
    "PolarLayout",
    "PolarLayoutBase",
    "RandomLayout",
    "Rectangle",
    "SinglePolarCoordinates",
    "get_graph_bounding_rectangle",
    "get_rectangle_center_and_half_size",
    "get_rectangle_transformation",
    "set_polar_coordinates",
    "transform_points",
    "transform_vertex_locations",
    "vertex_is_locked",
]
