from .errors import (
    CalculationFailure,
    MetadataContractViolation,
    MissingSortKeyError,
    NodeGraphError,
    StructuralViolation,
)
from .geometry import Rectangle, SinglePolarCoordinates
from .graph import (
    Edge,
    EdgeCollection,
    EdgeFactory,
    Graph,
    GraphFactory,
    Vertex,
    VertexCollection,
    VertexFactory,
)
from .metadata import MetadataKey, MetadataStore, ReservedMetadataKeys
from .sorters import ByMetadataVertexSorter, VertexSorter, VertexSorterBase
from .structure import GraphDirectedness, GraphRestrictions

__all__ = [
    "ByMetadataVertexSorter",
    "CalculationFailure",
    "Edge",
    "EdgeCollection",
    "EdgeFactory",
    "Graph",
    "GraphDirectedness",
    "GraphFactory",
    "GraphRestrictions",
    "MetadataContractViolation",
    "MetadataKey",
    "MetadataStore",
    "MissingSortKeyError",
    "NodeGraphError",
    "Rectangle",
    "ReservedMetadataKeys",
    "SinglePolarCoordinates",
    "StructuralViolation",
    "Vertex",
    "VertexCollection",
    "VertexFactory",
    "VertexSorter",
    "VertexSorterBase",
]
