from __future__ import annotations

from collections import defaultdict

from scipy.sparse.csgraph import connected_components

from ._index import IndexedGraph
from .base import CalculationContext, GraphMetricCalculatorBase


def weakly_connected_components(graph) -> list[list[int]]:
    """
    Connected components of ``graph``, ignoring edge direction.

    Returns
    -------
    list of list of int
        Vertex IDs of each component in insertion order. Components are sorted
        by size, largest first; ties keep the order of their first vertex.
    """
    indexed = IndexedGraph(graph)
    if not len(indexed):
        return []
    _, labels = connected_components(indexed.to_csr(), directed=True, connection="weak")
    groups = defaultdict(list)
    for i, label in enumerate(labels):
        groups[int(label)].append(indexed.vertex_ids[i])
    return sorted(groups.values(), key=lambda ids: (-len(ids), ids[0]))


class ConnectedComponentCalculator(GraphMetricCalculatorBase):
    """Calculates the (weakly) connected components of a graph as lists of vertex IDs."""

    metric_name = "connected_components"
    description = "Calculating connected components."

    def _calculate_core(self, graph, context: CalculationContext):
        return True, weakly_connected_components(graph)
