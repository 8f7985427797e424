from __future__ import annotations

from types import MappingProxyType

from ..core.structure import GraphDirectedness
from .base import VERTICES_PER_PROGRESS_REPORT, CalculationContext, GraphMetricCalculatorBase


class ClusteringCoefficientCalculator(GraphMetricCalculatorBase):
    """
    Calculates the clustering coefficient of every vertex.

    The coefficient is the number of edges among a vertex's neighbours divided by
    the number that could exist: k(k-1) for a DIRECTED graph and k(k-1)/2
    otherwise, matching how duplicate edges are merged. Vertices with fewer than
    two neighbours get 0.0. Self-loops are ignored; duplicate edges must be
    merged first.
    """

    metric_name = "clustering_coefficients"
    description = "Calculating clustering coefficients."
    requires_merged_duplicate_edges = True

    def _calculate_core(self, graph, context: CalculationContext):
        directed = graph.directedness is GraphDirectedness.DIRECTED
        coefficients = {}
        total = len(graph.vertices)
        for i, vertex in enumerate(graph.vertices):
            if i % VERTICES_PER_PROGRESS_REPORT == 0:
                if context.is_cancellation_pending():
                    return False, None
                context.report_progress(i, total, self.description)
            coefficients[vertex.id] = self._coefficient(vertex, directed)
        return True, MappingProxyType(coefficients)

    @staticmethod
    def _coefficient(vertex, directed: bool) -> float:
        neighbours = {v.id for v in vertex.adjacent_vertices if v is not vertex}
        k = len(neighbours)
        if k < 2:
            return 0.0
        # each edge among the neighbours is seen from both of its ends
        seen_twice = 0
        for neighbour in vertex.adjacent_vertices:
            if neighbour is vertex:
                continue
            for edge in neighbour.incident_edges:
                if edge.is_self_loop:
                    continue
                if edge.get_adjacent_vertex(neighbour).id in neighbours:
                    seen_twice += 1
        edges = seen_twice / 2
        possible = k * (k - 1) if directed else k * (k - 1) / 2
        return edges / possible
