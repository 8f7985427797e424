from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .base import VERTICES_PER_PROGRESS_REPORT, CalculationContext, GraphMetricCalculatorBase


@dataclass(frozen=True)
class VertexDegrees:
    """In-degree, out-degree and degree of one vertex.

    An undirected edge counts towards both the in- and the out-degree; ``degree``
    is the number of incident edges, a self-loop counting once.
    """

    in_degree: int
    out_degree: int
    degree: int


class VertexDegreeCalculator(GraphMetricCalculatorBase):
    """Calculates the degrees of every vertex."""

    metric_name = "vertex_degrees"
    description = "Calculating vertex degrees."

    def _calculate_core(self, graph, context: CalculationContext):
        degrees = {}
        total = len(graph.vertices)
        for i, vertex in enumerate(graph.vertices):
            if i % VERTICES_PER_PROGRESS_REPORT == 0:
                if context.is_cancellation_pending():
                    return False, None
                context.report_progress(i, total, self.description)
            incident = vertex.incident_edges
            degrees[vertex.id] = VertexDegrees(
                in_degree=sum(1 for e in incident if vertex.is_incoming_edge(e)),
                out_degree=sum(1 for e in incident if vertex.is_outgoing_edge(e)),
                degree=len(incident),
            )
        return True, MappingProxyType(degrees)
