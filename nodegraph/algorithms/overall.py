"""Graph-wide metrics."""
from __future__ import annotations

from dataclasses import dataclass

from ..core.structure import GraphDirectedness
from .brandes import BrandesCentralityCalculator
from .components import weakly_connected_components
from .duplicates import DuplicateEdgeDetector
from .base import CalculationContext, GraphMetricCalculatorBase


@dataclass(frozen=True)
class OverallMetrics:
    """
    Graph-wide metrics.

    ``graph_density`` is None for graphs with fewer than two vertices, and the
    geodesic distances are None when no vertex reaches another.
    """

    directedness: GraphDirectedness
    vertices: int
    unique_edges: int
    edges_with_duplicates: int
    total_edges: int
    self_loops: int
    graph_density: float | None
    connected_components: int
    single_vertex_connected_components: int
    maximum_connected_component_vertices: int
    maximum_connected_component_edges: int
    maximum_geodesic_distance: int | None
    average_geodesic_distance: float | None


def calculate_graph_density(graph, edges_after_merging_no_self_loops: int) -> float | None:
    vertices = len(graph.vertices)
    if vertices < 2:
        return None
    density = 2.0 * edges_after_merging_no_self_loops / (vertices * (vertices - 1))
    if graph.directedness is GraphDirectedness.DIRECTED:
        density /= 2.0
    return density


class OverallMetricCalculator(GraphMetricCalculatorBase):
    """Calculates :class:`OverallMetrics`."""

    metric_name = "overall_metrics"
    description = "Calculating overall metrics."

    def _calculate_core(self, graph, context: CalculationContext):
        steps = 3
        context.report_progress(0, steps, self.description)
        summary = DuplicateEdgeDetector(graph).count_edges()
        self_loops = sum(1 for e in graph.edges if e.is_self_loop)

        if context.is_cancellation_pending():
            return False, None
        context.report_progress(1, steps, self.description)
        components = weakly_connected_components(graph)
        largest = set(components[0]) if components else set()
        largest_edges = sum(1 for e in graph.edges if e.vertex1.id in largest)

        completed, geodesics = BrandesCentralityCalculator().try_calculate_graph_metrics(
            graph, context.sub_context(2, steps)
        )
        if not completed:
            return False, None

        return True, OverallMetrics(
            directedness=graph.directedness,
            vertices=len(graph.vertices),
            unique_edges=summary.unique_edges,
            edges_with_duplicates=summary.edges_with_duplicates,
            total_edges=len(graph.edges),
            self_loops=self_loops,
            graph_density=calculate_graph_density(
                graph, summary.total_edges_after_merging_duplicates_no_self_loops
            ),
            connected_components=len(components),
            single_vertex_connected_components=sum(1 for c in components if len(c) == 1),
            maximum_connected_component_vertices=len(largest),
            maximum_connected_component_edges=largest_edges,
            maximum_geodesic_distance=geodesics.maximum_geodesic_distance,
            average_geodesic_distance=geodesics.average_geodesic_distance,
        )
