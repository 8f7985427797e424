"""
Betweenness and closeness centrality (Brandes, 2001).

One breadth-first search per source vertex counts shortest paths; walking the
search order backwards accumulates pair dependencies into betweenness. The same
searches give the distances used for closeness and for the graph-wide geodesic
statistics.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from ._index import IndexedGraph
from .base import VERTICES_PER_PROGRESS_REPORT, CalculationContext, GraphMetricCalculatorBase


@dataclass(frozen=True)
class VertexCentralities:
    """Centralities of one vertex."""

    betweenness: float = 0.0
    closeness: float = 0.0


@dataclass(frozen=True)
class BrandesCentralityResult:
    """
    Result of :class:`BrandesCentralityCalculator`.

    Attributes
    ----------
    centralities : Mapping[int, VertexCentralities]
        Read-only map covering every vertex ID of the graph.
    maximum_geodesic_distance : int or None
        Longest shortest path; None when no vertex reaches another.
    average_geodesic_distance : float or None
        Mean over every (source, reachable target) pair; None likewise.
    """

    centralities: Mapping[int, VertexCentralities]
    maximum_geodesic_distance: int | None
    average_geodesic_distance: float | None

    def __getitem__(self, vertex_id: int) -> VertexCentralities:
        return self.centralities[vertex_id]

    def __len__(self):
        return len(self.centralities)


def _single_source(successors, source, betweenness):
    """Accumulate the dependencies of ``source`` into ``betweenness``.

    Returns the distances from ``source`` to every other vertex it reaches.
    """
    n = len(successors)
    distance = np.full(n, -1, dtype=np.int64)
    sigma = np.zeros(n, dtype=np.float64)
    delta = np.zeros(n, dtype=np.float64)
    predecessors = [[] for _ in range(n)]

    distance[source] = 0
    sigma[source] = 1.0
    order = []
    queue = deque([source])
    while queue:
        v = queue.popleft()
        order.append(v)
        next_distance = distance[v] + 1
        for w in successors[v]:
            if distance[w] < 0:
                distance[w] = next_distance
                queue.append(w)
            if distance[w] == next_distance:
                sigma[w] += sigma[v]
                predecessors[w].append(v)

    for w in reversed(order):
        coefficient = (1.0 + delta[w]) / sigma[w]
        for v in predecessors[w]:
            delta[v] += sigma[v] * coefficient
        if w != source:
            betweenness[w] += delta[w]

    return distance[np.asarray(order[1:], dtype=np.intp)]


class BrandesCentralityCalculator(GraphMetricCalculatorBase):
    """
    Calculates betweenness and closeness centrality of every vertex.

    Notes
    -----
    - Edges are unweighted. Directed edges are followed from back to front
      vertex, undirected edges both ways. Self-loops and duplicate edges add no
      shortest paths.
    - Betweenness is the unnormalized sum of pair dependencies. Without any
      directed edge each unordered pair is counted once.
    - Closeness is the reciprocal of the mean distance to the reachable vertices.
    - A vertex that reaches nothing and lies on no path gets 0.0 for both.
    """

    metric_name = "brandes_centralities"
    description = "Calculating betweenness and closeness centralities."

    def _calculate_core(self, graph, context: CalculationContext):
        indexed = IndexedGraph(graph)
        n = len(indexed)
        betweenness = np.zeros(n, dtype=np.float64)
        closeness = np.zeros(n, dtype=np.float64)
        path_count = 0
        path_total = 0
        longest = None

        for source in range(n):
            if source % VERTICES_PER_PROGRESS_REPORT == 0:
                if context.is_cancellation_pending():
                    return False, None
                context.report_progress(source, n, self.description)
            distances = _single_source(indexed.successors, source, betweenness)
            if distances.size:
                total = int(distances.sum())
                closeness[source] = distances.size / total
                path_count += distances.size
                path_total += total
                farthest = int(distances.max())
                longest = farthest if longest is None else max(longest, farthest)

        if indexed.is_undirected:
            betweenness /= 2.0
        context.report_progress(n, n, self.description)

        centralities = {
            vid: VertexCentralities(float(betweenness[i]), float(closeness[i]))
            for i, vid in enumerate(indexed.vertex_ids)
        }
        return True, BrandesCentralityResult(
            centralities=MappingProxyType(centralities),
            maximum_geodesic_distance=longest,
            average_geodesic_distance=(path_total / path_count) if path_count else None,
        )
