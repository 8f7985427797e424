"""Duplicate edge detection and merging.

Edges are grouped by the IDs of their vertices: the ordered pair in a
DIRECTED graph, the unordered pair otherwise.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from ..core.metadata import ReservedMetadataKeys
from ..core.structure import GraphDirectedness


@dataclass(frozen=True)
class DuplicateEdgeSummary:
    unique_edges: int
    edges_with_duplicates: int
    total_edges_after_merging_duplicates_no_self_loops: int


def edge_pair_key(edge, graph_is_directed: bool) -> tuple[int, int]:
    a, b = edge.vertex1.id, edge.vertex2.id
    if graph_is_directed or a <= b:
        return (a, b)
    return (b, a)


class DuplicateEdgeDetector:
    """
    Counts duplicate edges in a graph.

    The graph is read once, on first use; build a new detector after modifying it.
    """

    def __init__(self, graph):
        self.graph = graph
        self._counts: Counter | None = None

    def _edge_counts(self) -> Counter:
        if self._counts is None:
            directed = self.graph.directedness is GraphDirectedness.DIRECTED
            self._counts = Counter(edge_pair_key(e, directed) for e in self.graph.edges)
        return self._counts

    @property
    def graph_contains_duplicate_edges(self) -> bool:
        return any(count > 1 for count in self._edge_counts().values())

    def count_edges(self) -> DuplicateEdgeSummary:
        counts = self._edge_counts()
        unique = sum(1 for count in counts.values() if count == 1)
        with_duplicates = sum(count for count in counts.values() if count > 1)
        merged_no_self_loops = sum(1 for (a, b) in counts if a != b)
        return DuplicateEdgeSummary(unique, with_duplicates, merged_no_self_loops)


def merge_duplicate_edges(graph):
    """
    Copy ``graph`` keeping only the first edge of each duplicate group.

    Vertex and edge IDs are kept. Each surviving edge carries the size of its
    group under ``ReservedMetadataKeys.EDGE_WEIGHT``.
    """
    copy = graph.clone()
    directed = graph.directedness is GraphDirectedness.DIRECTED
    kept = {}
    weights = Counter()
    for edge in copy.edges:
        key = edge_pair_key(edge, directed)
        first = kept.setdefault(key, edge)
        weights[first.id] += 1
        if first is not edge:
            copy.edges.remove(edge)
    for edge in kept.values():
        edge.set_value(ReservedMetadataKeys.EDGE_WEIGHT, float(weights[edge.id]))
    return copy
