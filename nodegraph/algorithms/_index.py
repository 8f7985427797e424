"""Dense, index-addressed view of a graph for the numeric calculators."""
from __future__ import annotations

import numpy as np
import scipy.sparse as sp


class IndexedGraph:
    """
    Vertices renumbered 0..n-1 in insertion order.

    ``successors[i]`` lists the distinct vertices reachable from ``i`` in one
    step: heads of outgoing directed edges, and both ends of undirected edges.
    Self-loops and duplicate edges are dropped.
    """

    __slots__ = ("vertex_ids", "index", "successors", "is_undirected")

    def __init__(self, graph):
        self.vertex_ids: list[int] = graph.vertices.ids
        self.index: dict[int, int] = {vid: i for i, vid in enumerate(self.vertex_ids)}
        neighbours = [set() for _ in self.vertex_ids]
        for edge in graph.edges:
            a = self.index[edge.vertex1.id]
            b = self.index[edge.vertex2.id]
            if a == b:
                continue
            neighbours[a].add(b)
            if not edge.is_directed:
                neighbours[b].add(a)
        self.successors: list[list[int]] = [sorted(s) for s in neighbours]
        self.is_undirected = not graph.has_directed_edges

    def __len__(self):
        return len(self.vertex_ids)

    def to_csr(self) -> sp.csr_matrix:
        """Adjacency matrix (row = tail) in CSR form."""
        n = len(self.vertex_ids)
        counts = np.fromiter((len(s) for s in self.successors), dtype=np.int64, count=n)
        rows = np.repeat(np.arange(n, dtype=np.int64), counts)
        cols = np.fromiter((w for s in self.successors for w in s), dtype=np.int64, count=rows.size)
        data = np.ones(rows.size, dtype=np.int8)
        return sp.csr_matrix((data, (rows, cols)), shape=(n, n))
