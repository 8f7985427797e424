"""
Graph transformers: directedness conversion and filtering.

Every transformer returns a new graph and leaves its input untouched. Vertex IDs,
names, locations and metadata are carried over, so metric results computed on a
transformed graph still map back to the original vertices.
"""
from __future__ import annotations

from collections.abc import Callable

from ..core.graph import Graph
from ..core.metadata import ReservedMetadataKeys
from ..core.structure import GraphDirectedness, GraphRestrictions


def _copy_vertices(source: Graph, target: Graph, keep: Callable | None = None) -> dict:
    vertex_map = {}
    for vertex in source.vertices:
        if keep is not None and not keep(vertex):
            continue
        new_vertex = target.vertex_factory.create_vertex(vertex.name)
        new_vertex.location = vertex.location
        vertex.metadata.copy_to(new_vertex.metadata)
        new_vertex.tag = vertex.tag
        vertex_map[vertex.id] = target.vertices.add_vertex(new_vertex, vertex.id)
    return vertex_map


def _copy_edge(target: Graph, edge, vertex1, vertex2, is_directed: bool, edge_id=None):
    new_edge = target.edge_factory.create_edge(vertex1, vertex2, is_directed, edge.name)
    edge.metadata.copy_to(new_edge.metadata)
    new_edge.tag = edge.tag
    return target.edges.add_edge(new_edge, edge_id)


def _empty_like(graph: Graph, directedness, restrictions) -> Graph:
    target = Graph(
        directedness,
        restrictions,
        name=graph.name,
        vertex_factory=graph.vertex_factory,
        edge_factory=graph.edge_factory,
    )
    graph.metadata.copy_to(target.metadata)
    target.tag = graph.tag
    return target


def to_undirected(graph: Graph, merge_reciprocal: bool = True) -> Graph:
    """
    Undirected copy of ``graph``.

    Parameters
    ----------
    graph : Graph
    merge_reciprocal : bool, optional
        When True, every group of edges joining the same pair of vertices
        (reciprocal directed edges, duplicates) becomes one edge: the first edge of
        the group, keeping its ID and metadata, with the group size stored under
        ``ReservedMetadataKeys.EDGE_WEIGHT``. When False every edge is kept.

    Returns
    -------
    Graph
        An UNDIRECTED graph. Without merging, the NO_PARALLEL_EDGES restriction is
        dropped because reciprocal edges become parallel.
    """
    restrictions = graph.restrictions
    if not merge_reciprocal:
        restrictions &= ~GraphRestrictions.NO_PARALLEL_EDGES
    target = _empty_like(graph, GraphDirectedness.UNDIRECTED, restrictions)
    vertex_map = _copy_vertices(graph, target)

    if not merge_reciprocal:
        for edge in graph.edges:
            _copy_edge(target, edge, vertex_map[edge.vertex1.id], vertex_map[edge.vertex2.id], False, edge.id)
        return target

    groups: dict[tuple[int, int], list] = {}
    for edge in graph.edges:
        a, b = edge.vertex1.id, edge.vertex2.id
        groups.setdefault((min(a, b), max(a, b)), []).append(edge)
    for first, *rest in groups.values():
        new_edge = _copy_edge(
            target, first, vertex_map[first.vertex1.id], vertex_map[first.vertex2.id], False, first.id
        )
        new_edge.set_value(ReservedMetadataKeys.EDGE_WEIGHT, float(1 + len(rest)))
    return target


def to_directed(graph: Graph) -> Graph:
    """
    Directed copy of ``graph``.

    Directed edges are copied as they are. An undirected edge between two
    vertices becomes two opposite directed edges, both carrying its metadata; an
    undirected self-loop becomes one directed self-loop. Edge IDs are allocated
    anew in insertion order.
    """
    target = _empty_like(graph, GraphDirectedness.DIRECTED, graph.restrictions)
    vertex_map = _copy_vertices(graph, target)
    for edge in graph.edges:
        v1, v2 = vertex_map[edge.vertex1.id], vertex_map[edge.vertex2.id]
        candidates = [(v1, v2)]
        if not edge.is_directed and not edge.is_self_loop:
            candidates.append((v2, v1))
        for back, front in candidates:
            _copy_edge(target, edge, back, front, True)
    return target


class GraphFilter:
    """
    Copies the part of a graph selected by predicates.

    Parameters
    ----------
    vertex_predicate : callable, optional
        ``vertex_predicate(vertex) -> bool``; vertices it rejects are dropped.
    edge_predicate : callable, optional
        ``edge_predicate(edge) -> bool``; edges it rejects are dropped. Edges that
        lose an endpoint are always dropped.

    Examples
    --------
    >>> heavy = GraphFilter(edge_predicate=lambda e: (e.try_get_value("Weight", float) or 0) > 1)
    >>> subgraph = heavy.transform(graph)
    """

    def __init__(self, vertex_predicate: Callable | None = None, edge_predicate: Callable | None = None):
        self.vertex_predicate = vertex_predicate
        self.edge_predicate = edge_predicate

    def transform(self, graph: Graph) -> Graph:
        """Return the filtered copy; vertex and edge IDs are kept."""
        target = _empty_like(graph, graph.directedness, graph.restrictions)
        vertex_map = _copy_vertices(graph, target, self.vertex_predicate)
        for edge in graph.edges:
            v1 = vertex_map.get(edge.vertex1.id)
            v2 = vertex_map.get(edge.vertex2.id)
            if v1 is None or v2 is None:
                continue
            if self.edge_predicate is not None and not self.edge_predicate(edge):
                continue
            _copy_edge(target, edge, v1, v2, edge.is_directed, edge.id)
        return target
