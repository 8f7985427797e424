"""Conversion between nodegraph graphs and networkx multigraphs."""
from __future__ import annotations

import warnings
from enum import Enum
from typing import Any

import networkx as nx

from ..core.graph import Graph
from ..core.metadata import RESERVED_PREFIX
from ..core.structure import GraphDirectedness

# Attribute names used for structure rather than metadata
_VERTEX_RESERVED = {"name", "x", "y"}
_EDGE_RESERVED = {"name", "directed"}
_GRAPH_RESERVED = {"directedness"}


def _serialize_value(v: Any) -> Any:
    if isinstance(v, Enum):
        return v.value
    return v


def _export_attrs(holder, reserved: set, public_only: bool) -> dict:
    items = holder.metadata.public_items() if public_only else [
        (k, holder.metadata.try_get_value(k)) for k in holder.metadata.keys()
    ]
    out = {}
    for key, value in items:
        if key in reserved:
            warnings.warn(f"Metadata key {key!r} clashes with a structural attribute and is not exported.")
            continue
        out[key] = _serialize_value(value)
    return out


def _import_attrs(holder, attrs: dict, reserved: set):
    for key, value in attrs.items():
        if key in reserved or value is None:
            continue
        if str(key).startswith(RESERVED_PREFIX):
            warnings.warn(f"Attribute {key!r} uses the reserved prefix {RESERVED_PREFIX!r} and was skipped.")
            continue
        holder.set_value(str(key), value)


def to_nx(graph: Graph, *, public_only: bool = True):
    """
    Export a graph to networkx.

    Parameters
    ----------
    graph : Graph
    public_only : bool, optional
        If True, metadata under reserved keys is not exported.

    Returns
    -------
    networkx.MultiGraph or networkx.MultiDiGraph
        MultiGraph for UNDIRECTED graphs, MultiDiGraph otherwise. Nodes are vertex
        IDs carrying ``name``, ``x``, ``y`` and the metadata; edge keys are edge IDs.
        In a MultiDiGraph an undirected edge is emitted in both directions under
        the same key, with ``directed=False``.
    """
    directed = graph.directedness is not GraphDirectedness.UNDIRECTED
    G = nx.MultiDiGraph() if directed else nx.MultiGraph()
    G.graph.update(_export_attrs(graph, _GRAPH_RESERVED, public_only))
    G.graph["directedness"] = graph.directedness.value

    for vertex in graph.vertices:
        attrs = _export_attrs(vertex, _VERTEX_RESERVED, public_only)
        if vertex.name is not None:
            attrs["name"] = vertex.name
        attrs["x"], attrs["y"] = vertex.location
        G.add_node(vertex.id, **attrs)

    for edge in graph.edges:
        attrs = _export_attrs(edge, _EDGE_RESERVED, public_only)
        if edge.name is not None:
            attrs["name"] = edge.name
        u, v = edge.vertex1.id, edge.vertex2.id
        if directed and not edge.is_directed:
            attrs["directed"] = False
            G.add_edge(u, v, key=edge.id, **attrs)
            if not edge.is_self_loop:
                G.add_edge(v, u, key=edge.id, **attrs)
        else:
            G.add_edge(u, v, key=edge.id, **attrs)
    return G


def _infer_directedness(nxG) -> GraphDirectedness:
    declared = nxG.graph.get("directedness")
    if declared is not None:
        return GraphDirectedness(declared)
    if not nxG.is_directed():
        return GraphDirectedness.UNDIRECTED
    if any(data.get("directed") is False for _, _, data in nxG.edges(data=True)):
        return GraphDirectedness.MIXED
    return GraphDirectedness.DIRECTED


def from_nx(nxG, *, directedness=None) -> Graph:
    """
    Build a graph from any networkx graph.

    Parameters
    ----------
    nxG : networkx.Graph
        Graph, DiGraph, MultiGraph or MultiDiGraph.
    directedness : GraphDirectedness, optional
        Defaults to the ``directedness`` graph attribute written by :func:`to_nx`,
        else to what the networkx graph and its ``directed`` edge flags imply.

    Returns
    -------
    Graph

    Notes
    -----
    Vertices get fresh IDs in node order. A vertex is named by its ``name``
    attribute, or by the node key. Attributes with reserved names are skipped
    with a warning.
    """
    graph = Graph(directedness if directedness is not None else _infer_directedness(nxG))
    _import_attrs(graph, nxG.graph, _GRAPH_RESERVED)

    vertex_map = {}
    for node, data in nxG.nodes(data=True):
        vertex = graph.vertices.add(name=str(data.get("name", node)))
        if "x" in data and "y" in data:
            vertex.location = (data["x"], data["y"])
        _import_attrs(vertex, data, _VERTEX_RESERVED)
        vertex_map[node] = vertex

    if nxG.is_multigraph():
        edge_rows = ((u, v, k, d) for u, v, k, d in nxG.edges(keys=True, data=True))
    else:
        edge_rows = ((u, v, None, d) for u, v, d in nxG.edges(data=True))

    emitted_both_ways = set()
    for u, v, key, data in edge_rows:
        if nxG.is_directed():
            is_directed = data.get("directed", True) is not False
        else:
            is_directed = False
        if nxG.is_directed() and not is_directed:
            token = (frozenset((u, v)), key)
            if token in emitted_both_ways:
                continue
            emitted_both_ways.add(token)
        edge = graph.edges.add(vertex_map[u], vertex_map[v], is_directed, name=data.get("name"))
        _import_attrs(edge, data, _EDGE_RESERVED)
    return graph
