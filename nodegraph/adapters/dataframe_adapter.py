from __future__ import annotations

import dataclasses
import warnings
from collections.abc import Mapping
from typing import Any

import polars as pl

from ..core.graph import Graph
from ..core.metadata import RESERVED_PREFIX
from ..core.structure import GraphDirectedness

_VERTEX_COLUMNS = ("vertex_id", "name", "x", "y")
_EDGE_COLUMNS = ("edge_id", "vertex1_id", "vertex2_id", "directed", "name")


def _attrs(holder, public_only: bool) -> dict:
    if public_only:
        return dict(holder.metadata.public_items())
    return {k: holder.metadata.try_get_value(k) for k in holder.metadata.keys()}


def to_dataframes(graph: Graph, *, public_only: bool = True) -> dict[str, pl.DataFrame]:
    """
    Export a graph to Polars DataFrames.

    Returns a dictionary with two tables:
    - 'vertices': vertex_id, name, x, y, then one column per metadata key
    - 'edges': edge_id, vertex1_id, vertex2_id, directed, name, then metadata

    Args:
        graph: Graph to export
        public_only: If True, leave out metadata under reserved keys

    Returns:
        Dictionary mapping table names to Polars DataFrames
    """
    vertex_rows = []
    for vertex in graph.vertices:
        x, y = vertex.location
        row = {"vertex_id": vertex.id, "name": vertex.name, "x": x, "y": y}
        row.update({k: v for k, v in _attrs(vertex, public_only).items() if k not in _VERTEX_COLUMNS})
        vertex_rows.append(row)

    edge_rows = []
    for edge in graph.edges:
        row = {
            "edge_id": edge.id,
            "vertex1_id": edge.vertex1.id,
            "vertex2_id": edge.vertex2.id,
            "directed": edge.is_directed,
            "name": edge.name,
        }
        row.update({k: v for k, v in _attrs(edge, public_only).items() if k not in _EDGE_COLUMNS})
        edge_rows.append(row)

    return {
        "vertices": pl.DataFrame(vertex_rows, infer_schema_length=None) if vertex_rows else pl.DataFrame(
            schema={"vertex_id": pl.Int64, "name": pl.Utf8, "x": pl.Float64, "y": pl.Float64}
        ),
        "edges": pl.DataFrame(edge_rows, infer_schema_length=None) if edge_rows else pl.DataFrame(
            schema={
                "edge_id": pl.Int64,
                "vertex1_id": pl.Int64,
                "vertex2_id": pl.Int64,
                "directed": pl.Boolean,
                "name": pl.Utf8,
            }
        ),
    }


def _set_attrs(holder, row: dict, structural):
    for key, value in row.items():
        if key in structural or value is None:
            continue
        if key.startswith(RESERVED_PREFIX):
            warnings.warn(f"Column {key!r} uses the reserved prefix {RESERVED_PREFIX!r} and was skipped.")
            continue
        holder.set_value(key, value)


def from_dataframes(
    vertices: pl.DataFrame | None = None,
    edges: pl.DataFrame | None = None,
    *,
    directedness: GraphDirectedness | None = None,
) -> Graph:
    """
    Build a graph from Polars DataFrames shaped like :func:`to_dataframes` output.

    Args:
        vertices: Table with a 'vertex_id' column; 'name', 'x', 'y' optional,
            other columns become metadata. Integer IDs are kept.
        edges: Table with 'vertex1_id' and 'vertex2_id'; 'directed' and 'name'
            optional, other columns become metadata. Endpoints missing from
            ``vertices`` are created.
        directedness: Defaults to what the 'directed' column implies
            (DIRECTED when it is absent).

    Returns:
        Graph
    """
    if edges is not None and not {"vertex1_id", "vertex2_id"} <= set(edges.columns):
        raise ValueError("The edges table needs 'vertex1_id' and 'vertex2_id' columns.")
    if vertices is not None and "vertex_id" not in vertices.columns:
        raise ValueError("The vertices table needs a 'vertex_id' column.")

    if directedness is None:
        flags = set(edges["directed"].drop_nulls().to_list()) if edges is not None and "directed" in edges.columns else set()
        if flags == {False}:
            directedness = GraphDirectedness.UNDIRECTED
        elif flags == {True, False}:
            directedness = GraphDirectedness.MIXED
        else:
            directedness = GraphDirectedness.DIRECTED
    graph = Graph(directedness)

    vertex_map: dict[Any, Any] = {}

    def add_vertex(key, row=None):
        row = row or {}
        name = row.get("name")
        if name is None and not isinstance(key, int):
            name = str(key)
        vertex = graph.vertex_factory.create_vertex(name)
        explicit = key if isinstance(key, int) and not isinstance(key, bool) and key >= graph._next_vertex_id else None
        graph.vertices.add_vertex(vertex, explicit)
        if row.get("x") is not None and row.get("y") is not None:
            vertex.location = (row["x"], row["y"])
        _set_attrs(vertex, row, _VERTEX_COLUMNS)
        vertex_map[key] = vertex
        return vertex

    if vertices is not None:
        rows = vertices.to_dicts()
        if vertices.schema["vertex_id"].is_integer():
            rows.sort(key=lambda r: r["vertex_id"])
        for row in rows:
            add_vertex(row["vertex_id"], row)

    if edges is not None:
        for row in edges.to_dicts():
            v1 = vertex_map.get(row["vertex1_id"]) or add_vertex(row["vertex1_id"])
            v2 = vertex_map.get(row["vertex2_id"]) or add_vertex(row["vertex2_id"])
            directed = row.get("directed")
            if directed is None:
                directed = directedness is GraphDirectedness.DIRECTED
            edge = graph.edges.add(v1, v2, directed, name=row.get("name"))
            _set_attrs(edge, row, _EDGE_COLUMNS)
    return graph


def metrics_to_dataframe(metrics: Mapping[int, Any], value_name: str = "value") -> pl.DataFrame:
    """
    Tabulate per-vertex results keyed by vertex ID.

    Dataclass results (VertexCentralities, VertexDegrees) give one column per
    field; plain values give a single ``value_name`` column.
    """
    rows = []
    for vertex_id in sorted(metrics):
        value = metrics[vertex_id]
        row = {"vertex_id": vertex_id}
        if dataclasses.is_dataclass(value):
            row.update(dataclasses.asdict(value))
        else:
            row[value_name] = value
        rows.append(row)
    if not rows:
        return pl.DataFrame(schema={"vertex_id": pl.Int64})
    return pl.DataFrame(rows)
