"""
Tab-separated centrality tables.

Format: the header ``Vertex ID\tCloseness Centrality\tBetweenness Centrality``
followed by one row per vertex. This is the table external graph engines
produce; anything else is rejected with :class:`CalculationFailure`.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

import polars as pl

from ..algorithms.brandes import VertexCentralities
from ..core.errors import CalculationFailure

VERTEX_ID = "Vertex ID"
CLOSENESS = "Closeness Centrality"
BETWEENNESS = "Betweenness Centrality"
HEADER = (VERTEX_ID, CLOSENESS, BETWEENNESS)


def write_centrality_table(centralities: Mapping[int, VertexCentralities], path):
    """Write ``centralities`` (keyed by vertex ID) to ``path``, rows sorted by vertex ID."""
    ids = sorted(centralities)
    pl.DataFrame(
        {
            VERTEX_ID: pl.Series(ids, dtype=pl.Int64),
            CLOSENESS: pl.Series([centralities[i].closeness for i in ids], dtype=pl.Float64),
            BETWEENNESS: pl.Series([centralities[i].betweenness for i in ids], dtype=pl.Float64),
        }
    ).write_csv(path, separator="\t")


def read_centrality_table(source, expected_vertex_ids: Iterable[int] | None = None) -> dict[int, VertexCentralities]:
    """
    Parse a centrality table.

    Parameters
    ----------
    source : str, path or file-like
    expected_vertex_ids : iterable of int, optional
        If given, the table must hold exactly these vertex IDs.

    Returns
    -------
    dict
        Vertex ID -> :class:`VertexCentralities`.

    Raises
    ------
    CalculationFailure
        If the header differs, a value does not parse, a value is negative, a
        vertex ID repeats, or the IDs differ from ``expected_vertex_ids``.
    """
    try:
        raw = pl.read_csv(source, separator="\t", infer_schema_length=0)
    except (pl.exceptions.NoDataError, pl.exceptions.ComputeError) as e:
        raise CalculationFailure(f"The centrality table could not be read: {e}") from e

    if tuple(raw.columns) != HEADER:
        raise CalculationFailure(
            f"The centrality table header is {list(raw.columns)}, expected {list(HEADER)}."
        )
    try:
        table = raw.select(
            pl.col(VERTEX_ID).cast(pl.Int64, strict=True),
            pl.col(CLOSENESS).cast(pl.Float64, strict=True),
            pl.col(BETWEENNESS).cast(pl.Float64, strict=True),
        )
    except (pl.exceptions.InvalidOperationError, pl.exceptions.ComputeError) as e:
        raise CalculationFailure(f"The centrality table holds a value that is not a number: {e}") from e

    if table.null_count().sum_horizontal().item() > 0:
        raise CalculationFailure("The centrality table has empty cells.")
    if table.filter((pl.col(CLOSENESS) < 0) | (pl.col(BETWEENNESS) < 0)).height:
        raise CalculationFailure("The centrality table holds a negative centrality.")
    if table[VERTEX_ID].n_unique() != table.height:
        raise CalculationFailure("The centrality table lists a vertex more than once.")

    centralities = {
        vertex_id: VertexCentralities(betweenness=betweenness, closeness=closeness)
        for vertex_id, closeness, betweenness in table.iter_rows()
    }
    if expected_vertex_ids is not None and set(expected_vertex_ids) != set(centralities):
        raise CalculationFailure("The centrality table does not cover the graph's vertices.")
    return centralities
