"""Deterministic vertex orderings."""
from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import cmp_to_key

import numpy as np

from .errors import MetadataContractViolation, MissingSortKeyError
from .graph import Vertex
from .metadata import MetadataKey


def compare_by_id(vertex1: Vertex, vertex2: Vertex) -> int:
    return (vertex1.id > vertex2.id) - (vertex1.id < vertex2.id)


class VertexSorterBase:
    """Base class for vertex sorters.

    ``sort`` never modifies its argument; it returns a new list.
    """

    def sort(self, vertices: Iterable[Vertex]) -> list[Vertex]:
        vertices = list(vertices)
        if len(vertices) < 2:
            return vertices
        return self._sort_core(vertices)

    def _sort_core(self, vertices: list[Vertex]) -> list[Vertex]:
        raise NotImplementedError


class VertexSorter(VertexSorterBase):
    """
    Sorts vertices with a caller-supplied comparison.

    Parameters
    ----------
    comparison : callable, optional
        ``comparison(v1, v2)`` returning a negative number, zero or a positive
        number. Must define a total order. Defaults to ascending vertex ID.
    """

    def __init__(self, comparison: Callable[[Vertex, Vertex], int] | None = None):
        self.comparison = comparison or compare_by_id

    def _sort_core(self, vertices):
        return sorted(vertices, key=cmp_to_key(self.comparison))


class ByMetadataVertexSorter(VertexSorterBase):
    """
    Sorts vertices by the value of a metadata key.

    Parameters
    ----------
    sort_key : str or MetadataKey
        Key every vertex must carry.
    value_type : type, optional
        Declared type of the values. Must be orderable. Taken from ``sort_key``
        when it is a typed key. Defaults to ``float``.
    sort_ascending : bool, optional

    Raises
    ------
    TypeError
        If ``value_type`` does not support ordering.
    MissingSortKeyError
        From :meth:`sort`, if a vertex lacks the key or holds a value of another type.

    Notes
    -----
    Values are read once into a parallel array and sorted in a single pass;
    metadata is never consulted from inside a comparison.
    """

    def __init__(self, sort_key, value_type: type | None = None, sort_ascending: bool = True):
        if value_type is None:
            value_type = sort_key.value_type if isinstance(sort_key, MetadataKey) else float
        if value_type is object or getattr(value_type, "__lt__", None) is object.__lt__:
            raise TypeError(f"{value_type!r} does not define an ordering and can't be used as a sort type.")
        self.sort_key = sort_key
        self.value_type = value_type
        self.sort_ascending = sort_ascending

    @property
    def key_name(self) -> str:
        return self.sort_key.name if isinstance(self.sort_key, MetadataKey) else self.sort_key

    def sort(self, vertices: Iterable[Vertex]) -> list[Vertex]:
        vertices = list(vertices)
        # every vertex is checked, even when there is nothing to reorder
        values = self._extract_values(vertices)
        if len(vertices) < 2:
            return vertices
        return self._order(vertices, values)

    def _extract_values(self, vertices: list[Vertex]) -> list:
        values = []
        for vertex in vertices:
            try:
                value = vertex.try_get_value(self.key_name, self.value_type)
            except MetadataContractViolation as exc:
                raise self._missing(vertex) from exc
            if value is None:
                raise self._missing(vertex)
            values.append(value)
        return values

    def _missing(self, vertex) -> MissingSortKeyError:
        return MissingSortKeyError(
            self.key_name,
            f"One of the vertices ({vertex!r}) does not have the sort key "
            f"{self.key_name!r}, or the key's value is not a {self.value_type.__name__}.",
        )

    def _sort_core(self, vertices):
        return self._order(vertices, self._extract_values(vertices))

    def _order(self, vertices, values):
        if self.value_type is float:
            keys = np.asarray(values, dtype=float)
            # negated for descending so ties keep their input order
            order = np.argsort(keys if self.sort_ascending else -keys, kind="stable")
            return [vertices[i] for i in order]
        # exact comparison for ints and other orderable types
        order = sorted(range(len(values)), key=values.__getitem__, reverse=not self.sort_ascending)
        return [vertices[i] for i in order]
