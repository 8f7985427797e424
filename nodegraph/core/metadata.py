"""Per-element metadata: a flat key/value bag attached to graphs, vertices and edges.

Keys are plain strings or typed :class:`MetadataKey` tokens. Names starting with
``RESERVED_PREFIX`` belong to nodegraph itself; callers can read them but only
the reserved tokens in :class:`ReservedMetadataKeys` can write them.
"""
from __future__ import annotations

import numbers
from collections.abc import Collection
from typing import Any, Generic, TypeVar

from .errors import MetadataContractViolation
from .geometry import SinglePolarCoordinates

T = TypeVar("T")

RESERVED_PREFIX = "~"


def _type_name(value_type) -> str:
    if isinstance(value_type, tuple):
        return " | ".join(t.__name__ for t in value_type)
    return getattr(value_type, "__name__", str(value_type))


def value_matches_type(value, value_type) -> bool:
    """Type check used by every metadata read.

    ``bool`` never satisfies ``int``/``float``, and any real number satisfies ``float``.
    """
    if value_type is None or value_type is object:
        return True
    if value_type is float:
        return isinstance(value, numbers.Real) and not isinstance(value, bool)
    if value_type is int:
        return isinstance(value, numbers.Integral) and not isinstance(value, bool)
    return isinstance(value, value_type)


class MetadataKey(Generic[T]):
    """Typed metadata key.

    Parameters
    ----------
    name : str
        Key name inside the store.
    value_type : type, optional
        Declared type of the values stored under the key.

    Examples
    --------
    >>> WEIGHT = MetadataKey("Weight", float)
    >>> vertex.set_value(WEIGHT, 2.5)
    >>> vertex.get_required_value(WEIGHT)
    2.5
    """

    __slots__ = ("name", "value_type", "is_reserved")

    def __init__(self, name: str, value_type: type = object):
        if not isinstance(name, str) or not name:
            raise ValueError("A metadata key name must be a non-empty string.")
        if name.startswith(RESERVED_PREFIX):
            raise MetadataContractViolation(
                name, f"Metadata key names starting with {RESERVED_PREFIX!r} are reserved: {name!r}."
            )
        self.name = name
        self.value_type = value_type
        self.is_reserved = False

    @classmethod
    def _reserved(cls, name: str, value_type: type) -> "MetadataKey":
        key = cls.__new__(cls)
        key.name = RESERVED_PREFIX + name
        key.value_type = value_type
        key.is_reserved = True
        return key

    def __repr__(self):
        return f"MetadataKey({self.name!r}, {_type_name(self.value_type)})"

    def __eq__(self, other):
        if isinstance(other, MetadataKey):
            return self.name == other.name and self.value_type == other.value_type
        return NotImplemented

    def __hash__(self):
        return hash((self.name, self.value_type))


class ReservedMetadataKeys:
    """Keys nodegraph stores on graphs, vertices and edges for its own use."""

    # Vertex: when True, layouts never move the vertex.
    LOCK_VERTEX_LOCATION = MetadataKey._reserved("LLock", bool)

    # Vertex: read by the polar layouts.
    POLAR_LAYOUT_COORDINATES = MetadataKey._reserved("PLCoordinates", SinglePolarCoordinates)

    # Graph: lay out only this collection of vertices.
    LAY_OUT_THESE_VERTICES_ONLY = MetadataKey._reserved("LTheseOnly", Collection)

    # Graph: with LAY_OUT_THESE_VERTICES_ONLY, lay the subset out inside the box it currently occupies.
    LAY_OUT_THESE_VERTICES_WITHIN_BOUNDS = MetadataKey._reserved("LTheseOnlyWithin", bool)

    # Graph: set once a layout pass has completed.
    LAYOUT_BASE_LAYOUT_COMPLETE = MetadataKey._reserved("LBLayoutComplete", bool)

    # Edge: number of edges merged into this one.
    EDGE_WEIGHT = MetadataKey._reserved("EW", float)

    # Edge: tuple of (x, y) points for curved edges, rescaled with the layout.
    EDGE_CURVE_POINTS = MetadataKey._reserved("ECurvePoints", tuple)


class MetadataStore:
    """Key/value bag with type-checked reads.

    Setting a value to ``None`` removes the key, so a stored value is never ``None``.
    """

    __slots__ = ("_values",)

    def __init__(self):
        self._values: dict[str, Any] = {}

    # Key handling

    @staticmethod
    def _resolve(key, expected_type=None):
        if isinstance(key, MetadataKey):
            return key.name, (key.value_type if expected_type is None else expected_type)
        if not isinstance(key, str) or not key:
            raise TypeError(f"Metadata keys must be non-empty strings or MetadataKey, got {key!r}.")
        return key, expected_type

    @staticmethod
    def _check_writable(key):
        if isinstance(key, MetadataKey):
            return
        if isinstance(key, str) and key.startswith(RESERVED_PREFIX):
            raise MetadataContractViolation(
                key, f"The metadata key {key!r} is reserved for internal use and can't be set."
            )

    # Write

    def set_value(self, key, value):
        """Set ``key`` to ``value``; ``None`` removes the key.

        Raises
        ------
        MetadataContractViolation
            If ``key`` is a reserved string key, or ``value`` does not match the
            type declared by a typed key.
        """
        self._check_writable(key)
        name, value_type = self._resolve(key)
        if value is None:
            self._values.pop(name, None)
            return
        if not value_matches_type(value, value_type):
            raise MetadataContractViolation(
                name,
                f"The value for the metadata key {name!r} must be of type "
                f"{_type_name(value_type)}, got {type(value).__name__}.",
            )
        self._values[name] = value

    def remove_key(self, key) -> bool:
        """Remove ``key``; return whether it was present."""
        self._check_writable(key)
        name, _ = self._resolve(key)
        return self._values.pop(name, None) is not None

    def clear(self):
        self._values.clear()

    # Read

    def contains_key(self, key) -> bool:
        name, _ = self._resolve(key)
        return name in self._values

    def try_get_value(self, key, expected_type=None):
        """Return the value stored under ``key``, or ``None`` if it is missing.

        Raises
        ------
        MetadataContractViolation
            If the key is present but its value is not an ``expected_type``.
        """
        name, value_type = self._resolve(key, expected_type)
        value = self._values.get(name)
        if value is not None and not value_matches_type(value, value_type):
            raise MetadataContractViolation(
                name,
                f"The value for the metadata key {name!r} is a {type(value).__name__}, "
                f"expected {_type_name(value_type)}.",
            )
        return value

    def get_required_value(self, key, expected_type=None):
        """Return the value stored under ``key``.

        Raises
        ------
        MetadataContractViolation
            If the key is missing or its value is not an ``expected_type``.
        """
        value = self.try_get_value(key, expected_type)
        if value is None:
            name, _ = self._resolve(key)
            raise MetadataContractViolation(name, f"The metadata key {name!r} has not been set.")
        return value

    def keys(self) -> list[str]:
        return list(self._values)

    def public_items(self):
        """(key, value) pairs whose keys are not reserved."""
        return [(k, v) for k, v in self._values.items() if not k.startswith(RESERVED_PREFIX)]

    def copy_to(self, other: "MetadataStore", *, include_reserved=True):
        """Copy every entry into ``other``, overwriting existing keys."""
        for name, value in self._values.items():
            if include_reserved or not name.startswith(RESERVED_PREFIX):
                other._values[name] = value

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"MetadataStore({self._values!r})"


class MetadataHolder:
    """Mixin giving graphs, vertices and edges a metadata store and a tag."""

    __slots__ = ()

    def set_value(self, key, value):
        self.metadata.set_value(key, value)

    def try_get_value(self, key, expected_type=None):
        return self.metadata.try_get_value(key, expected_type)

    def get_required_value(self, key, expected_type=None):
        return self.metadata.get_required_value(key, expected_type)

    def contains_key(self, key) -> bool:
        return self.metadata.contains_key(key)

    def remove_key(self, key) -> bool:
        return self.metadata.remove_key(key)
