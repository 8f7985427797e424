from __future__ import annotations

import weakref
from collections.abc import Iterable, Iterator

from ._state import _State
from .errors import StructuralViolation
from .metadata import MetadataHolder, MetadataStore
from .structure import GraphDirectedness, GraphRestrictions


def _coerce_directedness(directedness) -> GraphDirectedness:
    try:
        return GraphDirectedness(directedness)
    except ValueError:
        raise StructuralViolation(
            f"{directedness!r} is not a valid directedness; use one of "
            f"{[d.value for d in GraphDirectedness]}."
        ) from None


def _coerce_restrictions(restrictions) -> GraphRestrictions:
    if isinstance(restrictions, bool) or not isinstance(restrictions, int):
        raise StructuralViolation(f"restrictions must be GraphRestrictions flags, got {restrictions!r}.")
    if restrictions < 0 or int(restrictions) & ~int(GraphRestrictions.ALL):
        raise StructuralViolation(
            f"restrictions {int(restrictions)} must be a combination of the GraphRestrictions flags."
        )
    return GraphRestrictions(int(restrictions))


class Vertex(MetadataHolder):
    """
    A graph vertex.

    Vertices are created detached by a :class:`VertexFactory` and receive their ID
    when they are added to a graph. The vertex keeps only a weak reference to its
    graph; the graph owns the vertex.

    Parameters
    ----------
    name : str, optional
        Free-form vertex name. Names need not be unique.
    """

    __slots__ = ("_id", "name", "_location", "_graph_ref", "metadata", "tag", "__weakref__")

    def __init__(self, name: str | None = None):
        self._id: int | None = None
        self.name = name
        self._location = (0.0, 0.0)
        self._graph_ref = None
        self.metadata = MetadataStore()
        self.tag = None

    @property
    def id(self) -> int | None:
        """Vertex ID, unique within the parent graph; ``None`` while detached."""
        return self._id

    @property
    def location(self) -> tuple[float, float]:
        return self._location

    @location.setter
    def location(self, value):
        x, y = value
        self._location = (float(x), float(y))

    @property
    def parent_graph(self) -> "Graph | None":
        return self._graph_ref() if self._graph_ref is not None else None

    # Navigation

    @property
    def incident_edges(self) -> list["Edge"]:
        """Edges connected to this vertex. A self-loop is listed once."""
        graph = self.parent_graph
        if graph is None:
            return []
        return list(graph._incidence().get(self._id, ()))

    @property
    def degree(self) -> int:
        graph = self.parent_graph
        if graph is None:
            return 0
        return len(graph._incidence().get(self._id, ()))

    @property
    def incoming_edges(self) -> list["Edge"]:
        """Incident edges pointing at this vertex; undirected edges count as incoming."""
        return [e for e in self.incident_edges if self.is_incoming_edge(e)]

    @property
    def outgoing_edges(self) -> list["Edge"]:
        """Incident edges leaving this vertex; undirected edges count as outgoing."""
        return [e for e in self.incident_edges if self.is_outgoing_edge(e)]

    @property
    def predecessor_vertices(self) -> list["Vertex"]:
        return _unique_vertices(e.get_adjacent_vertex(self) for e in self.incoming_edges)

    @property
    def successor_vertices(self) -> list["Vertex"]:
        return _unique_vertices(e.get_adjacent_vertex(self) for e in self.outgoing_edges)

    @property
    def adjacent_vertices(self) -> list["Vertex"]:
        return _unique_vertices(e.get_adjacent_vertex(self) for e in self.incident_edges)

    def is_incident_edge(self, edge: "Edge") -> bool:
        return edge.vertex1 is self or edge.vertex2 is self

    def is_outgoing_edge(self, edge: "Edge") -> bool:
        if edge.is_directed:
            return edge.vertex1 is self
        return self.is_incident_edge(edge)

    def is_incoming_edge(self, edge: "Edge") -> bool:
        if edge.is_directed:
            return edge.vertex2 is self
        return self.is_incident_edge(edge)

    def get_connecting_edges(self, other: "Vertex") -> list["Edge"]:
        """Edges joining this vertex and ``other``, ignoring direction."""
        graph = self.parent_graph
        if graph is None:
            raise StructuralViolation(f"{self!r} has not been added to a graph.")
        return graph.edges.get_connecting_edges(self, other)

    def __repr__(self):
        if self.name is None:
            return f"Vertex(id={self._id})"
        return f"Vertex(id={self._id}, name={self.name!r})"


def _allocate_id(requested, next_id, kind):
    if requested is None:
        return next_id
    if isinstance(requested, bool) or not isinstance(requested, int):
        raise TypeError(f"A {kind} ID must be an int, got {requested!r}.")
    if requested < next_id:
        raise StructuralViolation(
            f"{kind.capitalize()} ID {requested} is not greater than the IDs already allocated by this graph."
        )
    return requested


def _unique_vertices(vertices: Iterable[Vertex]) -> list[Vertex]:
    seen = {}
    for v in vertices:
        seen.setdefault(id(v), v)
    return list(seen.values())


class Edge(MetadataHolder):
    """
    A graph edge between two vertices of the same graph.

    Parameters
    ----------
    vertex1, vertex2 : Vertex
        Endpoints. For a directed edge ``vertex1`` is the back (tail) vertex and
        ``vertex2`` the front (head) vertex.
    is_directed : bool
        Whether the edge is directed.
    name : str, optional
        Free-form edge name.

    Raises
    ------
    StructuralViolation
        If an endpoint is ``None``, has not been added to a graph, or the two
        endpoints belong to different graphs.
    """

    __slots__ = (
        "_id", "_vertex1", "_vertex2", "_is_directed", "name",
        "_graph_ref", "metadata", "tag", "__weakref__",
    )

    def __init__(self, vertex1: Vertex, vertex2: Vertex, is_directed: bool, name: str | None = None):
        if vertex1 is None or vertex2 is None:
            raise StructuralViolation("An edge needs two vertices; vertex1 and vertex2 can't be None.")
        if not isinstance(vertex1, Vertex) or not isinstance(vertex2, Vertex):
            raise TypeError("vertex1 and vertex2 must be Vertex instances.")
        graph1, graph2 = vertex1.parent_graph, vertex2.parent_graph
        if graph1 is None or graph2 is None:
            raise StructuralViolation("vertex1 and vertex2 must be added to a graph before they are connected.")
        if graph1 is not graph2:
            raise StructuralViolation("vertex1 and vertex2 have been added to different graphs.")
        self._id: int | None = None
        self._vertex1 = vertex1
        self._vertex2 = vertex2
        self._is_directed = bool(is_directed)
        self.name = name
        self._graph_ref = None
        self.metadata = MetadataStore()
        self.tag = None

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def vertex1(self) -> Vertex:
        return self._vertex1

    @property
    def vertex2(self) -> Vertex:
        return self._vertex2

    @property
    def vertices(self) -> tuple[Vertex, Vertex]:
        return (self._vertex1, self._vertex2)

    @property
    def is_directed(self) -> bool:
        return self._is_directed

    @property
    def is_self_loop(self) -> bool:
        return self._vertex1 is self._vertex2

    @property
    def parent_graph(self) -> "Graph | None":
        return self._graph_ref() if self._graph_ref is not None else None

    @property
    def back_vertex(self) -> Vertex:
        """Tail of a directed edge."""
        if not self._is_directed:
            raise StructuralViolation(f"{self!r} is undirected and has no back vertex.")
        return self._vertex1

    @property
    def front_vertex(self) -> Vertex:
        """Head of a directed edge."""
        if not self._is_directed:
            raise StructuralViolation(f"{self!r} is undirected and has no front vertex.")
        return self._vertex2

    def get_adjacent_vertex(self, vertex: Vertex) -> Vertex:
        """Return the endpoint opposite ``vertex`` (``vertex`` itself for a self-loop)."""
        if vertex is self._vertex1:
            return self._vertex2
        if vertex is self._vertex2:
            return self._vertex1
        raise StructuralViolation(f"{vertex!r} is not one of the vertices of {self!r}.")

    def is_parallel_to(self, other: "Edge") -> bool:
        """
        Whether ``other`` connects the same vertices.

        Two directed edges are parallel when they point the same way. Otherwise only
        the endpoint pair matters.
        """
        a1, a2 = self._vertex1, self._vertex2
        b1, b2 = other.vertex1, other.vertex2
        if self._is_directed and other.is_directed:
            return a1 is b1 and a2 is b2
        return (a1 is b1 and a2 is b2) or (a1 is b2 and a2 is b1)

    def is_antiparallel_to(self, other: "Edge") -> bool:
        """Whether both edges are directed and point in opposite directions."""
        if not (self._is_directed and other.is_directed) or self.is_self_loop:
            return False
        return self._vertex1 is other.vertex2 and self._vertex2 is other.vertex1

    def __repr__(self):
        arrow = "->" if self._is_directed else "--"
        return f"Edge(id={self._id}, {self._vertex1.id}{arrow}{self._vertex2.id})"


# Factories


class VertexFactory:
    """Creates detached vertices. Subclass to substitute a Vertex subtype."""

    def create_vertex(self, name: str | None = None) -> Vertex:
        return Vertex(name)


class EdgeFactory:
    """Creates edges. Subclass to substitute an Edge subtype."""

    def create_edge(self, vertex1: Vertex, vertex2: Vertex, is_directed: bool, name: str | None = None) -> Edge:
        return Edge(vertex1, vertex2, is_directed, name)


class GraphFactory:
    """
    Creates graphs wired to a vertex and an edge factory.

    Parameters
    ----------
    vertex_factory : VertexFactory, optional
    edge_factory : EdgeFactory, optional
    """

    def __init__(self, vertex_factory: VertexFactory | None = None, edge_factory: EdgeFactory | None = None):
        self.vertex_factory = vertex_factory or VertexFactory()
        self.edge_factory = edge_factory or EdgeFactory()

    def create_graph(
        self,
        directedness=GraphDirectedness.MIXED,
        restrictions=GraphRestrictions.NONE,
        name: str | None = None,
    ) -> "Graph":
        return Graph(
            directedness,
            restrictions,
            name=name,
            vertex_factory=self.vertex_factory,
            edge_factory=self.edge_factory,
        )


# Collections


class VertexCollection:
    """Insertion-ordered vertices of one graph, addressable by ID."""

    __slots__ = ("_graph", "_items")

    def __init__(self, graph: "Graph"):
        self._graph = graph
        self._items: dict[int, Vertex] = {}

    def add(self, name: str | None = None) -> Vertex:
        """Create a vertex with the graph's vertex factory, add it, and return it."""
        return self.add_vertex(self._graph.vertex_factory.create_vertex(name))

    def add_vertex(self, vertex: Vertex, vertex_id: int | None = None) -> Vertex:
        """
        Add a detached vertex and give it the next vertex ID.

        Parameters
        ----------
        vertex : Vertex
            Vertex created by a :class:`VertexFactory`.
        vertex_id : int, optional
            Explicit ID, used when copying graphs. Must be greater than every ID
            already allocated by this graph.

        Raises
        ------
        StructuralViolation
            If the vertex already belongs to a graph or ``vertex_id`` is not greater
            than the IDs already allocated.
        """
        if vertex is None:
            raise StructuralViolation("vertex can't be None.")
        if not isinstance(vertex, Vertex):
            raise TypeError(f"Expected a Vertex, got {type(vertex).__name__}.")
        if vertex._graph_ref is not None:
            raise StructuralViolation(f"{vertex!r} has already been added to a graph.")
        return self._attach(vertex, vertex_id)

    def _attach(self, vertex: Vertex, vertex_id: int | None) -> Vertex:
        graph = self._graph
        vertex_id = _allocate_id(vertex_id, graph._next_vertex_id, "vertex")
        graph._next_vertex_id = max(graph._next_vertex_id, vertex_id + 1)
        vertex._id = vertex_id
        vertex._graph_ref = weakref.ref(graph)
        self._items[vertex_id] = vertex
        graph._state.bump()
        return vertex

    def remove(self, vertex: Vertex | int) -> bool:
        """
        Remove a vertex (or vertex ID) and every edge incident to it.

        Returns
        -------
        bool
            False if the vertex was not in the graph.
        """
        found = self.find(vertex.id if isinstance(vertex, Vertex) else vertex)
        if found is None or (isinstance(vertex, Vertex) and found is not vertex):
            return False
        for edge in found.incident_edges:
            self._graph.edges.remove(edge)
        del self._items[found.id]
        found._graph_ref = None
        found.metadata.clear()
        self._graph._state.bump()
        return True

    def clear(self):
        for vertex in list(self._items.values()):
            self.remove(vertex)

    def find(self, vertex_id: int) -> Vertex | None:
        return self._items.get(vertex_id)

    def find_by_name(self, name: str) -> Vertex | None:
        """First vertex (in insertion order) called ``name``."""
        for vertex in self._items.values():
            if vertex.name == name:
                return vertex
        return None

    @property
    def ids(self) -> list[int]:
        return list(self._items)

    def __contains__(self, item) -> bool:
        if isinstance(item, Vertex):
            return self._items.get(item.id) is item
        return item in self._items

    def __iter__(self) -> Iterator[Vertex]:
        return iter(list(self._items.values()))

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"VertexCollection(count={len(self._items)})"


class EdgeCollection:
    """Insertion-ordered edges of one graph, addressable by ID."""

    __slots__ = ("_graph", "_items")

    def __init__(self, graph: "Graph"):
        self._graph = graph
        self._items: dict[int, Edge] = {}

    def add(self, vertex1: Vertex, vertex2: Vertex, is_directed: bool | None = None, name: str | None = None) -> Edge:
        """
        Connect two vertices of this graph.

        Parameters
        ----------
        vertex1, vertex2 : Vertex
            Endpoints; ``vertex1`` is the back vertex of a directed edge.
        is_directed : bool, optional
            Defaults to True for a DIRECTED graph and False otherwise.
        name : str, optional

        Returns
        -------
        Edge

        Raises
        ------
        StructuralViolation
            If a vertex is None or not in this graph, or the edge breaks the graph's
            directedness or restrictions.
        """
        graph = self._graph
        if is_directed is None:
            is_directed = graph.directedness is GraphDirectedness.DIRECTED
        self._check_vertices(vertex1, vertex2)
        edge = graph.edge_factory.create_edge(vertex1, vertex2, is_directed, name)
        return self.add_edge(edge)

    def add_edge(self, edge: Edge, edge_id: int | None = None) -> Edge:
        """Add an edge created by an :class:`EdgeFactory`; see :meth:`add`.

        ``edge_id`` follows the same rule as ``vertex_id`` in :meth:`VertexCollection.add_vertex`.
        """
        if edge is None:
            raise StructuralViolation("edge can't be None.")
        if not isinstance(edge, Edge):
            raise TypeError(f"Expected an Edge, got {type(edge).__name__}.")
        if edge._graph_ref is not None:
            raise StructuralViolation(f"{edge!r} has already been added to a graph.")
        self._check_vertices(edge.vertex1, edge.vertex2)
        self._check_edge(edge)
        return self._attach(edge, edge_id)

    def _check_vertices(self, vertex1, vertex2):
        if vertex1 is None or vertex2 is None:
            raise StructuralViolation("vertex1 and vertex2 can't be None.")
        graph = self._graph
        for vertex in (vertex1, vertex2):
            if vertex not in graph.vertices:
                raise StructuralViolation(f"{vertex!r} has not been added to this graph.")

    def _check_edge(self, edge: Edge):
        graph = self._graph
        if edge.is_directed and graph.directedness is GraphDirectedness.UNDIRECTED:
            raise StructuralViolation("A directed edge can't be added to an undirected graph.")
        if not edge.is_directed and graph.directedness is GraphDirectedness.DIRECTED:
            raise StructuralViolation("An undirected edge can't be added to a directed graph.")
        if edge.is_self_loop and graph.restrictions & GraphRestrictions.NO_SELF_LOOPS:
            raise StructuralViolation(
                "The edge is a self-loop, and the graph's restrictions include NO_SELF_LOOPS."
            )
        if graph.restrictions & GraphRestrictions.NO_PARALLEL_EDGES:
            for other in edge.vertex1.incident_edges:
                if edge.is_parallel_to(other):
                    raise StructuralViolation(
                        f"The edge is parallel to the edge with the ID {other.id}, and the "
                        "graph's restrictions include NO_PARALLEL_EDGES."
                    )

    def _attach(self, edge: Edge, edge_id: int | None) -> Edge:
        graph = self._graph
        edge_id = _allocate_id(edge_id, graph._next_edge_id, "edge")
        graph._next_edge_id = max(graph._next_edge_id, edge_id + 1)
        edge._id = edge_id
        edge._graph_ref = weakref.ref(graph)
        self._items[edge_id] = edge
        graph._state.bump()
        return edge

    def remove(self, edge: Edge | int) -> bool:
        """Remove an edge (or edge ID). Returns False if it was not in the graph."""
        found = self.find(edge.id if isinstance(edge, Edge) else edge)
        if found is None or (isinstance(edge, Edge) and found is not edge):
            return False
        del self._items[found.id]
        found._graph_ref = None
        found.metadata.clear()
        self._graph._state.bump()
        return True

    def clear(self):
        for edge in list(self._items.values()):
            self.remove(edge)

    def find(self, edge_id: int) -> Edge | None:
        return self._items.get(edge_id)

    def get_connecting_edges(self, vertex_a: Vertex, vertex_b: Vertex) -> list[Edge]:
        """
        All edges joining ``vertex_a`` and ``vertex_b``, ignoring direction.

        When both arguments are the same vertex, its self-loops are returned.

        Raises
        ------
        StructuralViolation
            If either vertex is None or not in this graph.
        """
        self._check_vertices(vertex_a, vertex_b)
        return [e for e in vertex_a.incident_edges if e.get_adjacent_vertex(vertex_a) is vertex_b]

    @property
    def ids(self) -> list[int]:
        return list(self._items)

    def __contains__(self, item) -> bool:
        if isinstance(item, Edge):
            return self._items.get(item.id) is item
        return item in self._items

    def __iter__(self) -> Iterator[Edge]:
        return iter(list(self._items.values()))

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"EdgeCollection(count={len(self._items)})"


class Graph(MetadataHolder):
    """
    Graph of vertices and edges with per-element metadata.

    Parameters
    ----------
    directedness : GraphDirectedness or str, optional
        Kinds of edge the graph accepts. Defaults to MIXED.
    restrictions : GraphRestrictions, optional
        Self-loop and parallel-edge restrictions. Defaults to NONE.
    name : str, optional
    vertex_factory, edge_factory : optional
        Factories used by ``vertices.add()`` and ``edges.add()``.

    Raises
    ------
    StructuralViolation
        If ``directedness`` or ``restrictions`` is not valid.

    Notes
    -----
    - Vertex and edge IDs come from per-graph counters starting at 1 and strictly
      increase with insertion order.
    - Incident-edge lists are derived from the edge collection and cached until
      the next structural change.
    """

    __slots__ = (
        "_directedness", "_restrictions", "name", "vertices", "edges", "metadata", "tag",
        "vertex_factory", "edge_factory", "_next_vertex_id", "_next_edge_id", "_state", "__weakref__",
    )

    def __init__(
        self,
        directedness=GraphDirectedness.MIXED,
        restrictions=GraphRestrictions.NONE,
        *,
        name: str | None = None,
        vertex_factory: VertexFactory | None = None,
        edge_factory: EdgeFactory | None = None,
    ):
        self._directedness = _coerce_directedness(directedness)
        self._restrictions = _coerce_restrictions(restrictions)
        self.name = name
        self.vertex_factory = vertex_factory or VertexFactory()
        self.edge_factory = edge_factory or EdgeFactory()
        self._next_vertex_id = 1
        self._next_edge_id = 1
        self._state = _State()
        self.vertices = VertexCollection(self)
        self.edges = EdgeCollection(self)
        self.metadata = MetadataStore()
        self.tag = None

    @property
    def directedness(self) -> GraphDirectedness:
        return self._directedness

    @property
    def restrictions(self) -> GraphRestrictions:
        return self._restrictions

    @property
    def version(self) -> int:
        """Structural mutation counter."""
        return self._state.version

    # Incidence index

    def _build_incidence(self) -> dict[int, list[Edge]]:
        index: dict[int, list[Edge]] = {}
        for edge in self.edges._items.values():
            index.setdefault(edge.vertex1.id, []).append(edge)
            if not edge.is_self_loop:
                index.setdefault(edge.vertex2.id, []).append(edge)
        return index

    def _incidence(self) -> dict[int, list[Edge]]:
        return self._state.cached("incidence", self._build_incidence)

    def get_incident_edges(self, vertex: Vertex) -> list[Edge]:
        """Edges incident to ``vertex``; raises StructuralViolation for a foreign vertex."""
        if vertex not in self.vertices:
            raise StructuralViolation(f"{vertex!r} has not been added to this graph.")
        return vertex.incident_edges

    @property
    def has_directed_edges(self) -> bool:
        if self._directedness is not GraphDirectedness.MIXED:
            return self._directedness is GraphDirectedness.DIRECTED
        return any(e.is_directed for e in self.edges._items.values())

    # Copying

    def clone(self, copy_metadata: bool = True, copy_tag: bool = True, graph_factory: GraphFactory | None = None) -> "Graph":
        """
        Copy the graph's structure, keeping vertex and edge IDs.

        Parameters
        ----------
        copy_metadata : bool, optional
            Copy the metadata of the graph, its vertices and its edges.
        copy_tag : bool, optional
            Copy tags (by reference).
        graph_factory : GraphFactory, optional
            Factory for the new graph. Defaults to one using this graph's factories.

        Returns
        -------
        Graph
        """
        factory = graph_factory or GraphFactory(self.vertex_factory, self.edge_factory)
        copy = factory.create_graph(self._directedness, self._restrictions, self.name)
        _copy_extras(self, copy, copy_metadata, copy_tag)
        vertex_map = {}
        for vertex in self.vertices:
            new_vertex = copy.vertex_factory.create_vertex(vertex.name)
            new_vertex.location = vertex.location
            _copy_extras(vertex, new_vertex, copy_metadata, copy_tag)
            vertex_map[vertex.id] = copy.vertices.add_vertex(new_vertex, vertex.id)
        for edge in self.edges:
            new_edge = copy.edge_factory.create_edge(
                vertex_map[edge.vertex1.id], vertex_map[edge.vertex2.id], edge.is_directed, edge.name
            )
            _copy_extras(edge, new_edge, copy_metadata, copy_tag)
            copy.edges.add_edge(new_edge, edge.id)
        copy._next_vertex_id = self._next_vertex_id
        copy._next_edge_id = self._next_edge_id
        return copy

    def __repr__(self):
        return (
            f"Graph(directedness={self._directedness.value!r}, "
            f"vertices={len(self.vertices)}, edges={len(self.edges)})"
        )


def _copy_extras(source, target, copy_metadata, copy_tag):
    if copy_metadata:
        source.metadata.copy_to(target.metadata)
    if copy_tag:
        target.tag = source.tag
