from enum import Enum, IntFlag


class GraphDirectedness(str, Enum):
    """Kinds of edges a graph accepts (DIRECTED, UNDIRECTED, MIXED).

    Attributes:
        DIRECTED: Only directed edges may be added
        UNDIRECTED: Only undirected edges may be added
        MIXED: Directed and undirected edges may be added
    """

    DIRECTED = "directed"
    UNDIRECTED = "undirected"
    MIXED = "mixed"


class GraphRestrictions(IntFlag):
    """Structural restrictions a graph enforces when edges are added.

    Attributes:
        NONE: No restrictions
        NO_SELF_LOOPS: Edges that connect a vertex to itself are rejected
        NO_PARALLEL_EDGES: Edges parallel to an existing edge are rejected
        ALL: Every restriction
    """

    NONE = 0
    NO_SELF_LOOPS = 1
    NO_PARALLEL_EDGES = 2
    ALL = NO_SELF_LOOPS | NO_PARALLEL_EDGES
