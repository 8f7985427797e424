import networkx as nx

from .networkx import from_nx, to_nx


def to_graphml(graph, path, *, public_only=True):
    """Write ``graph`` as GraphML. Metadata values must be str, int, float or bool."""
    nx.write_graphml(to_nx(graph, public_only=public_only), path)


def from_graphml(path):
    return from_nx(nx.read_graphml(path, force_multigraph=True))
