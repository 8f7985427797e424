# nodegraph/__init__.py
"""nodegraph: graph data type, metric calculators and layouts."""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    # namespaces
    "core": "nodegraph.core",
    "algorithms": "nodegraph.algorithms",
    "layouts": "nodegraph.layouts",
    "adapters": "nodegraph.adapters",
    "io": "nodegraph.io",
    # adapter modules (direct convenience)
    "networkx": "nodegraph.adapters.networkx",
    "graphml": "nodegraph.adapters.graphml",
    "dataframe": "nodegraph.adapters.dataframe_adapter",
    "centrality_table": "nodegraph.io.centrality_table",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "Graph": ("nodegraph.core.graph", "Graph"),
    "GraphFactory": ("nodegraph.core.graph", "GraphFactory"),
    "GraphDirectedness": ("nodegraph.core.structure", "GraphDirectedness"),
    "GraphRestrictions": ("nodegraph.core.structure", "GraphRestrictions"),
    "MetadataKey": ("nodegraph.core.metadata", "MetadataKey"),
    "ReservedMetadataKeys": ("nodegraph.core.metadata", "ReservedMetadataKeys"),
    "VertexSorter": ("nodegraph.core.sorters", "VertexSorter"),
    "ByMetadataVertexSorter": ("nodegraph.core.sorters", "ByMetadataVertexSorter"),

    # Errors
    "StructuralViolation": ("nodegraph.core.errors", "StructuralViolation"),
    "MetadataContractViolation": ("nodegraph.core.errors", "MetadataContractViolation"),
    "CalculationFailure": ("nodegraph.core.errors", "CalculationFailure"),

    # Metrics
    "GraphMetricCalculationManager": ("nodegraph.algorithms.pipeline", "GraphMetricCalculationManager"),
    "GraphMetricUserSettings": ("nodegraph.algorithms.settings", "GraphMetricUserSettings"),
    "BrandesCentralityCalculator": ("nodegraph.algorithms.brandes", "BrandesCentralityCalculator"),

    # Layouts
    "PolarLayout": ("nodegraph.layouts.polar", "PolarLayout"),
    "PolarAbsoluteLayout": ("nodegraph.layouts.polar", "PolarAbsoluteLayout"),
    "FruchtermanReingoldLayout": ("nodegraph.layouts.fruchterman_reingold", "FruchtermanReingoldLayout"),
    "LayoutContext": ("nodegraph.layouts.base", "LayoutContext"),
    "Rectangle": ("nodegraph.core.geometry", "Rectangle"),

    # NetworkX / GraphML / Polars
    "to_nx": ("nodegraph.adapters.networkx", "to_nx"),
    "from_nx": ("nodegraph.adapters.networkx", "from_nx"),
    "to_graphml": ("nodegraph.adapters.graphml", "to_graphml"),
    "from_graphml": ("nodegraph.adapters.graphml", "from_graphml"),
    "to_dataframes": ("nodegraph.adapters.dataframe_adapter", "to_dataframes"),
    "from_dataframes": ("nodegraph.adapters.dataframe_adapter", "from_dataframes"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


# Version: prefer internal, then fall back to distribution metadata
try:
    from ._version import __version__
except ImportError:
    try:
        __version__ = _pkg_version("nodegraph")
    except PackageNotFoundError:
        __version__ = "0.0.0"
