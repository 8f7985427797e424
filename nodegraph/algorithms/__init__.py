from .background import BackgroundCalculation
from .base import CalculationContext, CalculationStatus, GraphMetricCalculatorBase, GraphMetricProgress
from .brandes import BrandesCentralityCalculator, BrandesCentralityResult, VertexCentralities
from .clustering import ClusteringCoefficientCalculator
from .components import ConnectedComponentCalculator, weakly_connected_components
from .degree import VertexDegreeCalculator, VertexDegrees
from .duplicates import DuplicateEdgeDetector, DuplicateEdgeSummary, merge_duplicate_edges
from .overall import OverallMetricCalculator, OverallMetrics
from .pipeline import GraphMetricCalculationManager, GraphMetricResults
from .settings import GraphMetricUserSettings
from .transformers import GraphFilter, to_directed, to_undirected

__all__ = [
    "BackgroundCalculation",
    "BrandesCentralityCalculator",
    "BrandesCentralityResult",
    "CalculationContext",
    "CalculationStatus",
    "ClusteringCoefficientCalculator",
    "ConnectedComponentCalculator",
    "DuplicateEdgeDetector",
    "DuplicateEdgeSummary",
    "GraphFilter",
    "GraphMetricCalculationManager",
    "GraphMetricCalculatorBase",
    "GraphMetricProgress",
    "GraphMetricResults",
    "GraphMetricUserSettings",
    "OverallMetricCalculator",
    "OverallMetrics",
    "VertexCentralities",
    "VertexDegreeCalculator",
    "VertexDegrees",
    "merge_duplicate_edges",
    "to_directed",
    "to_undirected",
    "weakly_connected_components",
]
