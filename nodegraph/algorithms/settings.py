"""
Metric calculation settings.

Settings are plain caller-held objects; nothing is remembered between runs.
"""
from dataclasses import asdict, dataclass, fields

from .brandes import BrandesCentralityCalculator
from .clustering import ClusteringCoefficientCalculator
from .degree import VertexDegreeCalculator
from .overall import OverallMetricCalculator


@dataclass
class GraphMetricUserSettings:
    """Which metrics to calculate, and how the pipeline handles failures."""

    calculate_overall_metrics: bool = True
    """Graph-wide counts, density, components and geodesic distances."""

    calculate_vertex_degree: bool = True
    """In-degree, out-degree and degree of every vertex."""

    calculate_clustering_coefficient: bool = True
    """Clustering coefficient of every vertex."""

    calculate_brandes_centralities: bool = True
    """Betweenness and closeness centrality of every vertex."""

    stop_on_first_failure: bool = False
    """Stop the pipeline at the first calculator that fails instead of recording the failure."""

    def __post_init__(self):
        """Validate configuration values."""
        for f in fields(self):
            if not isinstance(getattr(self, f.name), bool):
                raise TypeError(f"{f.name} must be a bool, got {getattr(self, f.name)!r}")

    @classmethod
    def from_mapping(cls, values: dict) -> "GraphMetricUserSettings":
        """Build settings from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown graph metric settings: {', '.join(unknown)}")
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def should_calculate_graph_metrics(self) -> bool:
        return any(
            (
                self.calculate_overall_metrics,
                self.calculate_vertex_degree,
                self.calculate_clustering_coefficient,
                self.calculate_brandes_centralities,
            )
        )

    def create_calculators(self) -> list:
        """Calculators selected by these settings, in pipeline order."""
        selected = [
            (self.calculate_overall_metrics, OverallMetricCalculator),
            (self.calculate_vertex_degree, VertexDegreeCalculator),
            (self.calculate_clustering_coefficient, ClusteringCoefficientCalculator),
            (self.calculate_brandes_centralities, BrandesCentralityCalculator),
        ]
        return [calculator() for wanted, calculator in selected if wanted]
