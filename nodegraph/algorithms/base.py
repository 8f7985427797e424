"""
Calculator protocol shared by every graph metric.

A calculator reads a graph and returns per-vertex (or graph-wide) results. The
host running it supplies a :class:`CalculationContext` carrying a cancellation
predicate and a progress sink; a calculator that sees the predicate turn true
stops and reports ``(False, None)`` instead of raising.
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

# Vertices processed between cancellation checks and progress reports.
VERTICES_PER_PROGRESS_REPORT = 100


class CalculationStatus(str, Enum):
    """State of a metric calculation.

    Attributes:
        NOT_STARTED: Nothing has run yet
        RUNNING: Calculators are being run
        COMPLETED: Every calculator ran; failures, if any, are recorded
        CANCELLED: The host cancelled the run; nothing is published
        FAILED: A calculator failed and the run stopped there
    """

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class GraphMetricProgress:
    """Progress report sent to the host's progress sink."""

    fraction: float
    description: str = ""

    @property
    def percent(self) -> int:
        return int(round(self.fraction * 100))


class CalculationContext:
    """
    Cancellation predicate and progress sink supplied by the host.

    Parameters
    ----------
    cancellation_requested : callable, optional
        Zero-argument predicate; True once the host wants the run to stop.
    progress : callable, optional
        Called with a :class:`GraphMetricProgress`.
    """

    def __init__(
        self,
        cancellation_requested: Callable[[], bool] | None = None,
        progress: Callable[[GraphMetricProgress], None] | None = None,
        *,
        offset: float = 0.0,
        span: float = 1.0,
    ):
        self.cancellation_requested = cancellation_requested
        self.progress = progress
        self._offset = offset
        self._span = span

    def is_cancellation_pending(self) -> bool:
        return bool(self.cancellation_requested is not None and self.cancellation_requested())

    def report_progress(self, completed: int, total: int, description: str = ""):
        """Report ``completed`` of ``total`` steps of this context's share of the run."""
        if self.progress is None:
            return
        fraction = 1.0 if total <= 0 else min(max(completed / total, 0.0), 1.0)
        self.progress(GraphMetricProgress(self._offset + self._span * fraction, description))

    def sub_context(self, step: int, steps: int) -> "CalculationContext":
        """Context for step ``step`` of ``steps``; its progress maps into that step's slice."""
        span = self._span / steps if steps > 0 else 0.0
        return CalculationContext(
            self.cancellation_requested,
            self.progress,
            offset=self._offset + step * span,
            span=span,
        )


class GraphMetricCalculatorBase(ABC):
    """
    Base class for graph metric calculators.

    Subclasses set ``metric_name`` (the key of their results in a pipeline run),
    ``requires_merged_duplicate_edges`` and implement :meth:`_calculate_core`.
    """

    metric_name: str = ""
    description: str = ""
    requires_merged_duplicate_edges: bool = False

    def try_calculate_graph_metrics(self, graph, context: CalculationContext | None = None) -> tuple[bool, Any]:
        """
        Calculate the metrics unless cancelled.

        Returns
        -------
        tuple
            ``(True, metrics)`` on completion, ``(False, None)`` if cancelled.

        Raises
        ------
        CalculationFailure
            If the metrics could not be calculated.
        """
        context = context or CalculationContext()
        if context.is_cancellation_pending():
            return False, None
        started = time.perf_counter()
        completed, metrics = self._calculate_core(graph, context)
        logger.debug(
            f"{type(self).__name__}: {'completed' if completed else 'cancelled'} in "
            f"{time.perf_counter() - started:.3f}s ({len(graph.vertices)} vertices, {len(graph.edges)} edges)"
        )
        if not completed:
            return False, None
        return True, metrics

    def calculate_graph_metrics(self, graph):
        """Calculate the metrics without cancellation support."""
        _, metrics = self.try_calculate_graph_metrics(graph, None)
        return metrics

    @abstractmethod
    def _calculate_core(self, graph, context: CalculationContext) -> tuple[bool, Any]:
        ...
