"""
Runs a list of metric calculators over a graph.

The run is cancellable between calculators (and inside calculators that poll
their context). A cancelled run publishes nothing; a calculator that raises
:class:`CalculationFailure` is recorded and the others still run, unless the
settings ask to stop on the first failure.
"""
from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from loguru import logger

from ..core.errors import CalculationFailure
from .background import BackgroundCalculation
from .base import CalculationContext, CalculationStatus, GraphMetricCalculatorBase
from .duplicates import DuplicateEdgeDetector, merge_duplicate_edges
from .settings import GraphMetricUserSettings


@dataclass(frozen=True)
class GraphMetricResults:
    """
    Outcome of a pipeline run.

    Attributes
    ----------
    status : CalculationStatus
        COMPLETED, CANCELLED or FAILED.
    metrics : Mapping[str, Any]
        Results keyed by calculator ``metric_name``. Empty when cancelled.
    failures : Mapping[str, CalculationFailure]
        Failures keyed by calculator ``metric_name``.
    """

    status: CalculationStatus
    metrics: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    failures: Mapping[str, CalculationFailure] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def cancelled(self) -> bool:
        return self.status is CalculationStatus.CANCELLED

    @property
    def succeeded(self) -> bool:
        return self.status is CalculationStatus.COMPLETED and not self.failures

    def __getitem__(self, metric_name: str):
        return self.metrics[metric_name]

    def __contains__(self, metric_name) -> bool:
        return metric_name in self.metrics


class GraphMetricCalculationManager:
    """
    Runs metric calculators over a graph and collects their results.

    Parameters
    ----------
    calculators : iterable of GraphMetricCalculatorBase, optional
        Calculators to run, in order. Defaults to those selected by ``settings``.
    settings : GraphMetricUserSettings, optional

    Notes
    -----
    The graph must not be modified while a calculation runs.
    """

    def __init__(
        self,
        calculators: Iterable[GraphMetricCalculatorBase] | None = None,
        settings: GraphMetricUserSettings | None = None,
    ):
        self.settings = settings or GraphMetricUserSettings()
        self.calculators = list(calculators) if calculators is not None else self.settings.create_calculators()
        names = [c.metric_name for c in self.calculators]
        duplicated = sorted({n for n in names if names.count(n) > 1})
        if duplicated:
            raise ValueError(f"Calculators must have distinct metric names; repeated: {', '.join(duplicated)}")
        self.status = CalculationStatus.NOT_STARTED
        self._background = None

    @property
    def is_busy(self) -> bool:
        return self._background is not None and not self._background.done()

    def calculate_graph_metrics(self, graph, context: CalculationContext | None = None) -> GraphMetricResults:
        """
        Run every calculator over ``graph``.

        Parameters
        ----------
        graph : Graph
        context : CalculationContext, optional
            Cancellation predicate and progress sink.

        Returns
        -------
        GraphMetricResults
        """
        context = context or CalculationContext()
        total = len(self.calculators)
        self.status = CalculationStatus.RUNNING
        started = time.perf_counter()
        logger.debug(f"Graph metric calculation started: {total} calculator(s) on {graph!r}")

        metrics: dict[str, Any] = {}
        failures: dict[str, CalculationFailure] = {}
        merged = None
        for step, calculator in enumerate(self.calculators):
            if context.is_cancellation_pending():
                return self._cancelled(calculator)
            context.report_progress(step, total, calculator.description)

            target = graph
            if calculator.requires_merged_duplicate_edges:
                if merged is None:
                    merged = (
                        merge_duplicate_edges(graph)
                        if DuplicateEdgeDetector(graph).graph_contains_duplicate_edges
                        else graph
                    )
                target = merged

            try:
                completed, value = calculator.try_calculate_graph_metrics(target, context.sub_context(step, total))
            except CalculationFailure as failure:
                if failure.calculator is None:
                    failure.calculator = calculator.metric_name
                logger.warning(f"{type(calculator).__name__} failed: {failure}")
                failures[calculator.metric_name] = failure
                if self.settings.stop_on_first_failure:
                    return self._finish(CalculationStatus.FAILED, metrics, failures)
                continue

            if not completed or context.is_cancellation_pending():
                return self._cancelled(calculator)
            metrics[calculator.metric_name] = value

        context.report_progress(total, total, "Graph metrics calculated.")
        logger.info(
            f"Graph metric calculation completed in {time.perf_counter() - started:.3f}s "
            f"({len(metrics)} succeeded, {len(failures)} failed)"
        )
        return self._finish(CalculationStatus.COMPLETED, metrics, failures)

    def calculate_graph_metrics_async(self, graph, executor=None):
        """
        Start :meth:`calculate_graph_metrics` in the background.

        Parameters
        ----------
        graph : Graph
        executor : concurrent.futures.Executor, optional
            Where to run. Defaults to a dedicated single worker thread.

        Returns
        -------
        BackgroundCalculation

        Raises
        ------
        RuntimeError
            If a background calculation of this manager is still running.
        """
        if self.is_busy:
            raise RuntimeError("A graph metric calculation is already in progress.")
        self._background = BackgroundCalculation(self, graph, executor)
        return self._background

    def _cancelled(self, calculator) -> GraphMetricResults:
        logger.debug(f"Graph metric calculation cancelled at {type(calculator).__name__}")
        self.status = CalculationStatus.CANCELLED
        return GraphMetricResults(CalculationStatus.CANCELLED)

    def _finish(self, status, metrics, failures) -> GraphMetricResults:
        self.status = status
        return GraphMetricResults(status, MappingProxyType(dict(metrics)), MappingProxyType(dict(failures)))
