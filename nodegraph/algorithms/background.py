"""Background host for the metric pipeline."""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from loguru import logger

from .base import CalculationContext, GraphMetricProgress


class BackgroundCalculation:
    """
    A pipeline run on a worker thread, polled by the caller.

    The worker is the only producer of progress and of the result; the caller
    polls ``done()``/``progress`` or blocks on ``result()``, and may ``cancel()``.
    """

    def __init__(self, manager, graph, executor=None):
        self._cancel_requested = threading.Event()
        self._progress = GraphMetricProgress(0.0)
        context = CalculationContext(self._cancel_requested.is_set, self._on_progress)
        owns_executor = executor is None
        if owns_executor:
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="nodegraph-metrics")
        self._future = executor.submit(manager.calculate_graph_metrics, graph, context)
        if owns_executor:
            # queued work still runs; the thread exits when it is done
            executor.shutdown(wait=False)

    def _on_progress(self, progress: GraphMetricProgress):
        self._progress = progress

    @property
    def progress(self) -> GraphMetricProgress:
        """Latest progress report."""
        return self._progress

    def cancel(self):
        """Ask the calculation to stop at its next cancellation check."""
        logger.debug("Graph metric calculation cancellation requested")
        self._cancel_requested.set()

    @property
    def cancellation_pending(self) -> bool:
        return self._cancel_requested.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None):
        """
        Wait for and return the :class:`GraphMetricResults`.

        Exceptions other than CalculationFailure raised by a calculator are
        re-raised here.
        """
        return self._future.result(timeout)
