"""Performance profiler for batch conversions."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one batch operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    units: int
    failed_units: int
    keys: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float


class PerformanceProfiler:
    """
    Records duration and memory usage of batch operations.

    Metrics are logged when an operation stops and kept in
    ``metrics_history`` for summaries.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0
        self._counts: Dict[str, int] = {"units": 0, "failed_units": 0, "keys": 0}

    @contextmanager
    def profile_operation(self, operation_name: str):
        """
        Context manager for profiling operations.

        The body may call ``record`` on the yielded profiler to report
        how many units and keys it processed. Every call profiles with its
        own session, so operations may overlap; finished metrics are added
        to this profiler's ``metrics_history``.
        """
        session = PerformanceProfiler(self.logger)
        session.metrics_history = self.metrics_history
        session.start_profiling(operation_name)
        try:
            yield session
        finally:
            session.stop_profiling(**session._counts)

    def record(self, units: int = 0, failed_units: int = 0, keys: int = 0) -> None:
        """Add processed unit and key counts to the running operation."""
        self._counts["units"] += units
        self._counts["failed_units"] += failed_units
        self._counts["keys"] += keys
        self.sample_performance()

    def start_profiling(self, operation_name: str) -> None:
        """
        Start profiling an operation.

        Args:
            operation_name: Name of the operation
        """
        self.current_operation = operation_name
        self.start_time = time.time()
        self.start_memory = self._memory_mb()
        self.peak_memory = self.start_memory

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self) -> None:
        """Sample current memory usage."""
        if not self.current_operation:
            return

        self.peak_memory = max(self.peak_memory, self._memory_mb())

    def stop_profiling(self, units: int = 0, failed_units: int = 0, keys: int = 0) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Args:
            units: Number of units (columns or documents) processed
            failed_units: Number of units that failed
            keys: Number of flat keys processed

        Returns:
            PerformanceMetrics object with collected data
        """
        if not self.current_operation or not self.start_time:
            raise ValueError("No active profiling session")

        end_time = time.time()
        end_memory = self._memory_mb()
        self.peak_memory = max(self.peak_memory, end_memory)

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=end_time - self.start_time,
            units=units,
            failed_units=failed_units,
            keys=keys,
            memory_peak_mb=self.peak_memory,
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory
        )
        self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {self.current_operation}:")
        self.logger.info(f"  Duration: {metrics.duration:.2f}s")
        self.logger.info(f"  Units: {units} ({failed_units} failed), keys: {keys}")
        self.logger.info(f"  Memory Peak: {self.peak_memory:.1f} MB")

        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": sum(m.duration for m in self.metrics_history),
            "total_units": sum(m.units for m in self.metrics_history),
            "total_failed_units": sum(m.failed_units for m in self.metrics_history),
            "total_keys": sum(m.keys for m in self.metrics_history),
            "max_memory_peak_mb": max(m.memory_peak_mb for m in self.metrics_history),
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "units": m.units,
                    "memory_peak": m.memory_peak_mb
                }
                for m in self.metrics_history
            ]
        }

    def _memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")
            return self.start_memory or 0.0
