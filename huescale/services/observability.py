"""
Observability metrics collection for the Huescale palette pipeline.

Provides a performance_monitor context manager and a thread-safe collector
that aggregates durations per operation.
"""

import time
import threading
from collections import defaultdict, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np
import psutil
from loguru import logger

from huescale.config import config


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single pipeline operation."""
    operation_name: str
    duration_ms: float
    memory_usage_mb: float
    timestamp: float
    context: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


class MetricsCollector:
    """Thread-safe metrics collector for palette operations."""

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self._lock = threading.Lock()
        self._metrics_history: deque = deque(maxlen=max_history)
        self._operation_counts = defaultdict(int)
        self._error_counts = defaultdict(int)
        self._durations = defaultdict(lambda: deque(maxlen=100))

    def record_performance(self, metrics: PerformanceMetrics) -> None:
        """Record performance metrics for an operation."""
        with self._lock:
            self._metrics_history.append(metrics)
            self._operation_counts[metrics.operation_name] += 1
            if metrics.error:
                self._error_counts[metrics.operation_name] += 1
            self._durations[metrics.operation_name].append(metrics.duration_ms)

    def get_operation_stats(self, operation_name: str) -> Dict[str, Any]:
        """Get aggregated statistics for a specific operation."""
        with self._lock:
            durations = list(self._durations.get(operation_name, ()))
            if not durations:
                return {}
            calls = self._operation_counts[operation_name]
            errors = self._error_counts[operation_name]

        return {
            'operation_name': operation_name,
            'total_calls': calls,
            'error_count': errors,
            'error_rate': errors / max(1, calls),
            'duration_stats': {
                'mean_ms': float(np.mean(durations)),
                'median_ms': float(np.median(durations)),
                'p95_ms': float(np.percentile(durations, 95)),
                'max_ms': float(np.max(durations))
            }
        }

    def get_all_stats(self) -> Dict[str, Any]:
        """Get aggregated statistics for all operations."""
        with self._lock:
            names = list(self._operation_counts.keys())
            total = sum(self._operation_counts.values())
            total_errors = sum(self._error_counts.values())

        return {
            'operations': {name: self.get_operation_stats(name) for name in names},
            'total_operations': total,
            'total_errors': total_errors,
            'overall_error_rate': total_errors / max(1, total)
        }

    def reset(self) -> None:
        """Drop all recorded metrics."""
        with self._lock:
            self._metrics_history.clear()
            self._operation_counts.clear()
            self._error_counts.clear()
            self._durations.clear()


_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector."""
    return _metrics_collector


def reset_metrics() -> None:
    """Reset the global metrics collector."""
    _metrics_collector.reset()


@contextmanager
def performance_monitor(operation_name: str, **context):
    """Context manager for monitoring performance of operations."""
    if not config.METRICS_ENABLED:
        yield
        return

    start_time = time.perf_counter()
    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        memory_mb = psutil.Process().memory_info().rss / 1024 / 1024

        metrics = PerformanceMetrics(
            operation_name=operation_name,
            duration_ms=duration_ms,
            memory_usage_mb=memory_mb,
            timestamp=time.time(),
            context=context,
            error=error_msg
        )
        _metrics_collector.record_performance(metrics)

        if error_msg:
            logger.error(f"Operation {operation_name} failed after {duration_ms:.1f}ms: {error_msg}")
        else:
            logger.debug(f"Operation {operation_name} completed in {duration_ms:.1f}ms "
                         f"(memory: {memory_mb:.1f}MB)")
