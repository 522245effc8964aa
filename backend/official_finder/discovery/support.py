"""
Provider performance monitoring: per-call metrics and aggregated stats.
"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Optional


@dataclass
class ProviderCallMetric:
    provider: str
    query: str
    start_time: float
    end_time: Optional[float] = None
    success: bool = False
    result_count: int = 0
    error_message: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        return (self.end_time or self.start_time) - self.start_time


@dataclass
class ProviderStats:
    total_calls: int = 0
    successful_calls: int = 0
    failed_calls: int = 0
    total_results: int = 0
    avg_duration_seconds: float = 0.0
    max_duration_seconds: float = 0.0
    last_error: Optional[str] = None


class PerformanceMonitor:
    def __init__(self, max_metrics: int = 1000):
        self._metrics: list[ProviderCallMetric] = []
        self._lock = Lock()
        self._max_metrics = max_metrics

    def start_call(self, provider: str, query: str) -> ProviderCallMetric:
        return ProviderCallMetric(provider=provider, query=query, start_time=time.time())

    def _append(self, metric: ProviderCallMetric):
        with self._lock:
            self._metrics.append(metric)
            if len(self._metrics) > self._max_metrics:
                self._metrics = self._metrics[-self._max_metrics :]

    def record_success(self, metric: ProviderCallMetric, result_count: int):
        metric.end_time = time.time()
        metric.success = True
        metric.result_count = result_count
        self._append(metric)

    def record_error(self, metric: ProviderCallMetric, error_message: str):
        metric.end_time = time.time()
        metric.error_message = error_message
        self._append(metric)

    def get_stats(self, provider: Optional[str] = None) -> ProviderStats:
        with self._lock:
            metrics = self._metrics.copy()
        if provider:
            metrics = [m for m in metrics if m.provider == provider]
        if not metrics:
            return ProviderStats()
        successful = [m for m in metrics if m.success]
        failed = [m for m in metrics if not m.success]
        durations = [m.duration_seconds for m in metrics]
        return ProviderStats(
            total_calls=len(metrics),
            successful_calls=len(successful),
            failed_calls=len(failed),
            total_results=sum(m.result_count for m in successful),
            avg_duration_seconds=sum(durations) / len(durations),
            max_duration_seconds=max(durations),
            last_error=failed[-1].error_message if failed else None,
        )

    def reset(self):
        with self._lock:
            self._metrics = []


_performance_monitor = PerformanceMonitor()


def get_performance_monitor() -> PerformanceMonitor:
    return _performance_monitor
