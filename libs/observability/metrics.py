"""Metrics and observability infrastructure for TalentMatch.

A small in-process abstraction for counters, histograms and step timers that
can later be backed by Prometheus or OpenTelemetry without touching callers.
"""
from __future__ import annotations
import json
import logging
import threading
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class MetricData:
    """Container for metric data point"""
    name: str
    value: float
    tags: Dict[str, str] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    type: str = "counter"  # counter, histogram, gauge


class MetricsCollector:
    """Thread-safe metrics collector with in-memory storage."""

    def __init__(self):
        self._metrics: Dict[str, List[MetricData]] = defaultdict(list)
        self._lock = threading.Lock()

    def counter(self, name: str, value: float = 1.0, tags: Optional[Dict[str, str]] = None) -> None:
        """Record a counter metric (cumulative value)"""
        self._record(name, value, tags or {}, "counter")

    def histogram(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Record a histogram metric (distribution of values)"""
        self._record(name, value, tags or {}, "histogram")

    def gauge(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Record a gauge metric (current state)"""
        self._record(name, value, tags or {}, "gauge")

    def timer(self, name: str, tags: Optional[Dict[str, str]] = None):
        """Context manager for timing operations"""
        return TimerContext(self, name, tags or {})

    def _record(self, name: str, value: float, tags: Dict[str, str], metric_type: str) -> None:
        with self._lock:
            self._metrics[name].append(MetricData(
                name=name,
                value=value,
                tags=tags,
                type=metric_type
            ))

    def get_metrics(self, name: Optional[str] = None) -> Dict[str, List[MetricData]]:
        """Get recorded metrics, optionally filtered by name"""
        with self._lock:
            if name:
                return {name: list(self._metrics.get(name, []))}
            return {k: list(v) for k, v in self._metrics.items()}

    def get_stats(self) -> Dict[str, Any]:
        """Get summary statistics of recorded metrics"""
        with self._lock:
            stats = {}
            for name, metrics in self._metrics.items():
                if metrics:
                    values = [m.value for m in metrics]
                    stats[name] = {
                        'count': len(values),
                        'latest': values[-1],
                        'sum': sum(values),
                        'avg': sum(values) / len(values)
                    }
            return stats

    def clear(self) -> None:
        """Clear all recorded metrics"""
        with self._lock:
            self._metrics.clear()


class TimerContext:
    """Context manager for measuring operation duration"""

    def __init__(self, collector: MetricsCollector, name: str, tags: Dict[str, str]):
        self.collector = collector
        self.name = name
        self.tags = tags
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            duration = time.perf_counter() - self.start_time
            tags = dict(self.tags)
            tags['outcome'] = 'error' if exc_type else 'ok'
            self.collector.histogram(f"{self.name}.duration_ms", duration * 1000, tags)


_global_metrics = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance"""
    return _global_metrics


def counter(name: str, value: float = 1.0, tags: Optional[Dict[str, str]] = None) -> None:
    """Record a counter metric using global collector"""
    _global_metrics.counter(name, value, tags)


def histogram(name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
    """Record a histogram metric using global collector"""
    _global_metrics.histogram(name, value, tags)


def gauge(name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
    """Record a gauge metric using global collector"""
    _global_metrics.gauge(name, value, tags)


def timer(name: str, tags: Optional[Dict[str, str]] = None):
    """Context manager for timing operations using global collector"""
    return _global_metrics.timer(name, tags)


class PerformanceMetrics:
    """Centralized names of the metrics the ingestion pipeline records"""

    INGESTION_REQUESTS = "ingestion.requests"
    INGESTION_FAILURES = "ingestion.failures"

    EMBEDDING_CALLS = "embedding.calls"
    ANALYSIS_CALLS = "analysis.calls"
    RESUME_EXTRACTIONS = "resume.extractions"

    VECTOR_UPSERTS = "vector_store.upserts"
    VECTOR_QUERIES = "vector_store.queries"
    VECTOR_MATCHES_RETURNED = "vector_store.matches_returned"


class StructuredLogger:
    """Message + JSON context on top of a stdlib logger"""

    def __init__(self, name: str = "talentmatch"):
        self.name = name
        self._logger = logging.getLogger(name)

    def info(self, msg: str, **kwargs) -> None:
        self._log(logging.INFO, msg, kwargs)

    def error(self, msg: str, **kwargs) -> None:
        self._log(logging.ERROR, msg, kwargs)

    def warning(self, msg: str, **kwargs) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def debug(self, msg: str, **kwargs) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def _log(self, level: int, msg: str, context: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        # callers pass context either as keywords or as extra={...}
        extra = context.pop('extra', None) or {}
        context = {**extra, **context}
        if context:
            self._logger.log(level, "%s | %s", msg, json.dumps(context, default=str))
        else:
            self._logger.log(level, msg)


def get_logger(name: str = "talentmatch") -> StructuredLogger:
    """Get a structured logger instance"""
    return StructuredLogger(name)
