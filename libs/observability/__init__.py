"""Observability module for TalentMatch"""
from .metrics import (
    MetricsCollector,
    get_metrics_collector,
    counter,
    histogram,
    gauge,
    timer,
    PerformanceMetrics,
    StructuredLogger,
    get_logger
)

__all__ = [
    'MetricsCollector',
    'get_metrics_collector',
    'counter',
    'histogram',
    'gauge',
    'timer',
    'PerformanceMetrics',
    'StructuredLogger',
    'get_logger'
]
