"""
Prometheus metrics definitions and utilities.

All metrics are re-exported here:

    from sqlpager.utils.metrics import statement_cache_hits_total

New code should use the MetricsCollector facade:

    from sqlpager.utils.metrics import MetricsCollector
    MetricsCollector.record_statement_cache_hit()
"""

from sqlpager.utils.metrics.collector import MetricsCollector
from sqlpager.utils.metrics.pagination import (
    pagination_requests_total,
    pagination_step_duration_seconds,
    statement_cache_evictions_total,
    statement_cache_hits_total,
    statement_cache_misses_total,
)

__all__ = [
    "MetricsCollector",
    "pagination_requests_total",
    "pagination_step_duration_seconds",
    "statement_cache_evictions_total",
    "statement_cache_hits_total",
    "statement_cache_misses_total",
]
