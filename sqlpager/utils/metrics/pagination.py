"""
Prometheus metrics for pagination engine monitoring.

This module defines metrics for tracking intercepted statements, count
statement cache efficiency and query step durations.
"""

from sqlpager.utils.metrics._helpers import (
    _get_or_create_counter,
    _get_or_create_histogram,
)

pagination_requests_total = _get_or_create_counter(
    "sqlpager_requests_total",
    "Total statements handled by the page interceptor",
    ["dialect", "outcome"],  # outcome: passthrough, empty, paged
)

pagination_step_duration_seconds = _get_or_create_histogram(
    "sqlpager_step_duration_seconds",
    "Duration of count and page query steps in seconds",
    ["step"],  # step: count, page
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

statement_cache_hits_total = _get_or_create_counter(
    "sqlpager_statement_cache_hits_total",
    "Total count statement cache hits",
)

statement_cache_misses_total = _get_or_create_counter(
    "sqlpager_statement_cache_misses_total",
    "Total count statement cache misses",
)

statement_cache_evictions_total = _get_or_create_counter(
    "sqlpager_statement_cache_evictions_total",
    "Total count statements evicted from the LRU cache",
)

__all__ = [
    "pagination_requests_total",
    "pagination_step_duration_seconds",
    "statement_cache_hits_total",
    "statement_cache_misses_total",
    "statement_cache_evictions_total",
]
