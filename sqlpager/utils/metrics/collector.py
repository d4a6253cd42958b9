"""
Facade for centralized metrics emission.

Provides high-level methods for recording metrics without exposing
Prometheus implementation details to the rest of the codebase.
"""


class MetricsCollector:
    """
    Centralized facade for all Prometheus metrics.

    All methods are static for easy use without instantiation.
    """

    # ========== Interceptor Metrics ==========

    @staticmethod
    def record_request(dialect: str, outcome: str) -> None:
        """
        Record a handled statement.

        Args:
            dialect: Name of the active dialect.
            outcome: One of 'passthrough', 'empty', 'paged'
        """
        from sqlpager.utils.metrics import pagination_requests_total

        pagination_requests_total.labels(
            dialect=dialect, outcome=outcome
        ).inc()

    @staticmethod
    def record_step_duration(step: str, duration: float) -> None:
        """
        Record duration of a query step.

        Args:
            step: One of 'count', 'page'
            duration: Duration in seconds
        """
        from sqlpager.utils.metrics import pagination_step_duration_seconds

        pagination_step_duration_seconds.labels(step=step).observe(duration)

    # ========== Statement Cache Metrics ==========

    @staticmethod
    def record_statement_cache_hit() -> None:
        """Record count statement cache hit."""
        from sqlpager.utils.metrics import statement_cache_hits_total

        statement_cache_hits_total.inc()

    @staticmethod
    def record_statement_cache_miss() -> None:
        """Record count statement cache miss."""
        from sqlpager.utils.metrics import statement_cache_misses_total

        statement_cache_misses_total.inc()

    @staticmethod
    def record_statement_cache_eviction() -> None:
        """Record LRU eviction from the count statement cache."""
        from sqlpager.utils.metrics import statement_cache_evictions_total

        statement_cache_evictions_total.inc()
