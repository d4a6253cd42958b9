"""
Idempotent Prometheus metric registration.

Re-importing a metrics module (test reloads, multiple interceptors in one
process) must return the already registered collector instead of failing
with a duplicate timeseries error.
"""

from prometheus_client import REGISTRY, Counter, Histogram


def _registered(name: str):
    return REGISTRY._names_to_collectors[name]


def _get_or_create_counter(
    name: str, doc: str, labels: list[str] | None = None
) -> Counter:
    try:
        return Counter(name, doc, labels or ())
    except ValueError:
        return _registered(name)


def _get_or_create_histogram(
    name: str,
    doc: str,
    labels: list[str] | None = None,
    buckets: tuple[float, ...] = Histogram.DEFAULT_BUCKETS,
) -> Histogram:
    try:
        return Histogram(name, doc, labels or (), buckets=buckets)
    except ValueError:
        return _registered(name)
