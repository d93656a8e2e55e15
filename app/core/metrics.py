"""Prometheus metrics for upstream provider calls and what-if analyses."""

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram

# Histogram buckets for upstream response times (in seconds)
DURATION_BUCKETS = (0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

upstream_requests_total = Counter(
    "upstream_requests_total",
    "Total number of requests sent to upstream data providers",
    labelnames=["provider", "operation", "status"],
)

upstream_request_duration_seconds = Histogram(
    "upstream_request_duration_seconds",
    "Response time of upstream data providers",
    labelnames=["provider", "operation"],
    buckets=DURATION_BUCKETS,
)

whatif_analyses_total = Counter(
    "whatif_analyses_total",
    "Total number of what-if analyses by input mode and outcome",
    labelnames=["mode", "outcome"],
)


@contextmanager
def track_upstream_call(provider: str, operation: str) -> Iterator[None]:
    """Record duration and success/error status of a single upstream call."""
    start = time.perf_counter()
    status = "success"
    try:
        yield
    except Exception:
        status = "error"
        raise
    finally:
        upstream_request_duration_seconds.labels(
            provider=provider, operation=operation
        ).observe(time.perf_counter() - start)
        upstream_requests_total.labels(
            provider=provider, operation=operation, status=status
        ).inc()


def record_analysis(mode: str, outcome: str) -> None:
    whatif_analyses_total.labels(mode=mode, outcome=outcome).inc()
