"""Prometheus metrics for the memos server.

Metrics:
    memos_requests_total             Counter by route and HTTP status
    memos_request_latency_seconds    Histogram of handler latency by route
    memos_created_total              Counter of memos inserted
    memos_storage_errors_total       Counter of storage failures by operation

Usage::

    from infrastructure.metrics import LatencyTimer, record_request

    with LatencyTimer() as t:
        response = handle()
    record_request(route="list", status=200, latency_seconds=t.elapsed)
"""

from __future__ import annotations

import logging
import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

_REGISTRY = CollectorRegistry()

requests_total = Counter(
    "memos_requests_total",
    "Handled memo page requests by route and status",
    ["route", "status"],
    registry=_REGISTRY,
)

request_latency_seconds = Histogram(
    "memos_request_latency_seconds",
    "Memo page handler latency in seconds",
    ["route"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
    registry=_REGISTRY,
)

memos_created_total = Counter(
    "memos_created_total",
    "Memos inserted through the create form",
    registry=_REGISTRY,
)

storage_errors_total = Counter(
    "memos_storage_errors_total",
    "Storage failures by query-layer operation",
    ["operation"],
    registry=_REGISTRY,
)

logger.debug("Prometheus metrics registry initialized")


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def record_request(*, route: str, status: int, latency_seconds: float) -> None:
    """Record a completed memo page request.

    Args:
        route: Short route name, e.g. "list", "tag", "timeline", "create".
        status: HTTP status code returned.
        latency_seconds: Handler wall-clock time in seconds.
    """
    requests_total.labels(route=route, status=str(status)).inc()
    request_latency_seconds.labels(route=route).observe(latency_seconds)


def record_memo_created() -> None:
    """Increment the created-memo counter."""
    memos_created_total.inc()


def record_storage_error(operation: str) -> None:
    """Increment the storage failure counter.

    Args:
        operation: Query-layer method that failed, e.g. "list_active".
    """
    storage_errors_total.labels(operation=operation).inc()


def get_metrics_response() -> tuple[bytes, str]:
    """Generate Prometheus text exposition format.

    Returns:
        Tuple of (body_bytes, content_type_string).
    """
    return generate_latest(_REGISTRY), CONTENT_TYPE_LATEST


class LatencyTimer:
    """Context manager for measuring latency.

    Usage::

        with LatencyTimer() as t:
            memos = store.list_active()
        record_request(route="list", status=200, latency_seconds=t.elapsed)
    """

    def __init__(self) -> None:
        """Initialize timer."""
        self._start: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> LatencyTimer:
        """Start timing."""
        self._start = time.perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        """Stop timing and record elapsed."""
        self.elapsed = time.perf_counter() - self._start
