"""Prometheus metrics definitions for the dashboard.

Request counters and histograms are updated by the request-logging
middleware; the Engine metrics are updated by the Engine client.  All of
them are scraped via the ``/metrics`` endpoint.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNT = Counter(
    "dockdash_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "dockdash_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(
        0.01, 0.025, 0.05, 0.1, 0.25,
        0.5, 1.0, 2.5, 5.0, 10.0,
    ),
)

ENGINE_REQUESTS = Counter(
    "dockdash_engine_requests_total",
    "Requests sent to the Docker Engine API",
    ["endpoint", "outcome"],
)

ENGINE_UP = Gauge(
    "dockdash_engine_up",
    "Whether the Docker Engine answered the last request (1=up, 0=down)",
)

UNMATCHED_ENDPOINT = "unmatched"


def observe_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record one handled request.

    *endpoint* must be a route template (or ``UNMATCHED_ENDPOINT``), never
    the raw request path, so the number of series stays bounded.
    """
    REQUEST_COUNT.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()
    REQUEST_DURATION.labels(
        method=method,
        endpoint=endpoint,
    ).observe(duration_seconds)
