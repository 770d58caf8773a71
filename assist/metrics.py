"""Prometheus metrics for the assist service.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# Assist metrics
# ---------------------------------------------------------------------------

ASSIST_REQUESTS = Counter(
    "assist_requests_total",
    "Total number of AI assist requests",
    ["mode", "status"],  # mode: provider|demo|none, status: ok|invalid|error
)

UPSTREAM_DURATION = Histogram(
    "assist_upstream_duration_seconds",
    "Duration of provider calls in seconds",
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)

# ---------------------------------------------------------------------------
# HTTP request metrics
# ---------------------------------------------------------------------------

HTTP_REQUESTS = Counter(
    "assist_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_DURATION = Histogram(
    "assist_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0, 30.0, 60.0, 120.0),
)
