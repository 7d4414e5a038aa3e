"""Prometheus metric definitions for the payment service."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


payment_requests_total = Counter("payment_requests_total", "Total payment requests", ["service"])
payment_success_total = Counter("payment_success_total", "Total recorded payments", ["service"])
payment_rejected_total = Counter(
    "payment_rejected_total",
    "Payment submissions rejected by validation",
    ["service", "reason"],
)
payment_failure_total = Counter("payment_failure_total", "Payment inserts failed in the store", ["service"])
db_probe_failures_total = Counter("db_probe_failures_total", "Failed database availability probes", ["service"])
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
