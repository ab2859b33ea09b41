"""Prometheus metrics for trip API calls."""

from prometheus_client import Counter, Histogram

trip_api_latency_ms = Histogram(
    "trip_api_latency_ms",
    "Trip API call latency in milliseconds",
    ["operation", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, 10000],
)

trip_api_errors_total = Counter(
    "trip_api_errors_total",
    "Total trip API call errors",
    ["operation", "reason"],
)


class PrometheusApiMetrics:
    """Prometheus-based trip API metrics implementation."""

    def record_latency(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record call latency."""
        trip_api_latency_ms.labels(operation=operation, outcome=outcome).observe(latency_ms)

    def inc_error(self, operation: str, reason: str) -> None:
        """Increment error counter."""
        trip_api_errors_total.labels(operation=operation, reason=reason).inc()
