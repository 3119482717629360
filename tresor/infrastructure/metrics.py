"""Prometheus metrics collection and registry"""

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import (
    Counter, Histogram, Info,
    REGISTRY, generate_latest, CONTENT_TYPE_LATEST
)

from tresor.core.config import settings


metrics_registry = REGISTRY  # Use default registry for compatibility

# ====================
# Service Information
# ====================

service_info = Info(
    "tresor_service",
    "Tresor service information",
    registry=metrics_registry
)

service_info.info({
    "version": settings.app_version,
    "environment": settings.environment,
    "service": "tresor"
})

# ====================
# Credential Metrics
# ====================

# bcrypt is deliberately slow, buckets start around the cost-4 range
CREDENTIAL_BUCKETS = (0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)

password_hash_duration_seconds = Histogram(
    "tresor_password_hash_duration_seconds",
    "Time spent hashing a password",
    buckets=CREDENTIAL_BUCKETS,
    registry=metrics_registry
)

password_verify_duration_seconds = Histogram(
    "tresor_password_verify_duration_seconds",
    "Time spent verifying a password against a stored hash",
    buckets=CREDENTIAL_BUCKETS,
    registry=metrics_registry
)

authentication_attempts_total = Counter(
    "tresor_authentication_attempts_total",
    "Login attempts by outcome",
    ["outcome"],
    registry=metrics_registry
)

password_policy_rejections_total = Counter(
    "tresor_password_policy_rejections_total",
    "Passwords rejected by the strength policy",
    registry=metrics_registry
)


@contextmanager
def track_duration(histogram: Histogram) -> Iterator[None]:
    """Observe the wall time of the enclosed block"""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Render all metrics in the Prometheus text format"""
    return generate_latest(metrics_registry)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST


# ====================
# HTTP Metrics
# ====================

http_requests_total = Counter(
    "tresor_http_requests_total",
    "HTTP requests by method, route and status",
    ["method", "path", "status"],
    registry=metrics_registry
)

http_request_duration_seconds = Histogram(
    "tresor_http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
    registry=metrics_registry
)
