"""
============================================================================
Lisk DEX HTTP API v1.0.0
Prometheus Metrics - Gateway Observability
============================================================================

Reliability Level: STANDARD
Input Constraints: Route names from the route table
Side Effects: Updates Prometheus metrics registry

METRICS EXPOSED
---------------
- dex_http_api_requests_total: Requests handled, by route and HTTP status
- dex_http_api_errors_total: Failed requests, by route and error kind
- dex_http_api_upstream_latency_seconds: Bus invocation latency, by action and outcome

Recording a metric never raises into a request handler.

============================================================================
"""

import logging

from prometheus_client import Counter, Histogram

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# PROMETHEUS METRICS DEFINITIONS
# ============================================================================

GATEWAY_REQUESTS = Counter(
    "dex_http_api_requests_total",
    "Total number of HTTP requests handled by the DEX gateway",
    ["route", "status"]
)

GATEWAY_ERRORS = Counter(
    "dex_http_api_errors_total",
    "Total number of failed DEX gateway requests",
    ["route", "kind"]
)

UPSTREAM_LATENCY = Histogram(
    "dex_http_api_upstream_latency_seconds",
    "Latency of bus invocations made by the DEX gateway",
    ["action", "outcome"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)


# ============================================================================
# METRIC UPDATE FUNCTIONS
# ============================================================================

def record_request(route: str, status: int) -> None:
    """Count one answered request."""
    try:
        GATEWAY_REQUESTS.labels(route=route, status=str(status)).inc()
    except Exception as e:
        logger.error(f"[OBS-001] Failed to record request metric | error={e}")


def record_gateway_error(route: str, kind: str) -> None:
    """Count one failed request by GatewayError kind."""
    try:
        GATEWAY_ERRORS.labels(route=route, kind=kind).inc()
    except Exception as e:
        logger.error(f"[OBS-002] Failed to record error metric | error={e}")


def record_upstream_call(action: str, outcome: str, seconds: float) -> None:
    """Observe one bus invocation ("ok" or "error")."""
    try:
        UPSTREAM_LATENCY.labels(action=action, outcome=outcome).observe(seconds)
    except Exception as e:
        logger.error(f"[OBS-003] Failed to record upstream latency | error={e}")


__all__ = [
    "GATEWAY_REQUESTS",
    "GATEWAY_ERRORS",
    "UPSTREAM_LATENCY",
    "record_request",
    "record_gateway_error",
    "record_upstream_call",
]
