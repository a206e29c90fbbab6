"""
============================================================================
Lisk DEX HTTP API v1.0.0
Observability Module - Logging and Prometheus Metrics
============================================================================
"""

from dex_http_api.observability.logging_setup import configure_logging
from dex_http_api.observability.metrics import (
    GATEWAY_REQUESTS,
    GATEWAY_ERRORS,
    UPSTREAM_LATENCY,
    record_request,
    record_gateway_error,
    record_upstream_call,
)

__all__ = [
    "configure_logging",
    "GATEWAY_REQUESTS",
    "GATEWAY_ERRORS",
    "UPSTREAM_LATENCY",
    "record_request",
    "record_gateway_error",
    "record_upstream_call",
]
