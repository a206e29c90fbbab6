# ============================================================================
# Lisk DEX HTTP API v1.0.0
# Gateway Logic - Sanitizer, Classifier, Normalizer, Route Table
# ============================================================================

from dex_http_api.logic.error_classifier import (
    GatewayError,
    GatewayErrorKind,
    classify,
)
from dex_http_api.logic.gateway import Gateway, GatewayResponse
from dex_http_api.logic.query_sanitizer import sanitize
from dex_http_api.logic.route_table import ROUTE_TABLE, RouteSpec
from dex_http_api.logic.view_normalizer import to_normalized_view

__all__ = [
    "GatewayError",
    "GatewayErrorKind",
    "classify",
    "Gateway",
    "GatewayResponse",
    "sanitize",
    "ROUTE_TABLE",
    "RouteSpec",
    "to_normalized_view",
]
