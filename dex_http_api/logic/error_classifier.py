"""
============================================================================
Lisk DEX HTTP API v1.0.0
Error Classifier - Bus Failure to HTTP Status Mapping
============================================================================

Reliability Level: L6 Critical
Input Constraints: Any exception raised while serving a route
Side Effects: None

DECISION RULE (in order):
    1. Embedded source error named InvalidQueryError -> 400 "Invalid query: <msg>"
    2. Anything else                                  -> 500 "Server error"

Routes whose optional chain dependency is not configured never reach the
bus; they carry a DependencyUnavailable GatewayError which maps to 501.

Only the caller-caused category leaks its message. Engine internals stay
behind the generic 500 body.

ERROR CODES:
    GW-400: Invalid query
    GW-500: Upstream failure
    GW-501: Dependency unavailable

============================================================================
"""

from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from dex_http_api.transport.channel import INVALID_QUERY_ERROR, SourceError


# ============================================================================
# CONSTANTS
# ============================================================================

INVALID_QUERY_PREFIX = "Invalid query: "
SERVER_ERROR_BODY = "Server error"


# ============================================================================
# ERROR TAXONOMY
# ============================================================================

class GatewayErrorKind(str, Enum):
    """Classification of a failed request."""
    INVALID_QUERY = "InvalidQuery"
    UPSTREAM_FAILURE = "UpstreamFailure"
    DEPENDENCY_UNAVAILABLE = "DependencyUnavailable"


class GatewayErrorCode:
    """Gateway error codes for audit logging."""
    INVALID_QUERY = "GW-400"
    UPSTREAM_FAILURE = "GW-500"
    DEPENDENCY_UNAVAILABLE = "GW-501"


HTTP_STATUS_BY_KIND = {
    GatewayErrorKind.INVALID_QUERY: 400,
    GatewayErrorKind.UPSTREAM_FAILURE: 500,
    GatewayErrorKind.DEPENDENCY_UNAVAILABLE: 501,
}

ERROR_CODE_BY_KIND = {
    GatewayErrorKind.INVALID_QUERY: GatewayErrorCode.INVALID_QUERY,
    GatewayErrorKind.UPSTREAM_FAILURE: GatewayErrorCode.UPSTREAM_FAILURE,
    GatewayErrorKind.DEPENDENCY_UNAVAILABLE: GatewayErrorCode.DEPENDENCY_UNAVAILABLE,
}


class GatewayError(Exception):
    """
    A request failure after classification.

    Attributes:
        kind: GatewayErrorKind
        message: Message safe to show for this kind
        source_error: The original exception, if any
    """

    def __init__(
        self,
        kind: GatewayErrorKind,
        message: str,
        source_error: Optional[BaseException] = None
    ) -> None:
        self.kind = kind
        self.message = message
        self.source_error = source_error
        super().__init__(message)

    @property
    def error_code(self) -> str:
        return ERROR_CODE_BY_KIND[self.kind]

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]


# ============================================================================
# CLASSIFICATION
# ============================================================================

def _embedded_source_error(error: BaseException) -> Optional[SourceError]:
    """Extract the module-side error carried by a bus failure, if any."""
    source = getattr(error, "source_error", None)
    if source is None:
        return None
    if isinstance(source, SourceError):
        return source
    if isinstance(source, Mapping):
        return SourceError(
            name=str(source.get("name") or ""),
            message=str(source.get("message") or "")
        )
    name: Any = getattr(source, "name", None) or type(source).__name__
    message: Any = getattr(source, "message", None) or str(source)
    return SourceError(name=str(name), message=str(message))


def to_gateway_error(error: BaseException) -> GatewayError:
    """Classify any handler-level exception as a GatewayError."""
    if isinstance(error, GatewayError):
        return error

    source = _embedded_source_error(error)
    if source is not None and source.name == INVALID_QUERY_ERROR:
        return GatewayError(
            GatewayErrorKind.INVALID_QUERY,
            source.message,
            source_error=error
        )

    return GatewayError(
        GatewayErrorKind.UPSTREAM_FAILURE,
        str(error) or type(error).__name__,
        source_error=error
    )


def classify(error: BaseException) -> Tuple[int, str]:
    """
    Map an error to (http_status, response_body).

    Reliability Level: L6 Critical
    Input Constraints: Any exception
    Side Effects: None
    """
    gateway_error = to_gateway_error(error)

    if gateway_error.kind == GatewayErrorKind.INVALID_QUERY:
        return 400, f"{INVALID_QUERY_PREFIX}{gateway_error.message}"
    if gateway_error.kind == GatewayErrorKind.DEPENDENCY_UNAVAILABLE:
        return 501, gateway_error.message
    return 500, SERVER_ERROR_BODY


__all__ = [
    "INVALID_QUERY_PREFIX",
    "SERVER_ERROR_BODY",
    "GatewayErrorKind",
    "GatewayErrorCode",
    "GatewayError",
    "HTTP_STATUS_BY_KIND",
    "to_gateway_error",
    "classify",
]
