# ============================================================================
# Lisk DEX HTTP API v1.0.0
# Bus Transport Module
# ============================================================================

from dex_http_api.transport.channel import (
    INVALID_QUERY_ERROR,
    BusInvocationError,
    Channel,
    CommandId,
    InvalidQueryError,
    LocalChannel,
    SourceError,
)
from dex_http_api.transport.http_channel import HttpChannel

__all__ = [
    "INVALID_QUERY_ERROR",
    "BusInvocationError",
    "Channel",
    "CommandId",
    "HttpChannel",
    "InvalidQueryError",
    "LocalChannel",
    "SourceError",
]
