"""
============================================================================
Lisk DEX HTTP API v1.0.0
Gateway - Request Orchestration
============================================================================

Reliability Level: L6 Critical
Input Constraints: RouteSpec from the route table, raw query, raw body
Side Effects: One bus invocation per request, warning logs on failure

FLOW:
    RouteSpec -> QuerySanitizer -> channel.invoke(alias:action)
        success -> (ViewNormalizer) -> 200 JSON
        failure -> ErrorClassifier  -> 400 / 500 / 501 text

STARTUP:
    start() resolves the MarketIdentity from <dex>:getMarket and then
    publishes <self>:bootstrap. Nothing is served before that completes.

NO RETRIES:
    A failed invocation is reported once and answered once.

============================================================================
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dex_http_api.config import GatewayConfig
from dex_http_api.logic.error_classifier import (
    GatewayError,
    GatewayErrorKind,
    classify,
    to_gateway_error,
)
from dex_http_api.logic.query_sanitizer import sanitize
from dex_http_api.logic.route_table import (
    Dependency,
    RouteSpec,
    SanitizeRule,
    ViewKind,
)
from dex_http_api.logic.view_normalizer import to_normalized_view
from dex_http_api.observability.metrics import (
    record_gateway_error,
    record_request,
    record_upstream_call,
)
from dex_http_api.schemas.orders import MarketIdentity
from dex_http_api.transport.channel import Channel, CommandId

# Configure module logger
logger = logging.getLogger(__name__)


GET_MARKET_ACTION = "getMarket"
BOOTSTRAP_EVENT = "bootstrap"


@dataclass(frozen=True)
class GatewayResponse:
    """Terminal answer of one request."""
    status_code: int
    content: Any
    is_json: bool = True


class Gateway:
    """
    Composes the route table, sanitizer, bus channel, normalizer and
    error classifier.

    Reliability Level: L6 Critical
    Input Constraints: Channel ready to invoke the DEX module
    Side Effects: Bus invocations, metrics, logs

    Shared state is limited to the market identity, written once by
    start() before any request is served.
    """

    def __init__(
        self,
        channel: Channel,
        dex_module_alias: str,
        module_alias: str,
        base_chain_module_alias: Optional[str] = None,
        quote_chain_module_alias: Optional[str] = None
    ) -> None:
        self._channel = channel
        self._module_alias = module_alias
        self._aliases: Dict[Dependency, Optional[str]] = {
            Dependency.DEX: dex_module_alias,
            Dependency.BASE_CHAIN: base_chain_module_alias,
            Dependency.QUOTE_CHAIN: quote_chain_module_alias,
        }
        self._market_identity: Optional[MarketIdentity] = None

    @classmethod
    def from_config(cls, config: GatewayConfig, channel: Channel) -> "Gateway":
        return cls(
            channel=channel,
            dex_module_alias=config.dex_module_alias,
            module_alias=config.module_alias,
            base_chain_module_alias=config.base_chain_module_alias,
            quote_chain_module_alias=config.quote_chain_module_alias,
        )

    # ------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._market_identity is not None

    @property
    def market_identity(self) -> MarketIdentity:
        if self._market_identity is None:
            raise RuntimeError("Gateway has not been started")
        return self._market_identity

    def resolve_alias(self, dependency: Dependency) -> Optional[str]:
        """Alias configured for a dependency, or None when absent."""
        return self._aliases.get(dependency)

    async def start(self) -> MarketIdentity:
        """
        Resolve the market identity, then announce readiness.

        Raises:
            BusInvocationError: If the engine cannot be reached
            ValueError: If the engine's market payload is malformed
        """
        if self._market_identity is not None:
            return self._market_identity

        dex_alias = self._aliases[Dependency.DEX]
        market = await self._channel.invoke(CommandId(dex_alias, GET_MARKET_ACTION), {})
        self._market_identity = MarketIdentity.from_engine(market)

        logger.info(
            f"[GW-START] Market resolved | market_id={self._market_identity.market_id} | "
            f"dex={dex_alias} | "
            f"base_chain={self._aliases[Dependency.BASE_CHAIN]} | "
            f"quote_chain={self._aliases[Dependency.QUOTE_CHAIN]}"
        )

        self._channel.publish(CommandId(self._module_alias, BOOTSTRAP_EVENT))
        return self._market_identity

    async def stop(self) -> None:
        await self._channel.close()
        logger.info("[GW-STOP] Gateway stopped")

    # ------------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------------

    async def handle(
        self,
        route: RouteSpec,
        query: Mapping[str, Any],
        body: Optional[bytes] = None
    ) -> GatewayResponse:
        """
        Serve one request. Never raises except on cancellation.

        Args:
            route: Route being served
            query: Raw query parameters
            body: Raw request body (forward_body routes only)
        """
        try:
            result = await self._serve(route, query, body)
        except asyncio.CancelledError:
            raise
        except Exception as error:
            return self._error_response(route, error)

        record_request(route.name, 200)
        return GatewayResponse(status_code=200, content=result)

    async def _serve(
        self,
        route: RouteSpec,
        query: Mapping[str, Any],
        body: Optional[bytes]
    ) -> Any:
        alias = self.resolve_alias(route.dependency)
        if alias is None:
            raise GatewayError(
                GatewayErrorKind.DEPENDENCY_UNAVAILABLE,
                f"{route.dependency.label} module alias is not configured"
            )

        if not self.is_ready:
            raise GatewayError(
                GatewayErrorKind.UPSTREAM_FAILURE,
                "Gateway has not resolved the market yet"
            )

        if route.forward_body:
            payload = self._parse_body(body)
        elif route.sanitize is SanitizeRule.NONE:
            payload = dict(query)
        else:
            payload = sanitize(query, route.sanitize.numeric_fields)

        result = await self._invoke(CommandId(alias, route.action), payload)

        if route.view is ViewKind.NORMALIZED:
            if not isinstance(result, list):
                raise GatewayError(
                    GatewayErrorKind.UPSTREAM_FAILURE,
                    f"Expected a list of orders from {alias}:{route.action}, "
                    f"got {type(result).__name__}"
                )
            result = to_normalized_view(result, self.market_identity.market_id, route.side)

        return result

    async def _invoke(self, command: CommandId, payload: Dict[str, Any]) -> Any:
        start_time = time.perf_counter()
        try:
            result = await self._channel.invoke(command, payload)
        except Exception:
            record_upstream_call(command.action, "error", time.perf_counter() - start_time)
            raise
        record_upstream_call(command.action, "ok", time.perf_counter() - start_time)
        return result

    @staticmethod
    def _parse_body(body: Optional[bytes]) -> Any:
        if not body or not body.strip():
            return {}
        try:
            return json.loads(body)
        except ValueError as e:
            raise GatewayError(
                GatewayErrorKind.INVALID_QUERY,
                "request body must be valid JSON",
                source_error=e
            ) from e

    def _error_response(self, route: RouteSpec, error: BaseException) -> GatewayResponse:
        gateway_error = to_gateway_error(error)
        status_code, content = classify(gateway_error)

        source = gateway_error.source_error if gateway_error.source_error is not None else error
        logger.warning(
            f"[{gateway_error.error_code}] {route.method} {route.path} failed | "
            f"kind={gateway_error.kind.value} | status={status_code} | "
            f"error={source!r}"
        )

        record_gateway_error(route.name, gateway_error.kind.value)
        record_request(route.name, status_code)
        return GatewayResponse(status_code=status_code, content=content, is_json=False)


__all__ = [
    "GET_MARKET_ACTION",
    "BOOTSTRAP_EVENT",
    "GatewayResponse",
    "Gateway",
]
