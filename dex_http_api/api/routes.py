"""
============================================================================
Lisk DEX HTTP API v1.0.0
DEX Routes - Route Table Registration
============================================================================

Reliability Level: L6 Critical
Input Constraints: Started Gateway
Side Effects: Registers one FastAPI route per RouteSpec

Handlers are generated from ROUTE_TABLE; there is no hand-written
per-endpoint code. Success bodies are JSON, error bodies plain text.

============================================================================
"""

from typing import Callable, Awaitable, Iterable, Optional

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from dex_http_api.logic.gateway import Gateway, GatewayResponse
from dex_http_api.logic.route_table import ROUTE_TABLE, RouteSpec, ViewKind


def to_http_response(result: GatewayResponse) -> Response:
    """Render a GatewayResponse."""
    if result.is_json:
        return JSONResponse(status_code=result.status_code, content=result.content)
    return PlainTextResponse(status_code=result.status_code, content=str(result.content))


def _make_endpoint(gateway: Gateway, spec: RouteSpec) -> Callable[[Request], Awaitable[Response]]:
    async def endpoint(request: Request) -> Response:
        body = await request.body() if spec.forward_body else None
        result = await gateway.handle(spec, dict(request.query_params), body)
        return to_http_response(result)

    endpoint.__name__ = spec.name
    return endpoint


def _tag_for(spec: RouteSpec) -> str:
    if spec.requires_optional_dependency:
        return "Chain"
    if spec.view is ViewKind.NORMALIZED:
        return "GDAX"
    return "DEX"


def build_router(
    gateway: Gateway,
    routes: Optional[Iterable[RouteSpec]] = None
) -> APIRouter:
    """
    Build the router serving the route table.

    Args:
        gateway: Gateway used by every handler
        routes: Route specs to register (default: ROUTE_TABLE)
    """
    router = APIRouter()

    for spec in (ROUTE_TABLE if routes is None else routes):
        router.add_api_route(
            spec.path,
            _make_endpoint(gateway, spec),
            methods=[spec.method],
            name=spec.name,
            summary=f"{spec.dependency.label}:{spec.action}",
            tags=[_tag_for(spec)],
        )

    return router


__all__ = ["build_router", "to_http_response"]
