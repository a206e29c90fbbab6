"""
============================================================================
Lisk DEX HTTP API v1.0.0
FastAPI Application Factory
============================================================================

Reliability Level: L6 Critical
Input Constraints: GatewayConfig, bus Channel
Side Effects: Bus invocations, market resolution at startup

HTTP API follows the Coinbase/GDAX format and conventions for the
/gdax/* endpoints: https://docs.pro.coinbase.com/

Startup:
    - Resolve the market identity from the DEX module (fatal on failure)
    - Publish <module_alias>:bootstrap

Shutdown:
    - Close the bus channel

============================================================================
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from dex_http_api import MODULE_AUTHOR, MODULE_NAME, __version__
from dex_http_api.api.routes import build_router
from dex_http_api.config import GatewayConfig, get_gateway_config
from dex_http_api.logic.error_classifier import GatewayErrorCode, SERVER_ERROR_BODY
from dex_http_api.logic.gateway import Gateway
from dex_http_api.transport.channel import Channel
from dex_http_api.transport.http_channel import HttpChannel

# Configure module logger
logger = logging.getLogger(__name__)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.warning(
        f"[{GatewayErrorCode.UPSTREAM_FAILURE}] Unhandled exception | "
        f"{request.method} {request.url.path} | error={exc!r}"
    )
    return PlainTextResponse(status_code=500, content=SERVER_ERROR_BODY)


def create_app(
    config: Optional[GatewayConfig] = None,
    channel: Optional[Channel] = None
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        config: Gateway configuration (default: from environment)
        channel: Bus channel (default: HttpChannel to config.bus_url)
    """
    config = config or get_gateway_config()
    channel = channel or HttpChannel(
        bus_url=config.bus_url,
        timeout=config.bus_timeout_seconds
    )
    gateway = Gateway.from_config(config, channel)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"[GW-START] {MODULE_NAME} v{__version__} starting | "
            f"config={config.to_dict()}"
        )
        await gateway.start()
        try:
            yield
        finally:
            await gateway.stop()

    app = FastAPI(
        title="Lisk DEX HTTP API",
        description=(
            "Read/write HTTP gateway for the Lisk DEX module.\n\n"
            "The /gdax/* endpoints follow the Coinbase Pro (GDAX) order schema."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.gateway = gateway
    app.state.config = config

    if config.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.add_exception_handler(Exception, _unhandled_exception_handler)

    app.include_router(build_router(gateway))

    @app.get(
        "/health",
        summary="Health Check",
        description="Reports whether the market identity has been resolved.",
        tags=["System"]
    )
    async def health_check():
        if not gateway.is_ready:
            return JSONResponse(status_code=503, content={"status": "starting"})
        return {"status": "healthy", "market": gateway.market_identity.market_id}

    @app.get(
        "/info",
        summary="Module Info",
        tags=["System"]
    )
    async def module_info():
        return {"name": MODULE_NAME, "version": __version__, "author": MODULE_AUTHOR}

    @app.get(
        "/metrics",
        summary="Prometheus Metrics",
        description="Exposes Prometheus metrics for observability.",
        tags=["Observability"]
    )
    async def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


__all__ = ["create_app"]
