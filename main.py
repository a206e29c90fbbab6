#!/usr/bin/env python3
"""
============================================================================
Lisk DEX HTTP API v1.0.0
Process Entry Point
============================================================================

Loads .env, configures logging and serves the gateway with uvicorn.

USAGE:
    python main.py

============================================================================
"""

import logging
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from dex_http_api.config import GatewayConfigurationError, get_gateway_config  # noqa: E402
from dex_http_api.main import create_app  # noqa: E402
from dex_http_api.observability.logging_setup import configure_logging  # noqa: E402

logger = logging.getLogger("dex_http_api.entrypoint")


def main() -> int:
    try:
        config = get_gateway_config()
    except GatewayConfigurationError as e:
        print(f"[CRITICAL] {e}", file=sys.stderr)
        return 1

    configure_logging(config)
    app = create_app(config)

    logger.info(f"[GW-ENTRY] Listening on {config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
