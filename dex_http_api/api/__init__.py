# ============================================================================
# Lisk DEX HTTP API v1.0.0
# API Routes Module
# ============================================================================

from dex_http_api.api.routes import build_router

__all__ = ["build_router"]
