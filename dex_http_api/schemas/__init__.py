# ============================================================================
# Lisk DEX HTTP API v1.0.0
# Pydantic Schemas - Market Identity and Exchange Views
# ============================================================================

from dex_http_api.schemas.orders import (
    MarketIdentity,
    NormalizedOrderView,
    OrderSide,
)

__all__ = ["MarketIdentity", "NormalizedOrderView", "OrderSide"]
