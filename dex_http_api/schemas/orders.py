"""
============================================================================
Lisk DEX HTTP API v1.0.0
Order Schemas - GDAX-Style Exchange View
============================================================================

Reliability Level: L6 Critical
Input Constraints: Engine payloads as returned over the bus
Side Effects: None

The normalized view follows the Coinbase Pro (GDAX) order object:
https://docs.pro.coinbase.com/#list-orders

It is a display-only projection of the engine's open orders. Fill and fee
fields are fixed literals; the view cannot be turned back into engine state.

============================================================================
"""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# CONSTANTS
# ============================================================================

ZERO_FEE = "0.0000000000000000"
ZERO_SIZE = "0.00000000"
ZERO_VALUE = "0.0000000000000000"

SELF_TRADE_PREVENTION = "dc"
ORDER_TYPE = "limit"
TIME_IN_FORCE = "GTC"
ORDER_STATUS = "open"


# ============================================================================
# ENUMS
# ============================================================================

class OrderSide(str, Enum):
    """Side of a normalized order."""
    BUY = "buy"
    SELL = "sell"


# ============================================================================
# MODELS
# ============================================================================

class MarketIdentity(BaseModel):
    """
    The market served by the engine, resolved once at startup.

    Reliability Level: L6 Critical
    Input Constraints: Both symbols non-empty
    Side Effects: None
    """

    model_config = ConfigDict(frozen=True)

    base_symbol: str = Field(..., min_length=1)
    quote_symbol: str = Field(..., min_length=1)

    @property
    def market_id(self) -> str:
        """Display identifier, "<quote>-<base>" (e.g. "LSK-CLSK")."""
        return f"{self.quote_symbol}-{self.base_symbol}"

    @classmethod
    def from_engine(cls, payload: Dict[str, Any]) -> "MarketIdentity":
        """
        Build from the engine's getMarket reply.

        Raises:
            ValueError: If either symbol is missing
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Market payload must be an object, got {type(payload).__name__}")
        base_symbol = payload.get("baseSymbol")
        quote_symbol = payload.get("quoteSymbol")
        if not base_symbol or not quote_symbol:
            raise ValueError(
                "Market payload must contain baseSymbol and quoteSymbol, "
                f"got keys: {sorted(payload.keys())}"
            )
        return cls(base_symbol=str(base_symbol), quote_symbol=str(quote_symbol))


class NormalizedOrderView(BaseModel):
    """GDAX-style open order record."""

    id: Any
    price: Any
    size: Any
    product_id: str
    side: OrderSide
    stp: str = SELF_TRADE_PREVENTION
    type: str = ORDER_TYPE
    time_in_force: str = TIME_IN_FORCE
    post_only: bool = False
    created_at: Any = None
    fill_fees: str = ZERO_FEE
    filled_size: str = ZERO_SIZE
    executed_value: str = ZERO_VALUE
    status: str = ORDER_STATUS
    settled: bool = False


__all__ = [
    "ZERO_FEE",
    "ZERO_SIZE",
    "ZERO_VALUE",
    "OrderSide",
    "MarketIdentity",
    "NormalizedOrderView",
]
