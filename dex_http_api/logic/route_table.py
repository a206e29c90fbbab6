"""
============================================================================
Lisk DEX HTTP API v1.0.0
Route Table - External Endpoint to Bus Action Mapping
============================================================================

Reliability Level: L6 Critical
Input Constraints: None (static data)
Side Effects: None

Every HTTP endpoint of the gateway is one RouteSpec. The table is built
once at import time and never mutated; the API layer iterates it to
register handlers.

ENDPOINTS:
    GET  /status                    -> <dex>:getStatus
    GET  /orders/bids               -> <dex>:getBids
    GET  /orders/asks               -> <dex>:getAsks
    GET  /orders                    -> <dex>:getOrders
    GET  /order-book                -> <dex>:getOrderBook
    GET  /prices/recent             -> <dex>:getRecentPrices
    GET  /transfers/pending         -> <dex>:getPendingTransfers
    GET  /transfers/recent          -> <dex>:getRecentTransfers
    GET  /gdax/orders/bids          -> <dex>:getBids    (normalized, buy)
    GET  /gdax/orders/asks          -> <dex>:getAsks    (normalized, sell)
    GET  /gdax/orders               -> <dex>:getOrders  (normalized, per record)
    GET  /chain/base/account        -> <base chain>:getAccount
    GET  /chain/quote/account       -> <quote chain>:getAccount
    POST /chain/base/transaction    -> <base chain>:postTransaction
    POST /chain/quote/transaction   -> <quote chain>:postTransaction

============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from dex_http_api.logic.query_sanitizer import (
    ORDER_BOOK_NUMERIC_FIELDS,
    STANDARD_NUMERIC_FIELDS,
)
from dex_http_api.schemas.orders import OrderSide


# ============================================================================
# ENUMS
# ============================================================================

class SanitizeRule(str, Enum):
    """Which query sanitization a route applies."""
    NONE = "none"
    STANDARD = "standard"
    ORDER_BOOK = "order_book"

    @property
    def numeric_fields(self) -> Tuple[str, ...]:
        if self is SanitizeRule.ORDER_BOOK:
            return ORDER_BOOK_NUMERIC_FIELDS
        return STANDARD_NUMERIC_FIELDS


class ViewKind(str, Enum):
    """How a successful result is rendered."""
    NATIVE = "native"
    NORMALIZED = "normalized"


class Dependency(str, Enum):
    """Module a route is addressed to."""
    DEX = "dex"
    BASE_CHAIN = "base_chain"
    QUOTE_CHAIN = "quote_chain"

    @property
    def label(self) -> str:
        return {
            Dependency.DEX: "DEX",
            Dependency.BASE_CHAIN: "Base chain",
            Dependency.QUOTE_CHAIN: "Quote chain",
        }[self]


# ============================================================================
# ROUTE SPEC
# ============================================================================

@dataclass(frozen=True)
class RouteSpec:
    """
    Declarative description of one endpoint.

    Attributes:
        name: Stable route name (metrics label, FastAPI route name)
        method: HTTP method
        path: URL path
        action: Bus action invoked on the dependency's alias
        sanitize: Query sanitization rule
        view: Result rendering
        side: Fixed side for normalized bid/ask views
        dependency: Module the action is addressed to
        forward_body: Forward the JSON request body instead of the query
    """
    name: str
    method: str
    path: str
    action: str
    sanitize: SanitizeRule = SanitizeRule.STANDARD
    view: ViewKind = ViewKind.NATIVE
    side: Optional[OrderSide] = None
    dependency: Dependency = Dependency.DEX
    forward_body: bool = False

    @property
    def requires_optional_dependency(self) -> bool:
        return self.dependency is not Dependency.DEX


# ============================================================================
# ROUTE TABLE
# ============================================================================

ROUTE_TABLE: Tuple[RouteSpec, ...] = (
    RouteSpec("status", "GET", "/status", "getStatus", sanitize=SanitizeRule.NONE),
    RouteSpec("orders_bids", "GET", "/orders/bids", "getBids"),
    RouteSpec("orders_asks", "GET", "/orders/asks", "getAsks"),
    RouteSpec("orders", "GET", "/orders", "getOrders"),
    RouteSpec("order_book", "GET", "/order-book", "getOrderBook", sanitize=SanitizeRule.ORDER_BOOK),
    RouteSpec("prices_recent", "GET", "/prices/recent", "getRecentPrices"),
    RouteSpec("transfers_pending", "GET", "/transfers/pending", "getPendingTransfers"),
    RouteSpec("transfers_recent", "GET", "/transfers/recent", "getRecentTransfers"),
    RouteSpec(
        "gdax_orders_bids", "GET", "/gdax/orders/bids", "getBids",
        view=ViewKind.NORMALIZED, side=OrderSide.BUY
    ),
    RouteSpec(
        "gdax_orders_asks", "GET", "/gdax/orders/asks", "getAsks",
        view=ViewKind.NORMALIZED, side=OrderSide.SELL
    ),
    RouteSpec("gdax_orders", "GET", "/gdax/orders", "getOrders", view=ViewKind.NORMALIZED),
    RouteSpec(
        "chain_base_account", "GET", "/chain/base/account", "getAccount",
        dependency=Dependency.BASE_CHAIN
    ),
    RouteSpec(
        "chain_quote_account", "GET", "/chain/quote/account", "getAccount",
        dependency=Dependency.QUOTE_CHAIN
    ),
    RouteSpec(
        "chain_base_transaction", "POST", "/chain/base/transaction", "postTransaction",
        sanitize=SanitizeRule.NONE, dependency=Dependency.BASE_CHAIN, forward_body=True
    ),
    RouteSpec(
        "chain_quote_transaction", "POST", "/chain/quote/transaction", "postTransaction",
        sanitize=SanitizeRule.NONE, dependency=Dependency.QUOTE_CHAIN, forward_body=True
    ),
)


def find_route(method: str, path: str) -> Optional[RouteSpec]:
    """Look up a route by method and path."""
    for spec in ROUTE_TABLE:
        if spec.method == method.upper() and spec.path == path:
            return spec
    return None


__all__ = [
    "SanitizeRule",
    "ViewKind",
    "Dependency",
    "RouteSpec",
    "ROUTE_TABLE",
    "find_route",
]
