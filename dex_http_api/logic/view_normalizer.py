"""
============================================================================
Lisk DEX HTTP API v1.0.0
View Normalizer - Engine Orders to GDAX-Style Orders
============================================================================

Reliability Level: L6 Critical
Input Constraints: List of engine order records (dicts)
Side Effects: None

MAPPING:
    id          <- orderId
    price       <- price
    size        <- sizeRemaining (open remainder), else size
    side        <- fixed by the route, or per record: 'ask' -> sell, else buy
    created_at  <- timestamp
    everything else fixed (see schemas.orders)

Record count and order are preserved exactly.

============================================================================
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from dex_http_api.schemas.orders import NormalizedOrderView, OrderSide

ENGINE_ASK_SIDE = "ask"


def side_from_engine(native_side: Any) -> OrderSide:
    """Map the engine's side tag to a normalized side."""
    return OrderSide.SELL if native_side == ENGINE_ASK_SIDE else OrderSide.BUY


def normalize_order(
    record: Mapping[str, Any],
    market_id: str,
    side: Optional[Union[OrderSide, str]] = None
) -> Dict[str, Any]:
    """Project one engine order onto the normalized view."""
    if side is None:
        resolved_side = side_from_engine(record.get("side"))
    else:
        resolved_side = OrderSide(side)

    size = record.get("sizeRemaining")
    if size is None:
        size = record.get("size")

    view = NormalizedOrderView(
        id=record.get("orderId"),
        price=record.get("price"),
        size=size,
        product_id=market_id,
        side=resolved_side,
        created_at=record.get("timestamp"),
    )
    return view.model_dump(mode="json")


def to_normalized_view(
    records: Sequence[Mapping[str, Any]],
    market_id: str,
    side: Optional[Union[OrderSide, str]] = None
) -> List[Dict[str, Any]]:
    """
    Normalize a list of engine orders.

    Args:
        records: Engine order records, in upstream order
        market_id: MarketIdentity display identifier
        side: Fixed side for bid/ask lists; None to read each record's tag

    Returns:
        One normalized dict per record, same order
    """
    return [normalize_order(record, market_id, side) for record in records]


__all__ = [
    "ENGINE_ASK_SIDE",
    "side_from_engine",
    "normalize_order",
    "to_normalized_view",
]
