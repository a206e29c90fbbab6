"""
============================================================================
Lisk DEX HTTP API v1.0.0
Query Sanitizer - External Query Normalization
============================================================================

Reliability Level: L6 Critical
Input Constraints: Mapping of query-string keys to string values
Side Effects: None (pure, never raises)

RULES (applied independently per field):
    - Numeric fields ("limit", plus "depth" on order-book routes) are
      replaced by their leading ASCII base-10 integer ("10" -> 10, "10x" -> 10).
      A value with no leading integer, or one too long to convert, is
      forwarded verbatim; rejecting it is the engine's job, not the
      gateway's.
    - Legacy names are renamed: senderId -> senderAddress,
      recipientId -> recipientAddress. An explicit new-style key wins.
    - Everything else passes through unchanged.

============================================================================
"""

import re
from typing import Any, Dict, Iterable, Mapping, Optional

# ============================================================================
# CONSTANTS
# ============================================================================

STANDARD_NUMERIC_FIELDS = ("limit",)
ORDER_BOOK_NUMERIC_FIELDS = ("limit", "depth")

LEGACY_FIELD_ALIASES = {
    "senderId": "senderAddress",
    "recipientId": "recipientAddress",
}

_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def parse_leading_int(value: Any) -> Optional[int]:
    """
    Parse the leading base-10 integer of a value.

    Returns None when the value does not start with an integer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = _LEADING_INTEGER.match(value)
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # digit run beyond the interpreter's int conversion limit
        return None


def sanitize(
    raw_query: Mapping[str, Any],
    numeric_fields: Iterable[str] = STANDARD_NUMERIC_FIELDS,
) -> Dict[str, Any]:
    """
    Return a sanitized copy of an external query.

    Args:
        raw_query: Query as received from the transport layer (not mutated)
        numeric_fields: Fields to coerce to integers when parseable

    Returns:
        New dict ready to forward to the engine
    """
    sanitized: Dict[str, Any] = dict(raw_query)

    for field_name in numeric_fields:
        if field_name not in sanitized:
            continue
        parsed = parse_leading_int(sanitized[field_name])
        if parsed is not None:
            sanitized[field_name] = parsed

    for legacy_name, new_name in LEGACY_FIELD_ALIASES.items():
        if legacy_name not in sanitized:
            continue
        legacy_value = sanitized.pop(legacy_name)
        if new_name not in sanitized:
            sanitized[new_name] = legacy_value

    return sanitized


__all__ = [
    "STANDARD_NUMERIC_FIELDS",
    "ORDER_BOOK_NUMERIC_FIELDS",
    "LEGACY_FIELD_ALIASES",
    "parse_leading_int",
    "sanitize",
]
