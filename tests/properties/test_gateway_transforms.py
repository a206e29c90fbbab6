"""
Property-Based Tests for Gateway Transforms

Reliability Level: L6 Critical

Tests the pure transforms of the gateway using Hypothesis:
- sanitize is the identity (modulo legacy renames) without limit/depth
- sanitize coerces any integer-valued limit
- classify answers 400 iff the source error is InvalidQueryError
- to_normalized_view preserves count and order and fixes the fill fields
"""

import os
import sys

from hypothesis import given, settings
from hypothesis import strategies as st

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from dex_http_api.logic.error_classifier import classify
from dex_http_api.logic.query_sanitizer import LEGACY_FIELD_ALIASES, sanitize
from dex_http_api.logic.view_normalizer import to_normalized_view
from dex_http_api.transport.channel import BusInvocationError, CommandId, SourceError


# =============================================================================
# HYPOTHESIS STRATEGIES
# =============================================================================

RESERVED_KEYS = {"limit", "depth"} | set(LEGACY_FIELD_ALIASES) | set(LEGACY_FIELD_ALIASES.values())

plain_key_strategy = st.text(
    min_size=1, max_size=12, alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
).filter(lambda key: key not in RESERVED_KEYS)

query_strategy = st.dictionaries(plain_key_strategy, st.text(max_size=20), max_size=8)

error_name_strategy = st.one_of(
    st.just("InvalidQueryError"),
    st.text(min_size=1, max_size=20),
)

order_strategy = st.fixed_dictionaries(
    {
        "orderId": st.text(min_size=1, max_size=16),
        "price": st.floats(min_value=0, max_value=1e6, allow_nan=False),
        "size": st.integers(min_value=0, max_value=10 ** 12),
        "side": st.sampled_from(["bid", "ask"]),
        "timestamp": st.integers(min_value=0, max_value=2 ** 42),
    },
    optional={"sizeRemaining": st.integers(min_value=0, max_value=10 ** 12)},
)


# =============================================================================
# PROPERTY: Sanitize Identity
# =============================================================================

class TestSanitizeProperties:

    @settings(max_examples=100)
    @given(query=query_strategy)
    def test_identity_without_numeric_fields(self, query) -> None:
        assert sanitize(query) == query

    @settings(max_examples=100)
    @given(query=query_strategy, sender=st.text(max_size=10))
    def test_only_legacy_key_is_renamed(self, query, sender) -> None:
        raw = dict(query, senderId=sender)
        expected = dict(query, senderAddress=sender)
        assert sanitize(raw) == expected

    @settings(max_examples=100)
    @given(query=query_strategy, limit=st.integers(min_value=-10 ** 9, max_value=10 ** 9))
    def test_integer_limit_is_coerced(self, query, limit) -> None:
        result = sanitize(dict(query, limit=str(limit)))
        assert result["limit"] == limit
        assert isinstance(result["limit"], int)


# =============================================================================
# PROPERTY: Classification
# =============================================================================

class TestClassifyProperties:

    @settings(max_examples=100)
    @given(name=error_name_strategy, message=st.text(max_size=40))
    def test_400_iff_invalid_query(self, name, message) -> None:
        error = BusInvocationError(
            "failed",
            command=CommandId("lisk_dex", "getBids"),
            source_error=SourceError(name=name, message=message),
        )
        status, body = classify(error)

        if name == "InvalidQueryError":
            assert status == 400
            assert body == f"Invalid query: {message}"
        else:
            assert status == 500
            assert body == "Server error"


# =============================================================================
# PROPERTY: Normalized View
# =============================================================================

class TestNormalizedViewProperties:

    @settings(max_examples=100)
    @given(records=st.lists(order_strategy, max_size=20), fixed_side=st.sampled_from([None, "buy", "sell"]))
    def test_shape_count_and_order(self, records, fixed_side) -> None:
        views = to_normalized_view(records, "LSK-CLSK", fixed_side)

        assert len(views) == len(records)
        assert [v["id"] for v in views] == [r["orderId"] for r in records]

        for record, view in zip(records, views):
            assert view["status"] == "open"
            assert view["settled"] is False
            assert view["fill_fees"] == "0.0000000000000000"
            assert view["filled_size"] == "0.00000000"
            assert view["executed_value"] == "0.0000000000000000"
            assert view["product_id"] == "LSK-CLSK"
            assert view["created_at"] == record["timestamp"]
            assert view["size"] == record.get("sizeRemaining", record["size"])
            if fixed_side is None:
                assert view["side"] == ("sell" if record["side"] == "ask" else "buy")
            else:
                assert view["side"] == fixed_side
