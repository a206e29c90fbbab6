"""
Unit Tests for the Gateway Orchestrator

Reliability Level: L6 Critical

Tests Gateway.start() and Gateway.handle() against a LocalChannel.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from dex_http_api.logic.gateway import Gateway
from dex_http_api.logic.route_table import find_route
from dex_http_api.transport.channel import (
    BusInvocationError,
    CommandId,
    InvalidQueryError,
    LocalChannel,
)

MARKET = {"baseSymbol": "CLSK", "quoteSymbol": "LSK"}


@pytest.fixture
def channel() -> LocalChannel:
    channel = LocalChannel()
    channel.register(CommandId("lisk_dex", "getMarket"), lambda payload: MARKET)
    return channel


@pytest.fixture
def gateway(channel: LocalChannel) -> Gateway:
    return Gateway(
        channel=channel,
        dex_module_alias="lisk_dex",
        module_alias="lisk_dex_http_api",
    )


class TestStart:

    @pytest.mark.asyncio
    async def test_resolves_market_then_bootstraps(self, gateway, channel) -> None:
        assert not gateway.is_ready

        identity = await gateway.start()

        assert identity.market_id == "LSK-CLSK"
        assert gateway.is_ready
        assert channel.published == [(CommandId("lisk_dex_http_api", "bootstrap"), {})]

    @pytest.mark.asyncio
    async def test_market_failure_is_fatal(self) -> None:
        gateway = Gateway(LocalChannel(), "lisk_dex", "lisk_dex_http_api")
        with pytest.raises(BusInvocationError):
            await gateway.start()
        assert not gateway.is_ready

    @pytest.mark.asyncio
    async def test_malformed_market_is_fatal(self) -> None:
        channel = LocalChannel()
        channel.register(CommandId("lisk_dex", "getMarket"), lambda payload: {"baseSymbol": "X"})
        with pytest.raises(ValueError):
            await Gateway(channel, "lisk_dex", "lisk_dex_http_api").start()
        assert channel.published == []

    def test_market_identity_before_start(self, gateway) -> None:
        with pytest.raises(RuntimeError):
            gateway.market_identity


class TestHandle:

    @pytest.mark.asyncio
    async def test_sanitized_query_reaches_engine(self, gateway, channel) -> None:
        seen = []
        channel.register(CommandId("lisk_dex", "getBids"), lambda p: seen.append(p) or [])
        await gateway.start()

        response = await gateway.handle(
            find_route("GET", "/orders/bids"), {"limit": "10", "senderId": "1L"}
        )

        assert response.status_code == 200
        assert response.content == []
        assert seen == [{"limit": 10, "senderAddress": "1L"}]

    @pytest.mark.asyncio
    async def test_status_query_is_not_sanitized(self, gateway, channel) -> None:
        seen = []
        channel.register(CommandId("lisk_dex", "getStatus"), lambda p: seen.append(p) or {"ok": 1})
        await gateway.start()

        await gateway.handle(find_route("GET", "/status"), {"limit": "2"})

        assert seen == [{"limit": "2"}]

    @pytest.mark.asyncio
    async def test_depth_coerced_on_order_book(self, gateway, channel) -> None:
        seen = []
        channel.register(CommandId("lisk_dex", "getOrderBook"), lambda p: seen.append(p) or {})
        await gateway.start()

        await gateway.handle(find_route("GET", "/order-book"), {"depth": "7"})

        assert seen == [{"depth": 7}]

    @pytest.mark.asyncio
    async def test_invalid_query_is_400(self, gateway, channel) -> None:
        def handler(payload):
            raise InvalidQueryError("Depth must be a number")

        channel.register(CommandId("lisk_dex", "getOrderBook"), handler)
        await gateway.start()

        response = await gateway.handle(find_route("GET", "/order-book"), {"depth": "abc"})

        assert response.status_code == 400
        assert response.content == "Invalid query: Depth must be a number"
        assert response.is_json is False

    @pytest.mark.asyncio
    async def test_missing_chain_alias_is_501_without_bus(self, gateway, channel) -> None:
        invoked = []
        channel.register(CommandId("lisk_dex", "postTransaction"), lambda p: invoked.append(p))
        await gateway.start()

        response = await gateway.handle(
            find_route("POST", "/chain/base/transaction"), {}, b'{"amount": "1"}'
        )

        assert response.status_code == 501
        assert response.content == "Base chain module alias is not configured"
        assert invoked == []

    @pytest.mark.asyncio
    async def test_chain_transaction_body_forwarded(self, channel) -> None:
        seen = []
        channel.register(CommandId("chain_lsk", "postTransaction"), lambda p: seen.append(p) or {"ok": True})
        gateway = Gateway(channel, "lisk_dex", "lisk_dex_http_api", quote_chain_module_alias="chain_lsk")
        await gateway.start()

        response = await gateway.handle(
            find_route("POST", "/chain/quote/transaction"),
            {"limit": "1"},
            b'{"type": 0, "senderId": "1L"}',
        )

        assert response.status_code == 200
        assert seen == [{"type": 0, "senderId": "1L"}]

    @pytest.mark.asyncio
    async def test_invalid_json_body_is_400(self, channel) -> None:
        gateway = Gateway(channel, "lisk_dex", "lisk_dex_http_api", base_chain_module_alias="chain_clsk")
        await gateway.start()

        response = await gateway.handle(find_route("POST", "/chain/base/transaction"), {}, b"{nope")

        assert response.status_code == 400
        assert response.content == "Invalid query: request body must be valid JSON"

    @pytest.mark.asyncio
    async def test_normalized_view_requires_list(self, gateway, channel) -> None:
        channel.register(CommandId("lisk_dex", "getBids"), lambda p: {"not": "a list"})
        await gateway.start()

        response = await gateway.handle(find_route("GET", "/gdax/orders/bids"), {})

        assert response.status_code == 500
        assert response.content == "Server error"

    @pytest.mark.asyncio
    async def test_not_started_is_500(self, gateway, channel) -> None:
        channel.register(CommandId("lisk_dex", "getBids"), lambda p: [])

        response = await gateway.handle(find_route("GET", "/orders/bids"), {})

        assert response.status_code == 500
