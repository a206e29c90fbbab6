"""
Unit Tests for the In-Process Bus Channel

Reliability Level: L6 Critical

Tests CommandId addressing and LocalChannel error wrapping.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from dex_http_api.transport.channel import (
    BusInvocationError,
    CommandId,
    InvalidQueryError,
    LocalChannel,
)


class TestCommandId:

    def test_renders_alias_and_action(self) -> None:
        assert str(CommandId("lisk_dex", "getBids")) == "lisk_dex:getBids"

    def test_parse(self) -> None:
        assert CommandId.parse("lisk_dex:getBids") == CommandId("lisk_dex", "getBids")

    def test_parse_rejects_missing_separator(self) -> None:
        with pytest.raises(ValueError):
            CommandId.parse("getBids")

    def test_rejects_empty_parts(self) -> None:
        with pytest.raises(ValueError):
            CommandId("", "getBids")


class TestLocalChannel:

    @pytest.mark.asyncio
    async def test_invokes_sync_handler(self) -> None:
        channel = LocalChannel()
        channel.register(CommandId("dex", "echo"), lambda payload: payload)
        assert await channel.invoke(CommandId("dex", "echo"), {"a": 1}) == {"a": 1}

    @pytest.mark.asyncio
    async def test_invokes_async_handler(self) -> None:
        async def handler(payload):
            return [payload.get("limit")]

        channel = LocalChannel()
        channel.register(CommandId("dex", "getBids"), handler)
        assert await channel.invoke(CommandId("dex", "getBids"), {"limit": 3}) == [3]

    @pytest.mark.asyncio
    async def test_invalid_query_is_wrapped_as_source_error(self) -> None:
        def handler(payload):
            raise InvalidQueryError("Limit must be positive")

        channel = LocalChannel()
        channel.register(CommandId("dex", "getBids"), handler)

        with pytest.raises(BusInvocationError) as exc_info:
            await channel.invoke(CommandId("dex", "getBids"), {})

        source = exc_info.value.source_error
        assert source.name == "InvalidQueryError"
        assert source.message == "Limit must be positive"
        assert source.is_invalid_query

    @pytest.mark.asyncio
    async def test_other_errors_keep_their_name(self) -> None:
        def handler(payload):
            raise KeyError("orderId")

        channel = LocalChannel()
        channel.register(CommandId("dex", "getBids"), handler)

        with pytest.raises(BusInvocationError) as exc_info:
            await channel.invoke(CommandId("dex", "getBids"), {})

        assert exc_info.value.source_error.name == "KeyError"
        assert not exc_info.value.source_error.is_invalid_query

    @pytest.mark.asyncio
    async def test_unregistered_command(self) -> None:
        with pytest.raises(BusInvocationError) as exc_info:
            await LocalChannel().invoke(CommandId("dex", "missing"), {})
        assert exc_info.value.source_error is None

    def test_duplicate_registration_rejected(self) -> None:
        channel = LocalChannel()
        channel.register(CommandId("dex", "a"), lambda p: p)
        with pytest.raises(ValueError):
            channel.register(CommandId("dex", "a"), lambda p: p)

    def test_publish_records_and_notifies(self) -> None:
        received = []
        channel = LocalChannel()
        channel.subscribe(lambda command, data: received.append(str(command)))

        channel.publish(CommandId("lisk_dex_http_api", "bootstrap"))

        assert channel.published == [(CommandId("lisk_dex_http_api", "bootstrap"), {})]
        assert received == ["lisk_dex_http_api:bootstrap"]

    def test_failing_subscriber_does_not_raise(self) -> None:
        def subscriber(command, data):
            raise RuntimeError("down")

        channel = LocalChannel()
        channel.subscribe(subscriber)
        channel.publish(CommandId("x", "bootstrap"))
        assert len(channel.published) == 1
