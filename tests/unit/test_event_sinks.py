"""Tests for event sinks (logging, websocket, composite)."""

import logging
from unittest.mock import AsyncMock

from fakes import RecordingEventSink

from marketplace.infrastructure.messaging import (
    CompositeEventSink,
    LoggingEventSink,
    WebSocketEventSink,
)


async def test_logging_sink_logs_at_info(caplog) -> None:
    with caplog.at_level(logging.INFO):
        await LoggingEventSink().publish("roleCreated", {"id": "r1"})
    assert "roleCreated" in caplog.text
    assert "admin" in caplog.text


async def test_websocket_sink_sends_to_audience_channel() -> None:
    sender = AsyncMock()
    sender.send_to_channel.return_value = 1
    await WebSocketEventSink(sender).publish("userDeleted", {"id": "u1"}, audience="u1")
    channel, message = sender.send_to_channel.await_args.args
    assert channel == "u1"
    assert message["event"] == "userDeleted"
    assert message["audience"] == "u1"
    assert message["payload"] == {"id": "u1"}
    assert message["timestamp"]


async def test_websocket_sink_swallows_delivery_errors(caplog) -> None:
    sender = AsyncMock()
    sender.send_to_channel.side_effect = RuntimeError("socket gone")
    await WebSocketEventSink(sender).publish("roleDeleted", {"id": "r1"})
    assert "delivery of roleDeleted" in caplog.text


async def test_composite_sink_isolates_failures() -> None:
    broken = AsyncMock()
    broken.publish.side_effect = RuntimeError("down")
    recorder = RecordingEventSink()
    await CompositeEventSink([broken, recorder]).publish(
        "permissionCreated", {"id": "p1"}, audience="admin"
    )
    assert recorder.events == [("permissionCreated", {"id": "p1"}, "admin")]
