"""Tests for the WebSocket ConnectionManager (channels, fan-out, pruning)."""

from unittest.mock import AsyncMock

from marketplace.api.websocket import ADMIN_CHANNEL, ConnectionManager


def _socket() -> AsyncMock:
    return AsyncMock()


async def test_connect_accepts_and_joins_channels() -> None:
    manager = ConnectionManager()
    ws = _socket()
    await manager.connect(ws, ["u1", ADMIN_CHANNEL])
    ws.accept.assert_awaited_once()
    assert await manager.get_connection_count() == 1
    assert await manager.send_to_channel(ADMIN_CHANNEL, {"event": "x"}) == 1
    ws.send_json.assert_awaited_once_with({"event": "x"})


async def test_send_targets_only_channel_members() -> None:
    manager = ConnectionManager()
    admin, user = _socket(), _socket()
    await manager.connect(admin, ["a1", ADMIN_CHANNEL])
    await manager.connect(user, ["u1"])
    assert await manager.send_to_channel("u1", "hello") == 1
    user.send_text.assert_awaited_once_with("hello")
    admin.send_text.assert_not_awaited()
    assert await manager.send_to_channel("nobody", "hello") == 0


async def test_disconnect_leaves_all_channels() -> None:
    manager = ConnectionManager()
    ws = _socket()
    await manager.connect(ws, ["u1", ADMIN_CHANNEL])
    await manager.disconnect(ws)
    assert await manager.get_connection_count() == 0
    assert await manager.send_to_channel(ADMIN_CHANNEL, "x") == 0


async def test_dead_sockets_are_pruned() -> None:
    manager = ConnectionManager()
    dead, alive = _socket(), _socket()
    dead.send_json.side_effect = RuntimeError("closed")
    await manager.connect(dead, [ADMIN_CHANNEL])
    await manager.connect(alive, [ADMIN_CHANNEL])
    assert await manager.send_to_channel(ADMIN_CHANNEL, {"n": 1}) == 2
    assert await manager.get_connection_count() == 1
    alive.send_json.assert_awaited_once_with({"n": 1})
