"""WebSocket connection manager.

Holds active connections per channel. Every connection joins its identity's
channel; admin connections also join the 'admin' channel. Use via
app.state.ws_manager (set in create_app).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)

ADMIN_CHANNEL = "admin"


class ConnectionManager:
    """Manages WebSocket connections grouped into named channels.

    - A connection may belong to several channels (identity id, admin).
    - Sends go to a snapshot taken under the lock; dead sockets are pruned.
    """

    def __init__(self) -> None:
        self._channels: dict[str, set[WebSocket]] = {}
        self._memberships: dict[WebSocket, set[str]] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, channels: Iterable[str]) -> None:
        """Accept the socket and register it in every given channel."""
        await websocket.accept()
        names = set(channels)
        async with self._lock:
            for name in names:
                self._channels.setdefault(name, set()).add(websocket)
            self._memberships[websocket] = names

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a connection from all of its channels (call on disconnect)."""
        async with self._lock:
            self._forget(websocket)

    def _forget(self, websocket: WebSocket) -> None:
        # Caller holds the lock.
        for name in self._memberships.pop(websocket, set()):
            conns = self._channels.get(name)
            if conns is None:
                continue
            conns.discard(websocket)
            if not conns:
                del self._channels[name]

    async def send_to_channel(self, channel: str, message: str | dict[str, Any]) -> int:
        """Send to every connection in ``channel``; return how many were targeted."""
        async with self._lock:
            snapshot = list(self._channels.get(channel, set()))
        await self._send_to_list(snapshot, message)
        return len(snapshot)

    async def _send_to_list(
        self,
        connections: list[WebSocket],
        message: str | dict[str, Any],
    ) -> None:
        """Send message to a list of connections; remove dead ones under lock."""
        dead: list[WebSocket] = []
        for ws in connections:
            try:
                if isinstance(message, dict):
                    await ws.send_json(message)
                else:
                    await ws.send_text(message)
            except Exception:
                logger.debug("Dropping dead websocket connection", exc_info=True)
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    self._forget(ws)

    async def get_connection_count(self) -> int:
        """Return the number of distinct active connections (lock-safe)."""
        async with self._lock:
            return len(self._memberships)
