"""WebSocket connection manager used by the /ws endpoint and the event sink."""

from marketplace.api.websocket.manager import ADMIN_CHANNEL, ConnectionManager

__all__ = ["ADMIN_CHANNEL", "ConnectionManager"]
