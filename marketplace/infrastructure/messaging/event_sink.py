"""Event sinks: deliver handler notifications (roleCreated, userDeleted, ...).

Handlers publish after their transaction committed. Sinks never raise into the
caller; a failed delivery is logged and dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any, Protocol

from marketplace.application.interfaces.services import IEventSink
from marketplace.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventMessage:
    """Wire payload sent to subscribers."""

    event: str
    audience: str
    payload: dict[str, Any]
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON send."""
        return asdict(self)


class ChannelSender(Protocol):
    """Anything that can push a JSON message to a named channel."""

    async def send_to_channel(self, channel: str, message: dict[str, Any]) -> int: ...


def build_message(event: str, payload: dict[str, Any], audience: str) -> EventMessage:
    return EventMessage(
        event=event,
        audience=audience,
        payload=payload,
        timestamp=utc_now().isoformat(),
    )


class LoggingEventSink:
    """Writes every event to the application log."""

    async def publish(
        self,
        event: str,
        payload: dict[str, Any],
        *,
        audience: str = "admin",
    ) -> None:
        logger.info("Event %s -> %s: %s", event, audience, payload)


class WebSocketEventSink:
    """Pushes events to the WebSocket channel named by the audience."""

    def __init__(self, sender: ChannelSender) -> None:
        self._sender = sender

    async def publish(
        self,
        event: str,
        payload: dict[str, Any],
        *,
        audience: str = "admin",
    ) -> None:
        message = build_message(event, payload, audience)
        try:
            delivered = await self._sender.send_to_channel(audience, message.to_dict())
        except Exception:
            logger.exception("WebSocket delivery of %s to %s failed", event, audience)
            return
        logger.debug("Event %s sent to %d connection(s) on %s", event, delivered, audience)


class CompositeEventSink:
    """Fans one event out to several sinks; one failing sink does not stop the rest."""

    def __init__(self, sinks: Sequence[IEventSink]) -> None:
        self._sinks = tuple(sinks)

    async def publish(
        self,
        event: str,
        payload: dict[str, Any],
        *,
        audience: str = "admin",
    ) -> None:
        for sink in self._sinks:
            try:
                await sink.publish(event, payload, audience=audience)
            except Exception:
                logger.exception(
                    "Event sink %s failed for %s", type(sink).__name__, event
                )
