"""Messaging: event sinks for the real-time notification side-channel."""

from marketplace.infrastructure.messaging.event_sink import (
    CompositeEventSink,
    EventMessage,
    LoggingEventSink,
    WebSocketEventSink,
)

__all__ = [
    "CompositeEventSink",
    "EventMessage",
    "LoggingEventSink",
    "WebSocketEventSink",
]
