"""Event side-channel dependencies: publish only after the write committed."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any

from fastapi import BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.services import IEventSink
from marketplace.infrastructure.messaging import LoggingEventSink
from marketplace.infrastructure.persistence.database import get_db_transactional


def get_event_sink(request: Request) -> IEventSink:
    """Sink attached to app.state by create_app(); logging-only if absent."""
    sink = getattr(request.app.state, "event_sink", None)
    return sink if sink is not None else LoggingEventSink()


class EventPublisher:
    """Commits the request transaction, then schedules the event.

    An exception before commit_and_publish() means nothing is published, and
    each successful operation schedules its event exactly once.
    """

    def __init__(
        self,
        session: AsyncSession,
        sink: IEventSink,
        background_tasks: BackgroundTasks,
    ) -> None:
        self._session = session
        self._sink = sink
        self._background_tasks = background_tasks

    async def commit_and_publish(
        self,
        event: str,
        payload: dict[str, Any],
        *,
        audiences: Sequence[str] = ("admin",),
    ) -> None:
        """Commit, then schedule one delivery of ``event`` per audience."""
        await self._session.commit()
        for audience in dict.fromkeys(audiences):
            self._background_tasks.add_task(
                self._sink.publish, event, payload, audience=audience
            )


async def get_event_publisher(
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    sink: Annotated[IEventSink, Depends(get_event_sink)],
) -> EventPublisher:
    return EventPublisher(db, sink, background_tasks)
