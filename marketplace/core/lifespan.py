"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. The WebSocket manager and event sink
are attached to app.state by create_app(), so they exist even when an ASGI
transport skips lifespan events (tests).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from marketplace.core.config import get_settings
from marketplace.infrastructure.persistence.database import dispose_engine
from marketplace.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging. Shutdown: report open WebSockets, dispose the SQL engine.
    """
    settings = get_settings()
    setup_logging()
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    ws_manager = getattr(app.state, "ws_manager", None)
    if ws_manager is not None:
        logger.info(
            "Shutting down with %d open websocket(s)",
            await ws_manager.get_connection_count(),
        )
    await dispose_engine()
    logger.info("%s stopped", settings.app_name)
