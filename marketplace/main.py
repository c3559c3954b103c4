"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, and the
event side-channel. No business logic here. See marketplace.core.lifespan and
marketplace.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and clear
the get_settings cache) before calling create_app(). A missing SECRET_KEY or
DATABASE_URL fails here, at startup.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.api.v1.router import api_router
from marketplace.api.websocket import ConnectionManager
from marketplace.core.config import get_settings
from marketplace.core.exception_handlers import register_exception_handlers
from marketplace.core.lifespan import create_lifespan
from marketplace.core.limiter import limiter
from marketplace.infrastructure.messaging import (
    CompositeEventSink,
    LoggingEventSink,
    WebSocketEventSink,
)
from marketplace.middleware import RequestIDMiddleware, TimeoutMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter

    ws_manager = ConnectionManager()
    app.state.ws_manager = ws_manager
    app.state.event_sink = CompositeEventSink(
        [LoggingEventSink(), WebSocketEventSink(ws_manager)]
    )

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout → request ID → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    return app
