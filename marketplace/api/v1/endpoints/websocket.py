"""WebSocket endpoint: /ws?token=... joins the identity's channel (and admin's for admins).

The connection manager lives on app.state.ws_manager (set in create_app).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.v1.dependencies import get_authorization_gate, get_identity_resolver
from marketplace.api.websocket import ADMIN_CHANNEL, ConnectionManager
from marketplace.application.services.authorization_service import AuthorizationGate
from marketplace.application.services.identity_resolver import IdentityResolver
from marketplace.core.config import get_settings
from marketplace.domain.exceptions import MarketplaceException
from marketplace.domain.requirements import RoleSlugRequirement
from marketplace.infrastructure.persistence.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
    gate: Annotated[AuthorizationGate, Depends(get_authorization_gate)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Resolve the token like any bearer credential, then register the connection.

    The lookup session is closed right after resolution so an open socket
    does not hold a pooled connection.
    """
    manager: ConnectionManager = websocket.app.state.ws_manager
    try:
        identity = await resolver.resolve(websocket.query_params.get("token"))
    except MarketplaceException as e:
        await _reject_websocket(websocket, e.message)
        return
    finally:
        await db.close()

    channels = [identity.id]
    # Suspended admins fail the gate and only get their own channel.
    if gate.is_allowed(identity, RoleSlugRequirement(get_settings().admin_role_slug)):
        channels.append(ADMIN_CHANNEL)
    await manager.connect(websocket, channels)
    logger.debug("WebSocket connected: identity=%s channels=%s", identity.id, channels)
    try:
        while True:
            # Inbound frames are ignored; the socket is a push channel.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(websocket)
