"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, never on infrastructure directly.
"""

from .access import get_access_policy, get_authorization_gate, require_access
from .auth import (
    get_current_identity,
    get_current_identity_optional,
    get_identity_resolver,
    get_token_service,
)
from .db import (
    get_permission_repo,
    get_permission_repo_for_write,
    get_role_repo,
    get_role_repo_for_write,
    get_user_repo,
    get_user_repo_for_write,
)
from .events import EventPublisher, get_event_publisher, get_event_sink
from .services import (
    get_auth_service,
    get_permission_reader,
    get_permission_service,
    get_role_reader,
    get_role_service,
    get_user_admin_service,
)

__all__ = [
    "EventPublisher",
    "get_access_policy",
    "get_auth_service",
    "get_authorization_gate",
    "get_current_identity",
    "get_current_identity_optional",
    "get_event_publisher",
    "get_event_sink",
    "get_identity_resolver",
    "get_permission_reader",
    "get_permission_repo",
    "get_permission_repo_for_write",
    "get_permission_service",
    "get_role_reader",
    "get_role_repo",
    "get_role_repo_for_write",
    "get_role_service",
    "get_token_service",
    "get_user_admin_service",
    "get_user_repo",
    "get_user_repo_for_write",
]
