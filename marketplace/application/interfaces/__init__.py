"""Application ports: repository and service protocols."""

from marketplace.application.interfaces.repositories import (
    IPermissionRepository,
    IResourceRepository,
    IRoleRepository,
    IUserRepository,
    OwnedResource,
)
from marketplace.application.interfaces.services import IEventSink, ITokenService

__all__ = [
    "IEventSink",
    "IPermissionRepository",
    "IResourceRepository",
    "IRoleRepository",
    "ITokenService",
    "IUserRepository",
    "OwnedResource",
]
