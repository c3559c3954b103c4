"""Permission ORM model: one (action, resource) grant owned by a role."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace.infrastructure.persistence.database import Base
from marketplace.infrastructure.persistence.models.mixins import EntityModel

if TYPE_CHECKING:
    from marketplace.infrastructure.persistence.models.role import Role


class Permission(EntityModel, Base):
    """Permission. Table: permission. Unique (role_id, action, resource).

    ``position`` keeps the role's permission list in insertion order.
    """

    __tablename__ = "permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False
    )
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    resource: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    role: Mapped[Role] = relationship(back_populates="permissions")

    __table_args__ = (
        UniqueConstraint("role_id", "action", "resource", name="uq_permission_grant"),
        Index("ix_permission_role_position", "role_id", "position"),
    )
