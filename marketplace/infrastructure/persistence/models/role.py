"""Role ORM model: named bundle of ordered permission grants."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace.infrastructure.persistence.database import Base
from marketplace.infrastructure.persistence.models.mixins import EntityModel

if TYPE_CHECKING:
    from marketplace.infrastructure.persistence.models.permission import Permission


class Role(EntityModel, Base):
    """Role. Table: role. Unique slug and unique lower(name)."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="active", server_default="active"
    )

    permissions: Mapped[list[Permission]] = relationship(
        back_populates="role",
        cascade="all, delete-orphan",
        order_by="Permission.position",
        lazy="selectin",
    )


# Names are unique regardless of case.
Index("uq_role_name_lower", func.lower(Role.name), unique=True)
