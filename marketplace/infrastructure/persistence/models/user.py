"""User ORM model: the authorization-relevant identity record."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace.infrastructure.persistence.database import Base
from marketplace.infrastructure.persistence.models.mixins import EntityModel
from marketplace.infrastructure.persistence.models.role import Role


class User(EntityModel, Base):
    """User model. Table: app_user. Unique username and email.

    The role FK is RESTRICT: a role that users still reference cannot be
    deleted at the database level either.
    """

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="active", server_default="active"
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    freelancer_status: Mapped[str | None] = mapped_column(String(16), nullable=True)
    admin_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    approved_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    role: Mapped[Role | None] = relationship(foreign_keys=[role_id], lazy="raise")
