# src/askhub/models/user.py
"""SQLAlchemy models for platform users."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from askhub.db.session import Base
from askhub.db.time import utcnow


class UserRole(enum.StrEnum):
    """Roles recognised by the role check on admin routes."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Account referenced by content, votes, reports and notifications.

    Registration and credentials live in the identity service; only the
    fields the core needs are mirrored here.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=UserRole.USER.value)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    @property
    def is_admin(self) -> bool:
        """Return True when the account carries the admin role."""
        return self.role == UserRole.ADMIN
