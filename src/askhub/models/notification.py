# src/askhub/models/notification.py
"""Notifications created as side effects of other state changes."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from askhub.db.session import Base
from askhub.db.time import utcnow


class NotificationType(enum.StrEnum):
    ANSWER = "answer"
    COMMENT = "comment"
    MENTION = "mention"
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"
    ACCEPTED_ANSWER = "accepted_answer"
    QUESTION_UPVOTE = "question_upvote"
    ANSWER_UPVOTE = "answer_upvote"
    WELCOME = "welcome"
    CONTENT_REMOVED = "content_removed"
    ACCOUNT_BANNED = "account_banned"


class Notification(Base):
    """A message for one recipient. Never authored by users directly."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_read_created", "user_id", "is_read", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    # Plain references: the linked content may be removed later.
    question_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    answer_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    from_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
