# src/askhub/models/moderation.py
"""Models tracking reports and per-user moderation state."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askhub.db.session import Base
from askhub.db.time import utcnow


class ReportType(enum.StrEnum):
    """Kinds of content a report can target."""

    QUESTION = "question"
    ANSWER = "answer"


class ReportReason(enum.StrEnum):
    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    OFF_TOPIC = "off_topic"
    OTHER = "other"


class ReportStatus(enum.StrEnum):
    """Report lifecycle. ``pending`` is the only non-terminal state."""

    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class AdminAction(enum.StrEnum):
    DISMISSED = "dismissed"
    CONTENT_DELETED = "content_deleted"
    USER_BANNED = "user_banned"


class ReportPriority(enum.StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ModerationStatus(enum.StrEnum):
    """Account standing. ``banned`` is terminal."""

    ACTIVE = "active"
    WARNED = "warned"
    SUSPENDED = "suspended"
    BANNED = "banned"


REPORT_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PENDING: frozenset({ReportStatus.RESOLVED, ReportStatus.DISMISSED}),
    ReportStatus.RESOLVED: frozenset(),
    ReportStatus.DISMISSED: frozenset(),
}

MODERATION_TRANSITIONS: dict[ModerationStatus, frozenset[ModerationStatus]] = {
    ModerationStatus.ACTIVE: frozenset(
        {ModerationStatus.WARNED, ModerationStatus.SUSPENDED, ModerationStatus.BANNED}
    ),
    ModerationStatus.WARNED: frozenset(
        {
            ModerationStatus.ACTIVE,
            ModerationStatus.WARNED,
            ModerationStatus.SUSPENDED,
            ModerationStatus.BANNED,
        }
    ),
    ModerationStatus.SUSPENDED: frozenset(
        {
            ModerationStatus.ACTIVE,
            ModerationStatus.WARNED,
            ModerationStatus.SUSPENDED,
            ModerationStatus.BANNED,
        }
    ),
    ModerationStatus.BANNED: frozenset(),
}


class Report(Base):
    """A user or system complaint about a question or answer."""

    __tablename__ = "report"
    __table_args__ = (
        Index("ix_report_status_created_at", "status", "created_at"),
        Index("ix_report_target", "report_type", "target_id"),
        # One pending report per reporter and target.
        Index(
            "uq_report_pending_reporter",
            "report_type",
            "target_id",
            "reported_by",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_type: Mapped[str] = mapped_column(String(16), nullable=False)
    # Not a foreign key: the target may be deleted by the review itself.
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # NULL marks a system report raised by content scoring.
    reported_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    content_owner: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    reason: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ReportStatus.PENDING.value
    )
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ReportPriority.LOW.value
    )
    auto_flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    severity_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    admin_action: Mapped[str | None] = mapped_column(String(32), nullable=True)
    reviewed_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class UserModeration(Base):
    """Moderation record, at most one per user.

    ``status`` is only changed through the transition table above.
    """

    __tablename__ = "user_moderation"
    __table_args__ = (
        CheckConstraint(
            "trust_score >= 0 AND trust_score <= 100",
            name="ck_user_moderation_trust_score",
        ),
        Index("ix_user_moderation_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ModerationStatus.ACTIVE.value
    )
    banned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    banned_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    ban_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    trust_score: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=50)

    # Content statistics
    total_reports: Mapped[int] = mapped_column(default=0, nullable=False)
    valid_reports: Mapped[int] = mapped_column(default=0, nullable=False)
    content_removed: Mapped[int] = mapped_column(default=0, nullable=False)
    last_reported_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    warnings: Mapped[list[ModerationWarning]] = relationship(
        "ModerationWarning",
        cascade="all, delete-orphan",
        order_by="ModerationWarning.id",
    )
    suspensions: Mapped[list[Suspension]] = relationship(
        "Suspension",
        cascade="all, delete-orphan",
        order_by="Suspension.id",
    )


class ModerationWarning(Base):
    """A warning issued to a user, kept in issue order."""

    __tablename__ = "moderation_warning"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    moderation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_moderation.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    issued_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Suspension(Base):
    """A time-boxed suspension; ``is_active`` is cleared once it lapses."""

    __tablename__ = "moderation_suspension"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    moderation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_moderation.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    issued_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
