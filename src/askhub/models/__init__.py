# src/askhub/models/__init__.py
"""SQLAlchemy models for the AskHub application."""

from .moderation import (
    AdminAction,
    ModerationStatus,
    Report,
    ReportPriority,
    ReportReason,
    ReportStatus,
    ReportType,
    Suspension,
    UserModeration,
    ModerationWarning,
)
from .notification import Notification, NotificationType
from .question import Answer, Question
from .user import User, UserRole
from .vote import AnswerVote

__all__ = [
    "AdminAction", "ModerationStatus", "Report", "ReportPriority", "ReportReason",
    "ReportStatus", "ReportType", "Suspension", "UserModeration", "ModerationWarning",
    "Notification", "NotificationType",
    "Answer", "Question",
    "User", "UserRole",
    "AnswerVote",
]
