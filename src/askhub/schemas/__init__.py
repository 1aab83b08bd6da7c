"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .answer import AcceptResponse, AnswerCreate, AnswerResponse, AnswerUpdate
from .common import ErrorResponse, Page
from .moderation import (
    BanCreate,
    DashboardResponse,
    ModerationStatusResponse,
    ReportCreate,
    ReportResponse,
    ReportReview,
    SuspensionCreate,
    WarningCreate,
)
from .notification import MarkAllReadResponse, NotificationResponse, UnreadCountResponse
from .question import (
    QuestionCreate,
    QuestionDetailResponse,
    QuestionResponse,
    QuestionUpdate,
    TrendingQuestionResponse,
)
from .user import UserResponse, UserStatsResponse
from .vote import VoteCreate, VoteResponse, VoteStatusResponse

__all__ = [
    "AcceptResponse", "AnswerCreate", "AnswerResponse", "AnswerUpdate",
    "ErrorResponse", "Page",
    "BanCreate", "DashboardResponse", "ModerationStatusResponse", "ReportCreate", "ReportResponse",
    "ReportReview", "SuspensionCreate", "WarningCreate",
    "MarkAllReadResponse", "NotificationResponse", "UnreadCountResponse",
    "QuestionCreate", "QuestionDetailResponse", "QuestionResponse", "QuestionUpdate",
    "TrendingQuestionResponse",
    "UserResponse", "UserStatsResponse",
    "VoteCreate", "VoteResponse", "VoteStatusResponse",
]
