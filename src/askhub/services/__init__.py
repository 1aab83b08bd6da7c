"""Business logic services for the AskHub application."""

from .acceptance import AcceptOutcome, accept_answer
from .auto_moderation import ContentAnalysis, analyze_content, auto_flag_content
from .moderation import check_user_status, review_report, submit_report
from .notifications import NotificationDispatcher, notify
from .votes import VoteAction, VoteOutcome, cast_vote

__all__ = [
    "AcceptOutcome", "accept_answer",
    "ContentAnalysis", "analyze_content", "auto_flag_content",
    "check_user_status", "review_report", "submit_report",
    "NotificationDispatcher", "notify",
    "VoteAction", "VoteOutcome", "cast_vote",
]
