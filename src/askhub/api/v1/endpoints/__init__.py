"""API endpoint modules for version 1."""

from .answers import router as answers_router
from .moderation import router as moderation_router
from .notifications import router as notifications_router
from .questions import router as questions_router
from .users import router as users_router

__all__ = [
    "answers_router",
    "moderation_router",
    "notifications_router",
    "questions_router",
    "users_router",
]
