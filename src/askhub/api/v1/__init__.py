"""Version 1 API endpoints."""

from .endpoints import (
    answers_router,
    moderation_router,
    notifications_router,
    questions_router,
    users_router,
)

__all__ = [
    "answers_router",
    "moderation_router",
    "notifications_router",
    "questions_router",
    "users_router",
]
