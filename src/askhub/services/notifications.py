"""Notification fan-out and the notification read side."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from askhub.core.errors import NotFoundError
from askhub.db.session import atomic
from askhub.models import AdminAction, Notification, NotificationType
from askhub.services.events import (
    AnswerAccepted,
    AnswerPosted,
    AnswerUpvoted,
    DomainEvent,
    ReportReviewed,
)

logger = logging.getLogger(__name__)

__all__ = [
    "NotificationDispatcher",
    "list_notifications",
    "mark_all_as_read",
    "mark_as_read",
    "notify",
    "unread_count",
]


def notify(
    session: Session,
    recipient_id: int,
    notification_type: NotificationType | str,
    message: str,
    *,
    question_id: int | None = None,
    answer_id: int | None = None,
    from_user_id: int | None = None,
) -> Notification | None:
    """Persist a notification for ``recipient_id``.

    Returns None without writing when the recipient triggered the
    notification themselves. Persistence failures are logged and also
    yield None; they never reach the caller.
    """
    if from_user_id is not None and recipient_id == from_user_id:
        return None

    try:
        notification = Notification(
            user_id=recipient_id,
            type=NotificationType(notification_type).value,
            message=message,
            question_id=question_id,
            answer_id=answer_id,
            from_user_id=from_user_id,
        )
        with atomic(session):
            session.add(notification)
    except (ValueError, SQLAlchemyError):
        logger.exception(
            "Failed to create %s notification for user %s", notification_type, recipient_id
        )
        return None
    return notification


class NotificationDispatcher:
    """Turn committed domain events into notifications.

    Each dispatch runs in its own session so a failing notification can
    never touch the transaction that produced the event.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory

    def dispatch(self, events: Iterable[DomainEvent]) -> list[Notification]:
        """Deliver every event, skipping the ones that fail."""
        created: list[Notification] = []
        for event in events:
            try:
                notification = self._deliver(event)
            except Exception:
                logger.exception("Notification dispatch failed for %s", type(event).__name__)
                continue
            if notification is not None:
                created.append(notification)
        return created

    def _deliver(self, event: DomainEvent) -> Notification | None:
        session = self.session_factory()
        try:
            notification = self._notify_for(session, event)
            if notification is not None:
                session.refresh(notification)
                session.expunge(notification)
            return notification
        finally:
            session.close()

    @staticmethod
    def _notify_for(session: Session, event: DomainEvent) -> Notification | None:
        if isinstance(event, AnswerPosted):
            return notify(
                session,
                event.question_owner_id,
                NotificationType.ANSWER,
                f'Someone answered your question "{event.question_title}"',
                question_id=event.question_id,
                answer_id=event.answer_id,
                from_user_id=event.actor_id,
            )
        if isinstance(event, AnswerUpvoted):
            return notify(
                session,
                event.answer_owner_id,
                NotificationType.ANSWER_UPVOTE,
                "Someone upvoted your answer",
                question_id=event.question_id,
                answer_id=event.answer_id,
                from_user_id=event.actor_id,
            )
        if isinstance(event, AnswerAccepted):
            return notify(
                session,
                event.answer_owner_id,
                NotificationType.ACCEPTED_ANSWER,
                f'Your answer was accepted for "{event.question_title}"',
                question_id=event.question_id,
                answer_id=event.answer_id,
                from_user_id=event.actor_id,
            )
        if isinstance(event, ReportReviewed):
            if event.action == AdminAction.CONTENT_DELETED:
                return notify(
                    session,
                    event.content_owner_id,
                    NotificationType.CONTENT_REMOVED,
                    f"Your {event.report_type} was removed by a moderator",
                    from_user_id=event.actor_id,
                )
            if event.action == AdminAction.USER_BANNED:
                return notify(
                    session,
                    event.content_owner_id,
                    NotificationType.ACCOUNT_BANNED,
                    "Your account has been banned",
                    from_user_id=event.actor_id,
                )
            return None
        logger.debug("No notification mapping for %s", type(event).__name__)
        return None


def list_notifications(
    session: Session,
    user_id: int,
    *,
    unread_only: bool = False,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Notification], int]:
    """Return a page of notifications, newest first, and the matching total."""
    conditions = [Notification.user_id == user_id]
    if unread_only:
        conditions.append(Notification.is_read.is_(False))

    items = session.scalars(
        select(Notification)
        .where(*conditions)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(offset)
        .limit(limit)
    ).all()
    total = session.scalar(select(func.count()).select_from(Notification).where(*conditions))
    return list(items), int(total or 0)


def unread_count(session: Session, user_id: int) -> int:
    """Count unread notifications straight from the table."""
    count = session.scalar(
        select(func.count())
        .select_from(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
    )
    return int(count or 0)


def mark_as_read(session: Session, notification_id: int, user_id: int) -> Notification:
    """Mark one of the caller's notifications as read."""
    with atomic(session):
        notification = session.scalars(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
        ).first()
        if notification is None:
            raise NotFoundError("Notification not found")
        notification.is_read = True
    return notification


def mark_all_as_read(session: Session, user_id: int) -> int:
    """Mark every unread notification of the caller as read."""
    with atomic(session):
        result = session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        updated = int(result.rowcount or 0)
    return updated
