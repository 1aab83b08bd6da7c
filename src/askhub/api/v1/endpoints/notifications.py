"""Notification endpoints for the current user."""

from fastapi import APIRouter, Query

from askhub.api.v1.dependencies import CurrentUserDep, SessionDep
from askhub.core.settings import settings
from askhub.schemas.common import Page
from askhub.schemas.notification import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from askhub.services.notifications import (
    list_notifications,
    mark_all_as_read,
    mark_as_read,
    unread_count,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=Page[NotificationResponse])
def get_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    unread_only: bool = Query(False),
    limit: int = Query(settings.default_page_size, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> Page[NotificationResponse]:
    """List the caller's notifications, newest first."""
    items, total = list_notifications(
        db, current_user.id, unread_only=unread_only, limit=limit, offset=offset
    )
    return Page[NotificationResponse](
        items=[NotificationResponse.model_validate(item) for item in items],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(current_user: CurrentUserDep, db: SessionDep) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=unread_count(db, current_user.id))


@router.patch("/read-all", response_model=MarkAllReadResponse)
def read_all(current_user: CurrentUserDep, db: SessionDep) -> MarkAllReadResponse:
    return MarkAllReadResponse(updated=mark_all_as_read(db, current_user.id))


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
def read_one(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> NotificationResponse:
    notification = mark_as_read(db, notification_id, current_user.id)
    return NotificationResponse.model_validate(notification)
