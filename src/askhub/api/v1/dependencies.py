"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from askhub.core.errors import ForbiddenError
from askhub.core.security import decode_subject
from askhub.db.session import SessionLocal, get_db
from askhub.models import User
from askhub.services.moderation import check_user_status
from askhub.services.notifications import NotificationDispatcher

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        user_id = decode_subject(credentials.credentials)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_active_user(current_user: CurrentUserDep, db: SessionDep) -> User:
    """Current user, rejected when banned or inside a live suspension.

    Every mutating route depends on this rather than on ``get_current_user``.
    """
    check_user_status(db, current_user.id)
    return current_user


ActiveUserDep = Annotated[User, Depends(get_active_user)]


def get_admin_user(current_user: ActiveUserDep) -> User:
    """Active user holding the admin role."""
    if not current_user.is_admin:
        raise ForbiddenError("Access denied. Insufficient permissions")
    return current_user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def get_notification_dispatcher() -> NotificationDispatcher:
    """Return a dispatcher that opens its own sessions."""
    return NotificationDispatcher(SessionLocal)


DispatcherDep = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]
