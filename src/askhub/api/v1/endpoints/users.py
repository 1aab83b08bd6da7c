"""User profile and statistics endpoints."""

from fastapi import APIRouter

from askhub.api.v1.dependencies import CurrentUserDep, SessionDep
from askhub.core.errors import NotFoundError
from askhub.models import User
from askhub.schemas.user import UserResponse, UserStatsResponse
from askhub.services.stats import user_stats

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_me(current_user: CurrentUserDep) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.get("/me/stats", response_model=UserStatsResponse)
def get_my_stats(current_user: CurrentUserDep, db: SessionDep) -> UserStatsResponse:
    """Activity counters and reputation for the caller."""
    return UserStatsResponse.model_validate(user_stats(db, current_user.id))


@router.get("/{user_id}/stats", response_model=UserStatsResponse)
def get_user_stats(user_id: int, db: SessionDep) -> UserStatsResponse:
    """Public activity counters and reputation for any user."""
    if db.get(User, user_id) is None:
        raise NotFoundError("User not found")
    return UserStatsResponse.model_validate(user_stats(db, user_id))
