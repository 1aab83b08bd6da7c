"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Schema for user information returned by the API."""

    id: int
    name: str
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserStatsResponse(BaseModel):
    questions_count: int
    answers_count: int
    total_upvotes: int
    accepted_answers: int
    reputation: int

    model_config = ConfigDict(from_attributes=True)
