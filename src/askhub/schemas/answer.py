"""Answer-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnswerCreate(BaseModel):
    """Schema for posting an answer."""

    body: str = Field(..., min_length=1, max_length=20000)


class AnswerUpdate(AnswerCreate):
    """Schema for editing an answer."""


class AnswerResponse(BaseModel):
    """Schema for answer information returned by the API."""

    id: int
    question_id: int
    owner_id: int
    body: str
    votes: int
    is_accepted: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AcceptResponse(BaseModel):
    answer: AnswerResponse
    changed: bool
